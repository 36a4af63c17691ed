import uvicorn

from newsletter.core.config import get_settings
from newsletter.core.telemetry import init_telemetry
from newsletter.startup import create_app

settings = get_settings()
logger = init_telemetry(settings)

app = create_app(settings, logger=logger)


def run():
    uvicorn.run(
        app,
        host=settings.APPLICATION_HOST,
        port=settings.APPLICATION_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
