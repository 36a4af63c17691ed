from fastapi import APIRouter, Response

router = APIRouter(tags=["health"])


@router.get("/health_check", include_in_schema=False)
async def health_check():
    """Liveness probe. Does not look at the database."""
    return Response(status_code=200)
