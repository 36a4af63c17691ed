from sqlalchemy.orm import declarative_base

Base = declarative_base()

from .subscription import Subscription as Subscription  # noqa: E402
