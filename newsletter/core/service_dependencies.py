import logging

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from newsletter.core.database import get_db
from newsletter.core.telemetry import get_logger
from newsletter.repositories.unit_of_work import SqlAlchemyUnitOfWork
from newsletter.services.subscription_service import SubscriptionService


async def get_subscription_service(
    db: AsyncSession = Depends(get_db),
    logger: logging.Logger = Depends(get_logger),
) -> SubscriptionService:
    """Dependency to provide SubscriptionService."""
    uow = SqlAlchemyUnitOfWork(db)
    return SubscriptionService(uow, logger)
