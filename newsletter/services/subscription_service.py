import logging
from typing import Optional

import logfire
from sqlalchemy.exc import SQLAlchemyError

from newsletter.core.exceptions import SubscriptionPersistenceError
from newsletter.models.subscription import Subscription
from newsletter.repositories.unit_of_work import AbstractUnitOfWork
from newsletter.schemas.subscription import SubscriptionForm

# asyncpg raises connection failures as plain OSError, unwrapped by SQLAlchemy
PERSISTENCE_ERRORS = (SQLAlchemyError, OSError)


class SubscriptionService:
    """Service for newsletter subscription business logic."""

    def __init__(self, uow: AbstractUnitOfWork, logger: Optional[logging.Logger] = None):
        self.uow = uow
        self.logger = logger or logging.getLogger(__name__)

    async def subscribe(self, form: SubscriptionForm) -> Subscription:
        """
        Persist a new subscriber.

        A fresh id and UTC timestamp are generated and a single row is
        inserted and committed. Every database failure, whatever its kind,
        surfaces as SubscriptionPersistenceError.
        """
        with logfire.span("Saving new subscriber details in the database"):
            try:
                subscription = await self.uow.subscriptions.insert_subscription(
                    id=Subscription.generate_id(),
                    email=form.email,
                    name=form.name,
                    subscribed_at=Subscription.now(),
                )
                await self.uow.commit()
            except PERSISTENCE_ERRORS as e:
                self.logger.error(f"Failed to execute query: {e}")
                await self._rollback_quietly()
                raise SubscriptionPersistenceError() from e

        self.logger.debug(f"Saved subscription {subscription.id}")
        return subscription

    async def _rollback_quietly(self):
        try:
            await self.uow.rollback()
        except PERSISTENCE_ERRORS as e:
            self.logger.error(f"Rollback after failed insert also failed: {e}")
