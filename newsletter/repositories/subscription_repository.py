from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from newsletter.models.subscription import Subscription
from newsletter.repositories.base import BaseRepository


class SubscriptionRepository(BaseRepository[Subscription]):
    """Repository for Subscription model operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Subscription)

    async def insert_subscription(
        self, id: UUID, email: str, name: str, subscribed_at: datetime
    ) -> Subscription:
        """Insert a single subscription row."""
        return await self.add(
            {
                "id": id,
                "email": email,
                "name": name,
                "subscribed_at": subscribed_at,
            }
        )
