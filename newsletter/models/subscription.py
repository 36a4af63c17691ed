import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Text, Uuid

from newsletter.models import Base


class Subscription(Base):
    __tablename__ = "subscriptions"

    id = Column(Uuid(as_uuid=True), primary_key=True)
    email = Column(Text, nullable=False)
    name = Column(Text, nullable=False)
    subscribed_at = Column(DateTime(timezone=True), nullable=False)

    @classmethod
    def generate_id(cls) -> uuid.UUID:
        """Generate a fresh identifier for a new subscription."""
        return uuid.uuid4()

    @classmethod
    def now(cls) -> datetime:
        return datetime.now(timezone.utc)

    def __repr__(self):
        return f"<Subscription(id={self.id}, email={self.email}, subscribed_at={self.subscribed_at})>"
