from abc import ABC
from typing import Any, Dict, Generic, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository class holding the session and model shared by all
    repositories.
    """

    def __init__(self, db: AsyncSession, model: Type[ModelType]):
        self.db = db
        self.model = model

    async def add(self, obj_data: Dict[str, Any]) -> ModelType:
        """Insert a new record without reading it back."""
        obj = self.model(**obj_data)
        self.db.add(obj)
        await self.db.flush()
        return obj
