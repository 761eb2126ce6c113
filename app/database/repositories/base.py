"""
Base repository for common database operations
"""
import logging
from typing import Generic, TypeVar, Optional, Type, Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.models.base import BaseModel
from app.exceptions import ConflictError

T = TypeVar("T", bound=BaseModel)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Base repository with CRUD operations

    Provides common database operations for all models.
    """

    def __init__(self, model: Type[T], session: AsyncSession):
        """
        Initialize repository with model and session

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    async def save(self, obj: T) -> T:
        """
        Persist a new or modified record and commit

        Args:
            obj: Model instance

        Returns:
            Refreshed model instance

        Raises:
            ConflictError: If a unique constraint is violated
        """
        self.session.add(obj)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Integrity error on {self.model.__name__} save: {e.orig}")
            raise ConflictError(f"{self.model.__name__} violates a uniqueness constraint")
        await self.session.refresh(obj)
        return obj

    async def get_by_id(self, id: str) -> Optional[T]:
        """
        Get record by ID

        Args:
            id: Record ID

        Returns:
            Model instance or None if not found
        """
        stmt = select(self.model).where(self.model.id == id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def exists(self, **filters: Any) -> bool:
        """
        Check if a record matching filters exists

        Args:
            **filters: Field filters

        Returns:
            True if record exists
        """
        stmt = select(self.model.id)
        for key, value in filters.items():
            stmt = stmt.where(getattr(self.model, key) == value)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None
