"""Base repository implementation for the scanlink application.

This module provides a generic BaseRepository class that follows the Repository pattern
for database operations, serving as a foundation for more specific repositories.
"""

from typing import Any, Dict, Generic, Optional, Type, TypeVar
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel

# Type variable for model types
T = TypeVar("T", bound=SQLModel)

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Base exception for repository errors."""
    pass


class ConstraintViolationError(RepositoryError):
    """Exception raised when an insert violates a table constraint.
    
    The original driver error is kept as ``__cause__`` so callers can
    tell which constraint failed.
    """
    
    def __init__(self, model_type: Type[SQLModel], values: Dict[str, Any]):
        self.model_type = model_type
        self.values = values
        model_name = getattr(model_type, "__name__", "Entity")
        super().__init__(f"{model_name} insert violates a constraint: {values}")


class BaseRepository(Generic[T]):
    """
    Base repository implementing common operations for SQLModel entities.
    
    Type parameters:
        T: The SQLModel type this repository manages
    """
    
    def __init__(self, model_type: Type[T]):
        """
        Initialize the repository with a specific model type.
        
        Args:
            model_type: The SQLModel class this repository will work with
        """
        self.model_type = model_type
    
    async def get_by_id(self, db: AsyncSession, id: Any) -> Optional[T]:
        """
        Get an entity by its primary key.
        
        Args:
            db: Database session
            id: Entity ID
            
        Returns:
            The entity if found, None otherwise
        """
        try:
            return await db.get(self.model_type, id)
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model_type.__name__} with id {id}: {e}")
            raise RepositoryError(f"Database error retrieving entity: {e}") from e
    
    async def create(self, db: AsyncSession, data: Dict[str, Any]) -> T:
        """
        Insert a new entity.
        
        The row is flushed immediately, so constraint checks happen
        inside this call as a single INSERT rather than a separate lookup.
        
        Args:
            db: Database session
            data: Column values for the new row
            
        Returns:
            The created entity
            
        Raises:
            ConstraintViolationError: On unique/not-null violations
            RepositoryError: On other database errors
        """
        try:
            entity = self.model_type(**data)
            db.add(entity)
            await db.flush()
            await db.refresh(entity)
            return entity
        except IntegrityError as e:
            raise ConstraintViolationError(self.model_type, data) from e
        except SQLAlchemyError as e:
            logger.error(f"Error creating {self.model_type.__name__}: {e}")
            raise RepositoryError(f"Database error creating entity: {e}") from e
    
    async def count(self, db: AsyncSession, *conditions) -> int:
        """
        Count entities matching the given conditions.
        
        Args:
            db: Database session
            *conditions: SQLAlchemy filter expressions
            
        Returns:
            Number of matching rows
        """
        try:
            query = select(func.count()).select_from(self.model_type)
            if conditions:
                query = query.where(*conditions)
            result = await db.execute(query)
            return result.scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Error counting {self.model_type.__name__} records: {e}")
            raise RepositoryError(f"Database error counting entities: {e}") from e
