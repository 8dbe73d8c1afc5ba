"""
Base repository class with the shared insert and lookup paths using async SQLAlchemy.
Every public operation issues one statement; failures surface as RepositoryError.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select
from sqlalchemy.engine import Result
from sqlalchemy.sql import Executable
from app.database import Base
from app.utils.exceptions import RepositoryError
from typing import TypeVar, Generic, Optional, Dict, Any, Type
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing insert and lookup operations.
    Bound to one model class and one injected session.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository with model class and database session.

        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    async def _rollback(self, operation: str) -> None:
        # A failed rollback must not replace the error that triggered it
        try:
            await self.db.rollback()
        except SQLAlchemyError as e:
            logger.warning(f"Rollback after failed {operation} also failed: {e}")

    async def execute(
        self,
        operation: str,
        statement: Executable
    ) -> Result:
        """
        Execute a read statement.

        Args:
            operation: Name used in logs and in the raised error
            statement: SQLAlchemy statement or text() clause with its values bound

        Returns:
            The buffered result

        Raises:
            RepositoryError: If the statement fails
        """
        try:
            return await self.db.execute(statement)
        except SQLAlchemyError as e:
            await self._rollback(operation)
            logger.error(f"{operation} failed: {e}")
            raise RepositoryError(operation, str(e)) from e

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Insert a new row and return it with generated values loaded.

        Args:
            obj_in: Dictionary of column values for the new row

        Returns:
            Created model instance

        Raises:
            RepositoryError: If the insert fails
        """
        operation = f"create {self.model.__name__.lower()}"
        try:
            db_obj = self.model(**obj_in)
            self.db.add(db_obj)
            await self.db.commit()
            await self.db.refresh(db_obj)
            logger.debug(f"Created {self.model.__name__} with id: {db_obj.id}")
            return db_obj
        except SQLAlchemyError as e:
            await self._rollback(operation)
            logger.error(f"Failed to create {self.model.__name__}: {e}")
            raise RepositoryError(operation, str(e)) from e

    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """
        Get a row by its primary key.

        Args:
            id: Primary key of the row

        Returns:
            Model instance if found, None otherwise
        """
        return await self.get_by_field("id", id)

    async def get_by_field(self, field: str, value: Any) -> Optional[ModelType]:
        """
        Get the first row whose column equals a value.

        Args:
            field: Column name to search by
            value: Value to search for

        Returns:
            Model instance if found, None otherwise
        """
        if not hasattr(self.model, field):
            raise ValueError(f"Field '{field}' does not exist on {self.model.__name__}")

        query = select(self.model).where(getattr(self.model, field) == value).limit(1)
        result = await self.execute(f"get {self.model.__name__.lower()} by {field}", query)
        obj = result.scalars().first()

        if obj:
            logger.debug(f"Retrieved {self.model.__name__} by {field}: {value}")
        else:
            logger.debug(f"{self.model.__name__} with {field}={value} not found")

        return obj
