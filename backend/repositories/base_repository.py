"""
Base repository providing common persistence operations.
"""

from typing import Generic, TypeVar, Optional, Type
from sqlalchemy.orm import Session

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """
    Generic base repository over a single SQLAlchemy model.

    Repositories flush but never commit; the caller owns the transaction.
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def add(self, obj: T) -> T:
        """
        Stage a new row and flush so generated keys are populated.

        Args:
            obj: Model instance to insert

        Returns:
            The same instance, with its primary key set
        """
        self.db.add(obj)
        self.db.flush()
        return obj

    def get_row(self, id: str, for_update: bool = False) -> Optional[T]:
        """
        Retrieve a row by its primary key.

        Args:
            id: Primary key value
            for_update: Lock the row for the rest of the transaction

        Returns:
            Model instance or None if not found
        """
        query = self.db.query(self.model).filter(self.model.id == id)
        if for_update:
            query = query.with_for_update()
        return query.first()
