"""
Generic SQLAlchemy repository.

Each method is one store operation that commits on its own; there are no
transactions spanning several calls.
"""

from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blogql.core.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class SQLAlchemyRepository(Generic[ModelType]):
    """Keyed lookups, inserts, updates and deletes for one model."""

    model: Type[ModelType]

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, id: int) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    def list(self) -> List[ModelType]:
        return self.db.query(self.model).order_by(self.model.id).all()

    def create(self, **fields: Any) -> ModelType:
        db_obj = self.model(**fields)
        self.db.add(db_obj)
        self._commit()
        # Refresh to load store-assigned fields (id, timestamps)
        self.db.refresh(db_obj)
        return db_obj

    def update(self, db_obj: ModelType, **fields: Any) -> ModelType:
        for field, value in fields.items():
            setattr(db_obj, field, value)
        self.db.add(db_obj)
        self._commit()
        self.db.refresh(db_obj)
        return db_obj

    def delete(self, db_obj: ModelType) -> None:
        self.db.delete(db_obj)
        self._commit()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            # Leave the session usable for the rest of the request
            self.db.rollback()
            raise
