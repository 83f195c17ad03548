from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, List, Optional, Type, TypeVar, Union
from pydantic import BaseModel
from sqlalchemy.orm import Session
from ..database import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """
    Run a group of statements as one transaction.

    Commits when the block exits normally, rolls everything back and
    re-raises otherwise.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    def __init__(self, model: Type[ModelType]):
        """
        CRUD object with default methods to Create, Read, Update (R, U).

        **Parameters**

        * `model`: A SQLAlchemy model class
        """
        self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.query(self.model).filter(self.model.id == id).first()

    def get_multi(self, db: Session) -> List[ModelType]:
        return db.query(self.model).order_by(self.model.id).all()

    def create(self, db: Session, *, obj_in: Union[CreateSchemaType, Dict[str, Any]]) -> ModelType:
        """Add a row and flush it so the generated id is available. Does not commit."""
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        db_obj = self.model(**data)
        db.add(db_obj)
        db.flush()
        return db_obj

    def update_by_id(
        self, db: Session, *, id: Any, obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> int:
        """Update only the given columns of the row with this id. Returns matched row count."""
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        return (
            db.query(self.model)
            .filter(self.model.id == id)
            .update(data, synchronize_session=False)
        )

    def remove_by_id(self, db: Session, *, id: Any) -> int:
        return (
            db.query(self.model)
            .filter(self.model.id == id)
            .delete(synchronize_session=False)
        )
