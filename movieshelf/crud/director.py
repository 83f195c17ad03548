from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from ..crud.base import CRUDBase, atomic
from ..crud.exceptions import DuplicateDirector, ValidationError
from ..models.director import Director
from ..models.movie import Movie
from ..schemas.director import DirectorCreate
import logging

logger = logging.getLogger(__name__)

class CRUDDirector(CRUDBase[Director, DirectorCreate, DirectorCreate]):
    def get_by_name(self, db: Session, *, name: str) -> Optional[Director]:
        return db.query(Director).filter(Director.director == name).first()

    def resolve(self, db: Session, *, name: str) -> int:
        """
        Find-or-create a director by exact name and return its id.

        The insert runs in a savepoint. If the unique constraint on the
        name fires, another writer created the row first and that row
        is returned instead. Does not commit.
        """
        existing = self.get_by_name(db, name=name)
        if existing:
            return existing.id

        try:
            with db.begin_nested():
                created = self.create(db, obj_in={"director": name})
        except IntegrityError:
            existing = self.get_by_name(db, name=name)
            if existing is None:
                raise
            logger.info(f"Director '{name}' was created concurrently, reusing id={existing.id}")
            return existing.id

        logger.info(f"Director created: {name} (id={created.id})")
        return created.id

    def create_named(self, db: Session, *, name: Optional[str]) -> Director:
        """Explicit director creation (POST /directors)"""
        if not name or not name.strip():
            raise ValidationError("director", "Director")
        try:
            with atomic(db):
                director = self.create(db, obj_in={"director": name})
        except IntegrityError:
            raise DuplicateDirector()
        return director

    def is_referenced(self, db: Session, *, director_id: int) -> bool:
        return (
            db.query(Movie.id).filter(Movie.director_id == director_id).first()
            is not None
        )

    def delete_if_orphaned(self, db: Session, *, director_id: int) -> bool:
        """Delete the director when no movie references it any more. Does not commit."""
        if self.is_referenced(db, director_id=director_id):
            return False
        self.remove_by_id(db, id=director_id)
        logger.info(f"Orphaned director removed: id={director_id}")
        return True

director = CRUDDirector(Director)
