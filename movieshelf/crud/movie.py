from typing import Any, Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from ..crud.base import CRUDBase, atomic
from ..crud.category import category as crud_category
from ..crud.director import director as crud_director
from ..crud.exceptions import DuplicateMovie, NotFound, ValidationError
from ..models.category import Category
from ..models.director import Director
from ..models.movie import Movie
from ..schemas.movie import MoviePayload
from ..utils.slug import slugify
import logging

logger = logging.getLogger(__name__)

# (attribute, label) in the order they are checked
REQUIRED_FIELDS = (
    ("title", "Title"),
    ("director", "Director"),
    ("category_id", "Category Id"),
)

# Columns a partial update may touch besides director/category
UPDATABLE_FIELDS = ("year", "rating", "review", "image")


def require_movie_fields(fields: Dict[str, Any]) -> None:
    """Raise ValidationError for the first required field that is missing or empty"""
    for name, label in REQUIRED_FIELDS:
        value = fields.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(name, label)


def movie_to_dict(movie: Movie) -> dict:
    return {
        "id": movie.id,
        "title": movie.title,
        "year": movie.year,
        "rating": movie.rating,
        "review": movie.review,
        "image": movie.image,
        "slug": movie.slug,
        "director_id": movie.director_id,
        "category_id": movie.category_id,
        "custom_order": movie.custom_order,
    }


def enrich(movie: Movie, director_name: str, category_name: str) -> dict:
    """Movie row joined with its director's and category's display names"""
    data = movie_to_dict(movie)
    data["director"] = director_name
    data["category"] = category_name
    return data


class CRUDMovie(CRUDBase[Movie, MoviePayload, MoviePayload]):
    def _enriched_query(self, db: Session):
        return (
            db.query(Movie, Director.director, Category.category)
            .join(Director, Director.id == Movie.director_id)
            .join(Category, Category.id == Movie.category_id)
        )

    def list_enriched(self, db: Session) -> List[dict]:
        rows = (
            self._enriched_query(db)
            .order_by(Movie.custom_order.asc(), Movie.id.asc())
            .all()
        )
        return [enrich(*row) for row in rows]

    def get_enriched(self, db: Session, *, movie_id: int) -> dict:
        row = self._enriched_query(db).filter(Movie.id == movie_id).first()
        if row is None:
            raise NotFound()
        return enrich(*row)

    def get_enriched_by_slug(self, db: Session, *, slug: str) -> dict:
        row = (
            self._enriched_query(db)
            .filter(Movie.slug == slug)
            .order_by(Movie.id.asc())
            .first()
        )
        if row is None:
            raise NotFound()
        return enrich(*row)

    def find_duplicate(
        self, db: Session, *, title: str, director_id: int, category_id: int
    ) -> Optional[Movie]:
        return (
            db.query(Movie)
            .filter(func.lower(Movie.title) == title.lower())
            .filter(Movie.director_id == director_id)
            .filter(Movie.category_id == category_id)
            .first()
        )

    def next_custom_order(self, db: Session) -> int:
        current = db.query(func.max(Movie.custom_order)).scalar()
        return (current or 0) + 1

    def create_movie(self, db: Session, *, fields: Dict[str, Any]) -> Movie:
        """
        Insert a movie, creating its director on first use.

        Everything runs in one transaction: a rejected category or a
        duplicate leaves no new director behind.
        """
        require_movie_fields(fields)
        title = fields["title"]

        with atomic(db):
            director_id = crud_director.resolve(db, name=fields["director"])
            category_id = crud_category.resolve(db, category_id=fields["category_id"])

            if self.find_duplicate(
                db, title=title, director_id=director_id, category_id=category_id
            ):
                raise DuplicateMovie()

            movie = self.create(
                db,
                obj_in={
                    "title": title,
                    "slug": slugify(title),
                    "year": fields.get("year"),
                    "rating": fields.get("rating"),
                    "review": fields.get("review"),
                    "image": fields.get("image"),
                    "director_id": director_id,
                    "category_id": category_id,
                    "custom_order": self.next_custom_order(db),
                },
            )

        logger.info(f"Movie created: {movie.title} (id={movie.id})")
        return movie

    def build_update(
        self, fields: Dict[str, Any], *, director_id: int, category_id: int
    ) -> Dict[str, Any]:
        """
        Columns to write for an edit: only the supplied fields, a fresh
        slug whenever the title is supplied, and always the director
        and category.
        """
        values: Dict[str, Any] = {}
        if "title" in fields:
            values["slug"] = slugify(fields["title"])
            values["title"] = fields["title"]
        for name in UPDATABLE_FIELDS:
            if name in fields:
                values[name] = fields[name]
        values["director_id"] = director_id
        values["category_id"] = category_id
        return values

    def update_movie(self, db: Session, *, movie_id: int, fields: Dict[str, Any]) -> Movie:
        require_movie_fields(fields)

        with atomic(db):
            director_id = crud_director.resolve(db, name=fields["director"])
            category_id = crud_category.resolve(
                db, category_id=fields["category_id"], detail="Invalid category Id"
            )
            values = self.build_update(
                fields, director_id=director_id, category_id=category_id
            )
            if self.update_by_id(db, id=movie_id, obj_in=values) == 0:
                raise NotFound()

        movie = self.get(db, movie_id)
        db.refresh(movie)
        logger.info(f"Movie updated: {movie.title} (id={movie.id})")
        return movie

    def delete_movie(self, db: Session, *, movie_id: int) -> None:
        """
        Delete a movie, then its director if no other movie uses it.

        The director id is read before the movie row goes away and the
        reference check runs after the delete has been flushed.
        """
        with atomic(db):
            movie = self.get(db, movie_id)
            if movie is None:
                raise NotFound("Movie is not found")
            director_id = movie.director_id

            db.delete(movie)
            db.flush()

            crud_director.delete_if_orphaned(db, director_id=director_id)

        logger.info(f"Movie deleted: id={movie_id}")

movie = CRUDMovie(Movie)
