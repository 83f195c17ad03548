from sqlalchemy.orm import Session
from ..crud.base import CRUDBase
from ..crud.exceptions import CategoryNotFound
from ..models.category import Category
from ..schemas.category import CategoryCreate

class CRUDCategory(CRUDBase[Category, CategoryCreate, CategoryCreate]):
    def resolve(self, db: Session, *, category_id: int, detail: str = None) -> int:
        """Return the id of an existing category. Categories are never created here."""
        category = self.get(db, category_id)
        if category is None:
            raise CategoryNotFound(detail)
        return category.id

category = CRUDCategory(Category)
