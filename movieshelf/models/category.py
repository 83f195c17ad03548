# movieshelf/models/category.py
"""Category model - Groups movies by type (Action, Drama, Comedy, etc)"""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from ..database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    category = Column(String(255), unique=True, nullable=False, index=True)

    # Relationships
    movies = relationship("Movie", back_populates="category")

    def __repr__(self):
        return f"<Category(id={self.id}, category={self.category})>"
