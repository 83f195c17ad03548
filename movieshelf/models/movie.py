# movieshelf/models/movie.py
"""
Movie model

Each movie references exactly one director and one category.
The slug is derived from the title and is not unique.
"""
from sqlalchemy import Column, Integer, String, Text, Float, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base


class Movie(Base):
    __tablename__ = "movies"

    # ==================== PRIMARY KEY ====================
    id = Column(Integer, primary_key=True, index=True)

    # ==================== BASIC INFO ====================
    title = Column(String(255), nullable=False, index=True)
    slug = Column(String(255), nullable=False, index=True)
    year = Column(Integer, nullable=True)
    rating = Column(Float, nullable=True)
    review = Column(Text, nullable=True)
    image = Column(String(500), nullable=True)

    # ==================== RELATIONS ====================
    director_id = Column(Integer, ForeignKey('directors.id'), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey('categories.id'), nullable=False, index=True)

    # ==================== ORDERING ====================
    custom_order = Column(Integer, nullable=True, index=True)

    director = relationship("Director", back_populates="movies")
    category = relationship("Category", back_populates="movies")

    def __repr__(self):
        return f"<Movie(id={self.id}, title={self.title})>"
