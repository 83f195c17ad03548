# movieshelf/models/director.py
"""Director model - created on first reference by a movie, removed with its last movie"""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from ..database import Base


class Director(Base):
    __tablename__ = "directors"

    id = Column(Integer, primary_key=True, index=True)
    # Unique so that concurrent find-or-create cannot produce duplicates
    director = Column(String(255), unique=True, nullable=False, index=True)

    # Relationships
    movies = relationship("Movie", back_populates="director")

    def __repr__(self):
        return f"<Director(id={self.id}, director={self.director})>"
