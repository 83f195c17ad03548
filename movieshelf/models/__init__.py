from movieshelf.database import Base
from movieshelf.models.category import Category
from movieshelf.models.director import Director
from movieshelf.models.movie import Movie

# This ensures all models are registered with Base.metadata
__all__ = ["Base", "Category", "Director", "Movie"]
