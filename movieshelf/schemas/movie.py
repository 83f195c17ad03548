from pydantic import BaseModel, Field
from typing import Optional

class MoviePayload(BaseModel):
    """
    Body of POST /movies and PUT /edit/{id}.

    Every field is optional here; the presence of title, director and
    categoryId is checked by the application so a missing field is a
    400 with a readable message rather than a 422.
    """
    title: Optional[str] = None
    director: Optional[str] = None
    category_id: Optional[int] = Field(default=None, alias="categoryId")
    year: Optional[int] = None
    rating: Optional[float] = None
    review: Optional[str] = None
    image: Optional[str] = None

    class Config:
        populate_by_name = True

    def supplied_fields(self) -> dict:
        """Fields present in the request body, keyed by attribute name"""
        return self.model_dump(exclude_unset=True)

class MovieBase(BaseModel):
    title: str
    slug: str
    year: Optional[int] = None
    rating: Optional[float] = None
    review: Optional[str] = None
    image: Optional[str] = None
    director_id: int
    category_id: int
    custom_order: Optional[int] = None

class Movie(MovieBase):
    id: int

    class Config:
        from_attributes = True

class MovieEnriched(Movie):
    director: str
    category: str

class MovieWriteResponse(BaseModel):
    message: str
    movie: Movie

class MessageResponse(BaseModel):
    message: str
