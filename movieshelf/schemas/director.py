from pydantic import BaseModel
from typing import Optional

class DirectorCreate(BaseModel):
    director: Optional[str] = None

class Director(BaseModel):
    id: int
    director: str

    class Config:
        from_attributes = True
