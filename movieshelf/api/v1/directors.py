from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ...crud.director import director as crud_director
from ...crud.exceptions import MovieShelfError
from ...database import get_db
from ...schemas.director import Director, DirectorCreate
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/directors", tags=["directors"])


@router.get("", response_model=List[Director], status_code=status.HTTP_200_OK)
def list_directors(db: Session = Depends(get_db)):
    """Get all directors"""
    try:
        return crud_director.get_multi(db)
    except Exception as e:
        logger.error(f"Error fetching directors: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.post("", response_model=Director, status_code=status.HTTP_201_CREATED)
def create_director(director_data: DirectorCreate, db: Session = Depends(get_db)):
    """Create a director without a movie"""
    try:
        director = crud_director.create_named(db, name=director_data.director)
        logger.info(f"Director created: {director.director}")
        return director
    except MovieShelfError:
        raise
    except Exception as e:
        logger.error(f"Error creating director: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")
