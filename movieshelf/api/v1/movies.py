from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ...crud.exceptions import MovieShelfError
from ...crud.movie import movie as crud_movie, movie_to_dict, require_movie_fields
from ...database import get_db
from ...schemas.movie import MessageResponse, MovieEnriched, MoviePayload, MovieWriteResponse
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["movies"])


@router.get("/movies", response_model=List[MovieEnriched], status_code=status.HTTP_200_OK)
def list_movies(db: Session = Depends(get_db)):
    """All movies with director and category names, in custom order"""
    try:
        movies = crud_movie.list_enriched(db)
        logger.info(f"Found {len(movies)} movies")
        return movies
    except Exception as e:
        logger.error(f"Database query error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/movies/slug/{slug}", response_model=MovieEnriched)
def get_movie_by_slug(slug: str, db: Session = Depends(get_db)):
    """Single movie by slug"""
    try:
        return crud_movie.get_enriched_by_slug(db, slug=slug)
    except MovieShelfError:
        raise
    except Exception as e:
        logger.error(f"Error fetching movie by slug {slug}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.get("/movies/{movie_id}", response_model=List[MovieEnriched])
def get_movie(movie_id: int, db: Session = Depends(get_db)):
    """Single movie by ID, wrapped in a one-element list"""
    try:
        return [crud_movie.get_enriched(db, movie_id=movie_id)]
    except MovieShelfError:
        raise
    except Exception as e:
        logger.error(f"Error fetching movie {movie_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Database Error")


@router.post("/movies", response_model=MovieWriteResponse, status_code=status.HTTP_201_CREATED)
def create_movie(payload: Optional[MoviePayload] = None, db: Session = Depends(get_db)):
    """Create a movie; the director is created on first use"""
    fields = payload.supplied_fields() if payload is not None else {}
    logger.debug(f"create_movie body: {fields}")
    require_movie_fields(fields)

    try:
        movie = crud_movie.create_movie(db, fields=fields)
        return {
            "message": "Movie successfully added",
            "movie": movie_to_dict(movie),
        }
    except MovieShelfError:
        raise
    except Exception as e:
        logger.error(f"Database insert error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.put("/edit/{movie_id}", response_model=MovieWriteResponse, status_code=status.HTTP_200_OK)
def update_movie(
    movie_id: int, payload: Optional[MoviePayload] = None, db: Session = Depends(get_db)
):
    """Partial update; only the supplied optional fields are written"""
    fields = payload.supplied_fields() if payload is not None else {}
    require_movie_fields(fields)

    try:
        movie = crud_movie.update_movie(db, movie_id=movie_id, fields=fields)
        return {
            "message": "Movie has been updated successfully",
            "movie": movie_to_dict(movie),
        }
    except MovieShelfError:
        raise
    except Exception as e:
        logger.error(f"Error while updating the movie {movie_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.delete("/delete/{movie_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_movie(movie_id: int, db: Session = Depends(get_db)):
    """Delete a movie and its director when no other movie uses it"""
    try:
        crud_movie.delete_movie(db, movie_id=movie_id)
        return {"message": "Movie and unused director successfully deleted"}
    except MovieShelfError:
        raise
    except Exception as e:
        logger.error(f"Error while deleting movie {movie_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")
