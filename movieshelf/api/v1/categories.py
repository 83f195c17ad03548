from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ...crud.category import category as crud_category
from ...database import get_db
from ...schemas.category import Category
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[Category], status_code=status.HTTP_200_OK)
def list_categories(db: Session = Depends(get_db)):
    """Get all categories"""
    try:
        categories = crud_category.get_multi(db)
        logger.info(f"Found {len(categories)} categories")
        return categories
    except Exception as e:
        logger.error(f"Error fetching categories: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Server Error")
