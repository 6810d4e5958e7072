"""
API endpoints для списка брендов витрины.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.db.database import get_db
from storefront.schemas.brand import BrandOut
from storefront.services import catalog

router = APIRouter()


@router.get("", response_model=List[BrandOut])
def list_brands(db: Session = Depends(get_db)):
    """Получить список брендов, отсортированный по названию (с кэшированием)."""
    return catalog.cached_brands(db)
