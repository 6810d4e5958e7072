"""
API endpoints для работы с категориями товаров.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.db.database import get_db
from storefront.schemas.category import CategoryOut
from storefront.services import catalog

router = APIRouter()


@router.get("", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    """
    Получить список всех категорий с кэшированием.

    Кэш сбрасывается при создании, изменении и удалении категорий.

    Example:
        [
            {"id": 1, "name": "Sneakers", "description": "Everyday sneakers"},
            {"id": 2, "name": "Boots", "description": null}
        ]
    """
    return catalog.cached_categories(db)
