"""
API endpoints витрины для работы с товарами.

Сетка товаров с фильтрацией, сортировкой и бесконечной прокруткой,
границы цен, слайдер, детальная страница и похожие товары.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.db.database import get_db
from storefront.schemas.product import PriceRange, ProductCard, ProductDetail, ProductPage
from storefront.services import catalog
from storefront.services.cache import query_cache
from storefront.services.filter_state import FilterState

router = APIRouter()


def grid_filters(request: Request) -> FilterState:
    """Dependency: состояние фильтров сетки из строки запроса."""
    return catalog.with_grid_defaults(FilterState.from_query_params(request.query_params))


@router.get("", response_model=ProductPage)
def list_products(
    db: Session = Depends(get_db),
    state: FilterState = Depends(grid_filters),
    page: int = Query(1, ge=1, description="Номер страницы"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100, description="Размер страницы"),
):
    """
    Получить страницу сетки товаров.

    Фильтры читаются из строки запроса: search, sort (price/name/createdAt),
    order (asc/desc), category, size, sex, brand (значения через запятую),
    minPrice, maxPrice. Без категории в запросе показывается категория
    по умолчанию.

    Returns:
        ProductPage: Карточки товаров, номер следующей страницы (null - конец)
    """
    key = ("products", "list", state.to_query_string(), page, limit)
    return query_cache.get_or_load(key, lambda: catalog.list_products(db, state, page, limit))


@router.get("/prices", response_model=PriceRange)
def get_price_range(
    db: Session = Depends(get_db),
    state: FilterState = Depends(grid_filters),
):
    """
    Минимальная и максимальная цена товаров для слайдера цены.

    Учитывает поиск, категорию, размер и бренд; диапазон цены и пол
    не учитываются.
    """
    key = ("products", "prices", state.to_query_string())
    return query_cache.get_or_load(key, lambda: catalog.price_range(db, state))


@router.get("/slider", response_model=List[ProductCard])
def list_slider_products(db: Session = Depends(get_db)):
    """Товары, отмеченные для показа в слайдере главной страницы."""
    products = catalog.slider_products(db, settings.SLIDER_PRODUCTS_LIMIT)
    return [catalog.product_card(product) for product in products]


@router.get("/{product_id}", response_model=ProductDetail)
def get_product(product_id: str, db: Session = Depends(get_db)):
    """
    Получить товар по ID с заполненными брендом и категорией.

    Raises:
        NotFoundError: Если товар не найден (404)
    """
    return catalog.product_detail(catalog.get_product(db, product_id))


@router.get("/{product_id}/related", response_model=List[ProductCard])
def get_related_products(product_id: str, db: Session = Depends(get_db)):
    """Похожие товары; пустой список, если показывать нечего."""
    products = catalog.related_products(db, product_id, settings.RELATED_PRODUCTS_LIMIT)
    return [catalog.product_card(product) for product in products]
