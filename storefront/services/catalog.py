"""
Запросы каталога для витрины.

Сетка товаров с фильтрацией, сортировкой и постраничной подгрузкой,
границы цен для слайдера, детальная страница и похожие товары.
"""

import logging
from typing import List, Optional

from sqlalchemy import and_, asc, desc, func, select
from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.core.errors import NotFoundError
from storefront.db.models import Brand, Category, Product, ProductSize
from storefront.schemas.brand import BrandOut
from storefront.schemas.category import CategoryOut
from storefront.schemas.pagination import PageMeta
from storefront.schemas.product import (
    EntityRef,
    PriceRange,
    ProductCard,
    ProductDetail,
    ProductPage,
)
from storefront.services.cache import query_cache
from storefront.services.filter_state import FilterState
from storefront.services.formatting import format_price

logger = logging.getLogger(__name__)

SORT_FIELDS = {
    "price": Product.price,
    "name": Product.name,
    "createdAt": Product.created_at,
}


def escape_like(text: str) -> str:
    """Экранировать спецсимволы LIKE, чтобы поиск шел по буквальному тексту."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def with_grid_defaults(state: FilterState) -> FilterState:
    """Сетка без выбранной категории показывает категорию по умолчанию."""
    if state.category or not settings.DEFAULT_GRID_CATEGORY:
        return state
    return state.model_copy(update={"category": [settings.DEFAULT_GRID_CATEGORY]})


def build_conditions(
    state: FilterState,
    include_price: bool = True,
    include_sex: bool = True,
) -> list:
    """
    Условия WHERE для выбранных фильтров.

    Args:
        state: Состояние фильтров
        include_price: Учитывать диапазон цены
        include_sex: Учитывать фильтр по полу

    Returns:
        list: Список условий SQLAlchemy
    """
    conditions = []
    if state.search:
        conditions.append(Product.name.ilike(f"%{escape_like(state.search)}%", escape="\\"))
    if state.category:
        conditions.append(
            Product.category_id.in_(select(Category.id).where(Category.name.in_(state.category)))
        )
    if state.brand:
        conditions.append(
            Product.brand_id.in_(select(Brand.id).where(Brand.name.in_(state.brand)))
        )
    if state.size:
        # Товар подходит, если у него есть хотя бы один из выбранных размеров
        conditions.append(
            Product.id.in_(select(ProductSize.product_id).where(ProductSize.value.in_(state.size)))
        )
    if include_sex and state.sex:
        conditions.append(Product.sex.in_(state.sex))
    if include_price and state.min_price is not None:
        conditions.append(Product.price >= state.min_price)
    if include_price and state.max_price is not None:
        conditions.append(Product.price <= state.max_price)
    return conditions


def _order_by(state: FilterState) -> list:
    column = SORT_FIELDS.get(state.sort)
    if column is None:
        # По умолчанию сначала новые
        return [desc(Product.created_at), asc(Product.id)]
    direction = desc if state.order == "desc" else asc
    return [direction(column), asc(Product.id)]


def list_products(db: Session, state: FilterState, page: int = 1, limit: int = 20) -> ProductPage:
    """
    Страница сетки товаров.

    Args:
        db: Сессия базы данных
        state: Состояние фильтров
        page: Номер страницы (начиная с 1)
        limit: Размер страницы

    Returns:
        ProductPage: Карточки товаров и номер следующей страницы
    """
    conditions = build_conditions(state)
    where_clause = and_(*conditions) if conditions else None

    count_stmt = select(func.count()).select_from(Product)
    stmt = select(Product)
    if where_clause is not None:
        count_stmt = count_stmt.where(where_clause)
        stmt = stmt.where(where_clause)
    total = db.scalar(count_stmt) or 0

    stmt = stmt.order_by(*_order_by(state)).offset((page - 1) * limit).limit(limit)
    products = db.scalars(stmt).all()

    meta = PageMeta.create(page=page, page_size=limit, total=total)
    logger.debug("Product grid page=%s total=%s query=%s", page, total, state.to_query_string())
    return ProductPage(
        data=[product_card(product) for product in products],
        page=page,
        next_page=meta.next_page,
        total=total,
        meta=meta,
    )


def price_range(db: Session, state: FilterState) -> PriceRange:
    """Минимальная и максимальная цена по фильтрам без учета цены и пола."""
    conditions = build_conditions(state, include_price=False, include_sex=False)
    stmt = select(func.min(Product.price), func.max(Product.price))
    if conditions:
        stmt = stmt.where(and_(*conditions))
    low, high = db.execute(stmt).one()
    return PriceRange(min_price=low or 0, max_price=high or 0)


def slider_products(db: Session, limit: int) -> List[Product]:
    stmt = (
        select(Product)
        .where(Product.show_in_slider.is_(True))
        .order_by(desc(Product.created_at), asc(Product.id))
        .limit(limit)
    )
    return list(db.scalars(stmt).all())


def get_product(db: Session, product_id: str) -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise NotFoundError("Product", product_id)
    return product


def related_products(db: Session, product_id: str, limit: int) -> List[Product]:
    """
    Похожие товары: доступные товары той же категории, кроме текущего.

    Для неизвестного товара или товара без категории возвращает пустой список,
    тогда блок похожих товаров не показывается.
    """
    product = db.get(Product, product_id)
    if product is None or product.category_id is None:
        return []
    stmt = (
        select(Product)
        .where(
            and_(
                Product.category_id == product.category_id,
                Product.id != product.id,
                Product.available.is_(True),
            )
        )
        .order_by(desc(Product.created_at), asc(Product.id))
        .limit(limit)
    )
    return list(db.scalars(stmt).all())


def _entity_ref(entity) -> Optional[EntityRef]:
    return EntityRef.model_validate(entity) if entity is not None else None


def product_card(product: Product) -> ProductCard:
    return ProductCard(
        id=product.id,
        name=product.name,
        price=product.price,
        discount_price=product.discount_price,
        price_label=format_price(product.price),
        discount_price_label=format_price(product.discount_price),
        image=product.primary_image,
        brand=product.brand.name if product.brand is not None else None,
        is_new=bool(product.is_new),
        available=bool(product.available),
        href=f"/product/{product.id}",
    )


def product_detail(product: Product) -> ProductDetail:
    return ProductDetail(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        discount_price=product.discount_price,
        price_label=format_price(product.price),
        discount_price_label=format_price(product.discount_price),
        category=_entity_ref(product.category),
        brand=_entity_ref(product.brand),
        sizes=product.sizes,
        images=product.image_urls,
        available=bool(product.available),
        is_new=bool(product.is_new),
        show_in_slider=bool(product.show_in_slider),
        sex=product.sex,
        created_at=product.created_at,
    )


def cached_brands(db: Session) -> List[BrandOut]:
    """Все бренды по названию (кэшируется до изменения брендов)."""
    def load():
        rows = db.scalars(select(Brand).order_by(Brand.name)).all()
        return [BrandOut.model_validate(row) for row in rows]

    return query_cache.get_or_load(("brands", "all"), load)


def cached_categories(db: Session) -> List[CategoryOut]:
    """Все категории по названию (кэшируется до изменения категорий)."""
    def load():
        rows = db.scalars(select(Category).order_by(Category.name)).all()
        return [CategoryOut.model_validate(row) for row in rows]

    return query_cache.get_or_load(("categories", "all"), load)
