"""
Схемы панели фильтров.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.schemas.product import PriceRange


class FilterOption(BaseModel):
    """Значение фильтра с отметкой выбора (чекбокс)."""

    value: str
    label: str
    checked: bool = False


class FilterBadge(BaseModel):
    """Бейдж активного фильтра, который можно снять."""

    key: str
    value: str
    label: str


class FilterSelection(BaseModel):
    """Выбранные значения фильтров в форме, пригодной для ответа API."""

    model_config = ConfigDict(populate_by_name=True)

    category: List[str] = Field(default_factory=list)
    size: List[str] = Field(default_factory=list)
    sex: List[str] = Field(default_factory=list)
    brand: List[str] = Field(default_factory=list)
    search: str = ""
    min_price: Optional[float] = Field(None, alias="minPrice")
    max_price: Optional[float] = Field(None, alias="maxPrice")
    sort: str = ""
    order: str = ""


class FilterView(BaseModel):
    """Состояние панели фильтров для отрисовки."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    filters: FilterSelection
    categories: List[FilterOption]
    brands: List[FilterOption]
    sizes: List[FilterOption]
    sex: List[FilterOption]
    badges: List[FilterBadge]
    price_bounds: PriceRange = Field(alias="priceBounds")
    query: str
    has_filters: bool = Field(alias="hasFilters")
