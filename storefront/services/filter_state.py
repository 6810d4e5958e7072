"""
Состояние фильтров витрины.

Хранит выбранные значения фильтров и синхронизирует их с параметрами
URL в обе стороны: разбор строки запроса при открытии страницы и
сборка строки запроса при применении фильтров.

Формат URL: множественные значения передаются через запятую
(?category=Sneakers,Boots&size=40), повторяющиеся ключи также
принимаются (?size=40&size=41).
"""

import math
from typing import Iterable, List, Mapping, Optional, Union
from urllib.parse import parse_qs, urlencode

from pydantic import BaseModel, Field

from storefront.db.models.product import SEX_CHOICES
from storefront.schemas.filters import FilterBadge, FilterSelection
from storefront.schemas.product import PriceRange
from storefront.services.formatting import format_number, format_price

LIST_KEYS = ("category", "size", "sex", "brand")

# Порядок ключей в строке запроса
PARAM_ORDER = (
    "search", "category", "size", "sex", "brand",
    "minPrice", "maxPrice", "sort", "order",
)

SIZES = [str(size) for size in range(36, 46)]
SEX_OPTIONS = list(SEX_CHOICES)

DEFAULT_TITLE = "Collection"

QueryParams = Union[str, Mapping[str, str]]


def _get_all(params, key: str) -> List[str]:
    """Все значения ключа из QueryParams/MultiDict, dict или словаря списков."""
    if hasattr(params, "getlist"):
        return list(params.getlist(key))
    value = params.get(key)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


def split_values(raw_values: Iterable[str]) -> List[str]:
    """Разбить значения через запятую, убрать пустые и повторы (порядок сохраняется)."""
    result: List[str] = []
    for raw in raw_values:
        for part in raw.split(","):
            part = part.strip()
            if part and part not in result:
                result.append(part)
    return result


def parse_price(raw: Optional[str]) -> Optional[float]:
    """Цена из параметра URL; некорректные и отрицательные значения игнорируются."""
    if raw is None or not str(raw).strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


class FilterState(BaseModel):
    """
    Состояние панели фильтров.

    Attributes:
        category: Выбранные категории (по названию)
        size: Выбранные размеры
        sex: Выбранный пол
        brand: Выбранные бренды (по названию)
        search: Поисковая строка
        min_price: Нижняя граница цены
        max_price: Верхняя граница цены
        sort: Поле сортировки
        order: Направление сортировки
        price_bounds: Минимальная и максимальная цена в выборке (None, пока неизвестны)
        open: Открыта ли мобильная панель фильтров
    """

    category: List[str] = Field(default_factory=list)
    size: List[str] = Field(default_factory=list)
    sex: List[str] = Field(default_factory=list)
    brand: List[str] = Field(default_factory=list)
    search: str = ""
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort: str = ""
    order: str = ""
    price_bounds: Optional[PriceRange] = None
    open: bool = False

    # ---------- URL -> состояние ----------

    @classmethod
    def from_query_params(cls, params: QueryParams) -> "FilterState":
        state = cls()
        state.initialize_with_url_params(params)
        return state

    def initialize_with_url_params(self, params: QueryParams) -> None:
        """Заменить выбранные значения значениями из строки запроса."""
        if isinstance(params, str):
            params = parse_qs(params.lstrip("?"), keep_blank_values=False)

        for key in LIST_KEYS:
            setattr(self, key, split_values(_get_all(params, key)))

        search = _get_all(params, "search")
        self.search = search[0].strip() if search else ""

        min_price = _get_all(params, "minPrice")
        max_price = _get_all(params, "maxPrice")
        self.min_price = parse_price(min_price[0]) if min_price else None
        self.max_price = parse_price(max_price[0]) if max_price else None

        sort = _get_all(params, "sort")
        order = _get_all(params, "order")
        self.sort = sort[0].strip() if sort else ""
        self.order = order[0].strip().lower() if order else ""

    # ---------- изменение состояния ----------

    def set_filter(self, key: str, value: str) -> None:
        """Переключить значение в списке фильтра (клик по чекбоксу)."""
        if key not in LIST_KEYS:
            raise ValueError(f"Unknown filter: {key}")
        if "," in value:
            raise ValueError(f"Filter value cannot contain commas: {value}")
        values = getattr(self, key)
        if value in values:
            values.remove(value)
        else:
            values.append(value)

    def set_price_bounds(self, bounds: PriceRange) -> None:
        self.price_bounds = bounds

    def set_price_range(self, min_price: Optional[float], max_price: Optional[float]) -> None:
        """Задать диапазон цены, ограничив его известными границами."""
        if min_price is not None and max_price is not None and min_price > max_price:
            min_price, max_price = max_price, min_price

        bounds = self.price_bounds
        if bounds is not None:
            if min_price is not None:
                min_price = min(max(min_price, bounds.min_price), bounds.max_price)
            if max_price is not None:
                max_price = max(min(max_price, bounds.max_price), bounds.min_price)

        self.min_price = min_price
        self.max_price = max_price

    def set_open(self, is_open: bool) -> None:
        self.open = is_open

    def remove(self, key: str, value: str = "") -> None:
        """Снять фильтр по бейджу."""
        if key in LIST_KEYS:
            values = getattr(self, key)
            if value in values:
                values.remove(value)
        elif key == "search":
            self.search = ""
        elif key == "price":
            self.min_price = None
            self.max_price = None
        else:
            raise ValueError(f"Unknown filter: {key}")

    def clear(self) -> None:
        """Сбросить все выбранные значения; границы цен сохраняются."""
        for key in LIST_KEYS:
            setattr(self, key, [])
        self.search = ""
        self.min_price = None
        self.max_price = None
        self.sort = ""
        self.order = ""

    # ---------- состояние -> URL ----------

    def to_url_params(self) -> List[tuple]:
        values = {
            "search": self.search,
            "category": ",".join(self.category),
            "size": ",".join(self.size),
            "sex": ",".join(self.sex),
            "brand": ",".join(self.brand),
            "minPrice": format_number(self.min_price) if self.min_price is not None else "",
            "maxPrice": format_number(self.max_price) if self.max_price is not None else "",
            "sort": self.sort,
            "order": self.order,
        }
        return [(key, values[key]) for key in PARAM_ORDER if values[key]]

    def to_query_string(self) -> str:
        return urlencode(self.to_url_params())

    # ---------- представление ----------

    @property
    def has_filters(self) -> bool:
        return bool(self.to_url_params())

    def badges(self) -> List[FilterBadge]:
        """Бейджи активных фильтров в порядке параметров URL."""
        badges: List[FilterBadge] = []
        if self.search:
            badges.append(FilterBadge(key="search", value=self.search, label=f'Search: "{self.search}"'))
        for key in LIST_KEYS:
            for value in getattr(self, key):
                badges.append(FilterBadge(key=key, value=value, label=value))
        if self.min_price is not None or self.max_price is not None:
            low = format_price(self.min_price) if self.min_price is not None else "Any"
            high = format_price(self.max_price) if self.max_price is not None else "Any"
            badges.append(FilterBadge(key="price", value=f"{low}-{high}", label=f"{low} - {high}"))
        return badges

    def title(self, is_home: bool = False, default: str = DEFAULT_TITLE) -> str:
        """Заголовок сетки товаров по выбранному полу."""
        if is_home:
            return DEFAULT_TITLE
        if "Men" in self.sex and "Women" in self.sex:
            return DEFAULT_TITLE
        if "Men" in self.sex:
            return "Shop Men"
        if "Women" in self.sex:
            return "Shop Women"
        return default

    def selection(self) -> FilterSelection:
        return FilterSelection(
            category=list(self.category),
            size=list(self.size),
            sex=list(self.sex),
            brand=list(self.brand),
            search=self.search,
            min_price=self.min_price,
            max_price=self.max_price,
            sort=self.sort,
            order=self.order,
        )
