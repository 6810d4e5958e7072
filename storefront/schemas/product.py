"""
Схемы товара: карточка, детальная страница и форма администратора.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from storefront.schemas.pagination import PageMeta

Sex = Literal["Men", "Women", "Unisex"]


class EntityRef(BaseModel):
    """Заполненная ссылка на бренд или категорию."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class ProductCard(BaseModel):
    """Карточка товара в сетке, слайдере и блоке похожих товаров."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    price: float
    discount_price: Optional[float] = Field(None, alias="discountPrice")
    price_label: str = Field(alias="priceLabel")
    discount_price_label: Optional[str] = Field(None, alias="discountPriceLabel")
    image: Optional[str] = None
    brand: Optional[str] = None
    is_new: bool = Field(alias="isNew")
    available: bool
    href: str


class ProductDetail(BaseModel):
    """Детальная информация о товаре."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: Optional[str] = None
    price: float
    discount_price: Optional[float] = Field(None, alias="discountPrice")
    price_label: str = Field(alias="priceLabel")
    discount_price_label: Optional[str] = Field(None, alias="discountPriceLabel")
    category: Optional[EntityRef] = None
    brand: Optional[EntityRef] = None
    sizes: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    available: bool
    is_new: bool
    show_in_slider: bool = Field(alias="showInSlider")
    sex: Sex
    created_at: Optional[datetime] = Field(None, alias="createdAt")


class ProductPage(BaseModel):
    """Страница бесконечной прокрутки сетки товаров."""

    model_config = ConfigDict(populate_by_name=True)

    data: List[ProductCard]
    page: int
    next_page: Optional[int] = Field(None, alias="nextPage")
    total: int
    meta: PageMeta


class PriceRange(BaseModel):
    """Границы цен для слайдера цены."""

    model_config = ConfigDict(populate_by_name=True)

    min_price: float = Field(0, alias="minPrice")
    max_price: float = Field(0, alias="maxPrice")


class ProductForm(BaseModel):
    """
    Форма создания и редактирования товара.

    Размеры принимаются строкой через запятую или списком,
    category и brand передаются идентификаторами.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    price: float = Field(..., ge=0)
    discount_price: Optional[float] = Field(None, ge=0, alias="discountPrice")
    sizes: List[str] = Field(default_factory=list)
    category: int
    brand: int
    sex: Sex = "Men"
    available: bool = True
    is_new: bool = False
    show_in_slider: bool = Field(False, alias="showInSlider")
    images: List[str] = Field(default_factory=list)

    @field_validator("sizes", mode="before")
    @classmethod
    def split_sizes(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        return [str(size).strip() for size in value if str(size).strip()]

    @field_validator("discount_price", mode="before")
    @classmethod
    def blank_discount(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("category", "brand", mode="before")
    @classmethod
    def reference_required(cls, value, info: ValidationInfo):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(f"{info.field_name.capitalize()} is required.")
        return value


class ProductFormValues(BaseModel):
    """Начальные значения формы товара (пустые или из существующего товара)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    description: str = ""
    price: float = 0
    discount_price: Optional[float] = Field(None, alias="discountPrice")
    sizes: str = ""
    category: str = ""
    brand: str = ""
    sex: Sex = "Men"
    available: bool = True
    is_new: bool = False
    show_in_slider: bool = Field(False, alias="showInSlider")
    images: List[str] = Field(default_factory=list)

    @classmethod
    def from_product(cls, product=None) -> "ProductFormValues":
        if product is None:
            return cls()
        return cls(
            name=product.name or "",
            description=product.description or "",
            price=product.price or 0,
            discount_price=product.discount_price,
            sizes=",".join(product.sizes),
            category=str(product.category_id) if product.category_id is not None else "",
            brand=str(product.brand_id) if product.brand_id is not None else "",
            sex=product.sex or "Men",
            available=product.available if product.available is not None else True,
            is_new=bool(product.is_new),
            show_in_slider=bool(product.show_in_slider),
            images=product.image_urls,
        )


class PrimaryImageRequest(BaseModel):
    index: int = Field(..., ge=0, description="Индекс изображения в галерее")


class UploadResult(BaseModel):
    """URL загруженных изображений в порядке файлов запроса."""

    urls: List[str]
