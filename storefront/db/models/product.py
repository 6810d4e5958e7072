"""
Модель товара.
"""

import uuid
from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base
from .product_image import ProductImage
from .product_size import ProductSize

SEX_CHOICES = ("Men", "Women", "Unisex")


def generate_product_id() -> str:
    return uuid.uuid4().hex


class Product(Base):
    """
    Модель товара.

    Attributes:
        id: Уникальный идентификатор товара (hex UUID, не меняется)
        name: Название товара
        description: Описание товара
        price: Цена
        discount_price: Цена до скидки (зачеркнутая цена на карточке)
        category_id: ID категории товара
        brand_id: ID бренда товара
        sex: Пол (Men/Women/Unisex)
        available: Доступен для продажи
        is_new: Новинка
        show_in_slider: Показывать в слайдере главной страницы
        created_at: Дата создания
        images: Упорядоченные изображения (первое главное)
        size_rows: Упорядоченные размеры
    """

    __tablename__ = "products"

    __table_args__ = (
        CheckConstraint(
            "sex IN (" + ", ".join(f"'{value}'" for value in SEX_CHOICES) + ")",
            name="ck_products_sex",
        ),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=generate_product_id)
    name: Mapped[str] = mapped_column(String(255), index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Float, default=0)
    discount_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    category_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    brand_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("brands.id", ondelete="SET NULL"), nullable=True, index=True
    )
    sex: Mapped[str] = mapped_column(String(16), default="Men")
    available: Mapped[bool] = mapped_column(Boolean, default=True)
    is_new: Mapped[bool] = mapped_column(Boolean, default=False)
    show_in_slider: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)

    # Связи с другими моделями
    category: Mapped[Optional["Category"]] = relationship(
        back_populates="products", lazy="selectin"
    )
    brand: Mapped[Optional["Brand"]] = relationship(
        back_populates="products", lazy="selectin"
    )
    images: Mapped[List[ProductImage]] = relationship(
        back_populates="product",
        cascade="all,delete-orphan",
        order_by=ProductImage.sort_order,
        lazy="selectin",
    )
    size_rows: Mapped[List[ProductSize]] = relationship(
        back_populates="product",
        cascade="all,delete-orphan",
        order_by=ProductSize.sort_order,
        lazy="selectin",
    )

    @property
    def sizes(self) -> List[str]:
        return [row.value for row in self.size_rows]

    @property
    def image_urls(self) -> List[str]:
        return [image.url for image in self.images]

    @property
    def primary_image(self) -> Optional[str]:
        return self.images[0].url if self.images else None

    def set_sizes(self, values: Iterable[str]) -> None:
        """Заменить размеры товара, сохранив строки уже существующих размеров."""
        existing = {row.value: row for row in self.size_rows}
        rows = []
        seen = set()
        for value in values:
            if value in seen:
                continue
            seen.add(value)
            rows.append(existing.get(value) or ProductSize(value=value))
        self.size_rows = rows
        for position, row in enumerate(self.size_rows):
            row.sort_order = position

    def set_images(self, urls: Iterable[str]) -> None:
        """Заменить галерею товара; порядок urls становится порядком галереи."""
        existing = {}
        for image in self.images:
            existing.setdefault(image.url, []).append(image)
        images = []
        for url in urls:
            reusable = existing.get(url)
            images.append(reusable.pop(0) if reusable else ProductImage(url=url))
        self.images = images
        for position, image in enumerate(self.images):
            image.sort_order = position

    def __repr__(self) -> str:
        return f"<Product(id='{self.id}', name='{self.name}')>"
