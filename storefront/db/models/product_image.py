"""
Модель изображения товара.
"""

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class ProductImage(Base):
    """
    Модель изображения товара.

    Порядок изображений значим: изображение с sort_order == 0 главное.

    Attributes:
        id: Уникальный идентификатор изображения
        product_id: ID товара
        url: URL изображения в хранилище
        sort_order: Позиция в галерее товара
        product: Связь с товаром
    """

    __tablename__ = "product_images"

    __table_args__ = (
        Index("ix_product_images_product_id", "product_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    product_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("products.id", ondelete="CASCADE")
    )
    url: Mapped[str] = mapped_column(Text)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    # Связь с товаром
    product: Mapped["Product"] = relationship(back_populates="images")
