"""
Модель размера товара.
"""

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class ProductSize(Base):
    """
    Доступный размер товара (одна строка на размер).

    Attributes:
        id: Уникальный идентификатор
        product_id: ID товара
        value: Обозначение размера ("40", "41" ...)
        sort_order: Порядок вывода размеров
    """

    __tablename__ = "product_sizes"

    __table_args__ = (
        UniqueConstraint("product_id", "value", name="uq_product_size_value"),
        Index("ix_product_sizes_value", "value"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    product_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("products.id", ondelete="CASCADE"), index=True
    )
    value: Mapped[str] = mapped_column(String(32))
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    # Связь с товаром
    product: Mapped["Product"] = relationship(back_populates="size_rows")

    def __repr__(self) -> str:
        return f"<ProductSize(product_id='{self.product_id}', value='{self.value}')>"
