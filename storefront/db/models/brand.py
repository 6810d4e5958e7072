"""
Модель бренда.
"""

from typing import List

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class Brand(Base):
    """
    Модель бренда товаров.

    Attributes:
        id: Уникальный идентификатор бренда
        name: Название бренда (уникальное)
        products: Товары бренда
    """

    __tablename__ = "brands"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, index=True)

    # При удалении бренда у товаров обнуляется ссылка, товары остаются
    products: Mapped[List["Product"]] = relationship(back_populates="brand")

    def __repr__(self) -> str:
        return f"<Brand(id={self.id}, name='{self.name}')>"
