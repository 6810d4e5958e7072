"""
Модели базы данных.

Импортирует все модели для корректной работы SQLAlchemy.
"""

from .base import Base
from .brand import Brand
from .category import Category
from .order import Order
from .product import SEX_CHOICES, Product
from .product_image import ProductImage
from .product_size import ProductSize

__all__ = [
    "Base",
    "Brand",
    "Category",
    "Order",
    "Product",
    "ProductImage",
    "ProductSize",
    "SEX_CHOICES",
]
