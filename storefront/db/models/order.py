"""
Модель заказа через WhatsApp.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Order(Base):
    """
    Заказ, переданный в WhatsApp.

    Хранит снимок товара на момент заказа: название и цена не
    меняются при последующем редактировании товара.

    Attributes:
        id: Идентификатор заказа (hex UUID)
        product_id: ID товара (обнуляется при удалении товара)
        product_name: Название товара (снимок)
        price: Цена товара (снимок)
        size: Выбранный размер
        quantity: Количество
        customer_name: Имя клиента
        address: Адрес доставки
        pincode: Почтовый индекс
        phone: Телефон клиента
        extra_details: Дополнительная информация
        created_at: Дата создания
    """

    __tablename__ = "orders"

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_orders_quantity"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    product_id: Mapped[Optional[str]] = mapped_column(
        String(32), ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True
    )
    product_name: Mapped[str] = mapped_column(Text)
    price: Mapped[float] = mapped_column(Float)
    size: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, default=1)

    # Данные клиента
    customer_name: Mapped[str] = mapped_column(Text)
    address: Mapped[str] = mapped_column(Text)
    pincode: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    phone: Mapped[str] = mapped_column(String(32))
    extra_details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
