"""
API endpoints для заказов через WhatsApp.

Заказ сохраняется как снимок товара и данных клиента,
в ответе возвращается ссылка wa.me с готовым текстом сообщения.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storefront.db.database import get_db
from storefront.db.models import Order
from storefront.schemas.order import OrderCreate, OrderOut, OrderResponse
from storefront.services import catalog
from storefront.services.whatsapp import build_order_message, build_whatsapp_url

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderCreate, db: Session = Depends(get_db)):
    """
    Оформить заказ товара через WhatsApp.

    Args:
        payload: Данные модального окна заказа
        db: Сессия базы данных

    Returns:
        OrderResponse: Сохраненный заказ и ссылка на чат WhatsApp

    Raises:
        NotFoundError: Если товар не найден
    """
    product = catalog.get_product(db, payload.product_id)

    order = Order(
        product_id=product.id,
        product_name=product.name,
        price=product.price,
        size=payload.size or None,
        quantity=payload.quantity,
        customer_name=payload.name,
        address=payload.address,
        pincode=payload.pincode or None,
        phone=payload.phone,
        extra_details=payload.extra_details or None,
    )
    db.add(order)
    db.commit()
    db.refresh(order)
    logger.info("Order %s created for product %s", order.id, product.id)

    message = build_order_message(
        product_name=order.product_name,
        price=order.price,
        quantity=order.quantity,
        customer_name=order.customer_name,
        address=order.address,
        phone=order.phone,
        size=order.size,
        pincode=order.pincode,
        extra_details=order.extra_details,
    )
    return OrderResponse(order=OrderOut.model_validate(order), whatsapp_url=build_whatsapp_url(message))
