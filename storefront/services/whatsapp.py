"""
Передача заказа в WhatsApp.

Собирает текст сообщения о заказе и ссылку wa.me, которую
клиент открывает в новой вкладке.
"""

from typing import Optional
from urllib.parse import quote

from storefront.core.config import settings
from storefront.services.formatting import format_price

WHATSAPP_BASE_URL = "https://wa.me"

# Символы, которые encodeURIComponent оставляет без кодирования
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_order_message(
    product_name: str,
    price: float,
    quantity: int,
    customer_name: str,
    address: str,
    phone: str,
    size: Optional[str] = None,
    pincode: Optional[str] = None,
    extra_details: Optional[str] = None,
) -> str:
    """Текст сообщения о заказе; пустые размер и индекс заменяются на "-"."""
    return (
        "Hello, I want to order this item.\n\n"
        f"Product: {product_name}\n"
        f"Size: {size or '-'}\n"
        f"Quantity: {quantity}\n"
        f"Price: {format_price(price)}\n\n"
        f"My Name: {customer_name}\n"
        f"Address: {address}\n"
        f"Pincode: {pincode or '-'}\n"
        f"Phone: {phone} \n\n"
        f"Additional Info: {extra_details or ''}"
    )


def build_whatsapp_url(message: str, phone: Optional[str] = None) -> str:
    """Ссылка wa.me с закодированным текстом сообщения."""
    phone = phone or settings.WHATSAPP_PHONE
    return f"{WHATSAPP_BASE_URL}/{phone}?text={quote(message, safe=_URI_COMPONENT_SAFE)}"
