"""
Форматирование значений для отображения.
"""

from typing import Optional

from storefront.core.config import settings


def format_number(value: float) -> str:
    """1299.0 -> "1299", 12.5 -> "12.5"."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_price(value: Optional[float]) -> Optional[str]:
    """Цена с символом валюты: ₹1299."""
    if value is None:
        return None
    return f"{settings.CURRENCY_SYMBOL}{format_number(value)}"
