"""
Схемы заказа через WhatsApp.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderCreate(BaseModel):
    """Данные модального окна заказа."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    product_id: str = Field(..., alias="productId")
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1)
    pincode: Optional[str] = Field(None, max_length=16)
    phone: str = Field(..., min_length=5, max_length=32)
    extra_details: Optional[str] = Field(None, alias="extraDetails")
    size: Optional[str] = Field(None, max_length=32)
    quantity: int = Field(1, ge=1)


class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    product_id: Optional[str] = Field(None, alias="productId")
    product_name: str = Field(alias="productName")
    price: float
    size: Optional[str] = None
    quantity: int
    customer_name: str = Field(alias="name")
    address: str
    pincode: Optional[str] = None
    phone: str
    extra_details: Optional[str] = Field(None, alias="extraDetails")
    created_at: Optional[datetime] = Field(None, alias="createdAt")


class OrderResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order: OrderOut
    whatsapp_url: str = Field(alias="whatsappUrl")
