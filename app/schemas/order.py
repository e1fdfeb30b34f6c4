from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime


class OrderItemCreate(BaseModel):
    productId: int
    img_url: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    price: float

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("price must be greater than zero")
        return value


class OrderCreate(BaseModel):
    items: List[OrderItemCreate] = Field(..., min_length=1)
    total: float

    @field_validator("total")
    @classmethod
    def total_must_be_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("total must be greater than zero")
        return value


class OrderOut(BaseModel):
    id: int
    user_uid: str
    product_id: int
    img_url: str
    quantity: int
    price: float
    status: str
    ordered_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class OrdersPlaced(BaseModel):
    message: str
    orders: List[OrderOut]
