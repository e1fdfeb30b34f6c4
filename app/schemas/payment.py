import math
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.models.payment import CardType, PaymentStatus


class PaymentCreate(BaseModel):
    # Cents. Numeric strings are accepted and rounded.
    amount: float
    card_type: CardType
    card_number: str = Field(..., min_length=1)
    expiry: str = Field(..., min_length=1)
    cvv: str = Field(..., min_length=1)
    email: Optional[str] = None
    username: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def reject_bool(cls, value):
        # bool is an int subclass and would pass as 1 cent
        if isinstance(value, bool):
            raise ValueError("Amount must be a valid number in cents (e.g., 1099)")
        return value

    @field_validator("amount")
    @classmethod
    def amount_in_cents(cls, value: float) -> int:
        if math.isnan(value) or math.isinf(value):
            raise ValueError("Amount must be a valid number in cents (e.g., 1099)")
        cents = int(round(value))
        if cents <= 0:
            raise ValueError("Amount must be a valid number in cents (e.g., 1099)")
        return cents


class PaymentOut(BaseModel):
    """Listing view of a payment. Card number, expiry and cvv never leave the database."""

    id: int
    amount: int
    card_type: CardType
    email: Optional[str] = None
    username: Optional[str] = None
    status: PaymentStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PaymentList(BaseModel):
    status: str = "success"
    count: Optional[int] = None
    data: List[PaymentOut]


class PaymentResult(BaseModel):
    message: str
    paymentId: int
    duplicate: bool = False
