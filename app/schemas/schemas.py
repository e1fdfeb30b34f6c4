from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Any, Dict, Optional
from datetime import datetime


class TokenUser(BaseModel):
    """Caller identity resolved once from verified token claims."""

    uid: Optional[str] = None
    email: Optional[str] = None
    claims: Dict[str, Any] = {}

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "TokenUser":
        uid = claims.get("uid") or claims.get("sub")
        return cls(uid=str(uid) if uid is not None else None, email=claims.get("email"), claims=claims)


class ProfileOut(BaseModel):
    message: str
    user: Dict[str, Any]


class UserLogin(BaseModel):
    uid: str = Field(..., min_length=1)
    email: EmailStr
    name: Optional[str] = None


class UserOut(BaseModel):
    uid: str
    email: str
    name: Optional[str] = None
    role: str

    class Config:
        from_attributes = True


class LoginOut(BaseModel):
    message: str
    user: UserOut


class CartItemCreate(BaseModel):
    user_uid: str = Field(..., min_length=1)
    product_id: int
    img_url: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1)
    price: float

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("price must be greater than zero")
        return value


class CartItemOut(BaseModel):
    id: int
    user_uid: str
    product_id: int
    img_url: str
    quantity: int
    price: float
    added_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CartItemAdded(BaseModel):
    message: str
    item: CartItemOut


class MessageOut(BaseModel):
    message: str
