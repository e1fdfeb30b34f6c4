from sqlalchemy import Column, Integer, String, DateTime, Enum
from datetime import datetime
from app.db.session import Base
import enum


class CardType(str, enum.Enum):
    visa = "visa"
    mastercard = "mastercard"


class PaymentStatus(str, enum.Enum):
    pending = "pending"
    success = "success"
    failed = "failed"


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    amount = Column(Integer, nullable=False)  # cents
    card_type = Column(Enum(CardType, name="card_type"), nullable=False)
    card_number = Column(String, nullable=False)
    expiry = Column(String, nullable=False)
    cvv = Column(String, nullable=False)
    email = Column(String, nullable=True, index=True)
    username = Column(String, nullable=True)
    status = Column(Enum(PaymentStatus, name="payment_status"), default=PaymentStatus.pending)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
