from datetime import datetime, timedelta
from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.payment import Payment, PaymentStatus
from app.schemas.payment import PaymentCreate

# Identical successful submissions inside this window are treated as one payment
DUPLICATE_WINDOW = timedelta(minutes=2)


def find_recent_duplicate(db: Session, data: PaymentCreate, now: Optional[datetime] = None) -> Optional[Payment]:
    recent = (
        db.query(Payment)
        .filter(
            Payment.amount == data.amount,
            Payment.card_type == data.card_type,
            Payment.expiry == data.expiry,
            Payment.email == data.email,
            Payment.username == data.username,
            Payment.status == PaymentStatus.success,
        )
        .order_by(Payment.created_at.desc())
        .first()
    )
    if recent is None or recent.created_at is None:
        return None

    now = now or datetime.utcnow()
    if recent.created_at > now - DUPLICATE_WINDOW:
        return recent
    return None


def create_payment(db: Session, data: PaymentCreate) -> Payment:
    payment = Payment(
        amount=data.amount,
        card_type=data.card_type,
        card_number=data.card_number,
        expiry=data.expiry,
        cvv=data.cvv,
        email=data.email,
        username=data.username,
        status=PaymentStatus.success,
    )
    db.add(payment)
    db.commit()
    db.refresh(payment)
    return payment


def list_payments(db: Session, email: Optional[str] = None) -> List[Payment]:
    query = db.query(Payment)
    if email is not None:
        query = query.filter(Payment.email == email)
    return query.order_by(Payment.created_at.desc(), Payment.id.desc()).all()
