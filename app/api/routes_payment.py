import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.crud import payment as crud_payment
from app.db.deps import get_db, get_current_user
from app.schemas.payment import PaymentCreate, PaymentList, PaymentResult
from app.schemas.schemas import TokenUser

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/payments", response_model=PaymentList, response_model_exclude_none=True)
def list_payments(db: Session = Depends(get_db)):
    try:
        payments = crud_payment.list_payments(db)
    except SQLAlchemyError:
        logger.exception("Failed to fetch payments")
        raise HTTPException(status_code=500, detail="Failed to fetch payments")
    return {"status": "success", "data": payments}


@router.get("/payments/user", response_model=PaymentList)
def list_my_payments(
    db: Session = Depends(get_db),
    current_user: TokenUser = Depends(get_current_user),
):
    if not current_user.email:
        raise HTTPException(status_code=400, detail="Email not found in token")

    try:
        payments = crud_payment.list_payments(db, email=current_user.email)
    except SQLAlchemyError:
        logger.exception("Failed to fetch payments")
        raise HTTPException(status_code=500, detail="Failed to fetch payments")
    return {"status": "success", "count": len(payments), "data": payments}


@router.post("/create-payment-intent", response_model=PaymentResult)
def create_payment_intent(data: PaymentCreate, db: Session = Depends(get_db)):
    try:
        recent = crud_payment.find_recent_duplicate(db, data)
        if recent is not None:
            logger.info(f"Duplicate payment ignored, returning payment {recent.id}")
            return {
                "message": "⚠️ Duplicate payment ignored (already processed recently)",
                "paymentId": recent.id,
                "duplicate": True,
            }

        payment = crud_payment.create_payment(db, data)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to process payment")
        raise HTTPException(status_code=500, detail="Failed to process payment")

    return {"message": "✅ Payment processed successfully", "paymentId": payment.id}
