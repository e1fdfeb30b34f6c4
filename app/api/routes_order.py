import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.crud import order as crud_order
from app.db.deps import get_db, get_current_user
from app.schemas.order import OrderCreate, OrdersPlaced
from app.schemas.schemas import TokenUser

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/orders", response_model=OrdersPlaced, status_code=status.HTTP_201_CREATED)
def place_orders(
    order_data: OrderCreate,
    db: Session = Depends(get_db),
    current_user: TokenUser = Depends(get_current_user),
):
    if not current_user.uid:
        raise HTTPException(status_code=400, detail="User ID missing from token")

    try:
        orders = crud_order.create_orders(db, current_user.uid, order_data.items)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to place order")
        raise HTTPException(status_code=500, detail="Failed to place order")

    logger.info(f"Placed {len(orders)} order(s) for {current_user.uid}, total {order_data.total:.2f}")
    return {"message": "✅ Order placed successfully", "orders": orders}
