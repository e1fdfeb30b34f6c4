import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.crud import cart as crud_cart
from app.db.deps import get_db, get_current_user
from app.schemas.schemas import CartItemAdded, CartItemCreate, MessageOut, TokenUser

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/add_cart", response_model=CartItemAdded)
def add_cart(data: CartItemCreate, db: Session = Depends(get_db)):
    logger.info(f"Add to cart called: user={data.user_uid} product={data.product_id} quantity={data.quantity}")
    try:
        item = crud_cart.add_to_cart(db, data)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Could not add to cart")
        raise HTTPException(status_code=500, detail="Could not add to cart")
    return {"message": "Item added to cart", "item": item}


@router.delete("/cart_items", response_model=MessageOut)
def clear_cart_items(
    db: Session = Depends(get_db),
    current_user: TokenUser = Depends(get_current_user),
):
    if not current_user.uid:
        raise HTTPException(status_code=400, detail="User ID missing from token")

    try:
        deleted = crud_cart.clear_cart(db, current_user.uid)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete cart items")
        raise HTTPException(status_code=500, detail="Failed to delete cart items")
    return {"message": f"🗑️ Deleted {deleted} cart item(s) for user"}
