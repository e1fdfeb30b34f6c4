from sqlalchemy.orm import Session
from app.models import models
from app.schemas.schemas import CartItemCreate


def add_to_cart(db: Session, data: CartItemCreate) -> models.CartItem:
    item = models.CartItem(
        user_uid=data.user_uid,
        product_id=data.product_id,
        img_url=data.img_url,
        quantity=data.quantity,
        price=data.price,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


# Bulk delete, returns number of removed rows
def clear_cart(db: Session, user_uid: str) -> int:
    deleted = (
        db.query(models.CartItem)
        .filter(models.CartItem.user_uid == user_uid)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted
