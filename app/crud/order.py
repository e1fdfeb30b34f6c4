from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.order import Order, OrderStatus
from app.schemas.order import OrderItemCreate


def create_orders(db: Session, user_uid: str, items: List[OrderItemCreate]) -> List[Order]:
    orders = [
        Order(
            user_uid=user_uid,
            product_id=item.productId,
            img_url=item.img_url,
            quantity=item.quantity,
            price=item.price,
            status=OrderStatus.pending.value,
        )
        for item in items
    ]
    db.add_all(orders)
    db.commit()
    for order in orders:
        db.refresh(order)
    return orders


def get_order(db: Session, order_id: int) -> Optional[Order]:
    return db.query(Order).filter(Order.id == order_id).first()


def update_order_status(db: Session, order: Order, new_status: str) -> Order:
    order.status = new_status
    db.commit()
    db.refresh(order)
    return order


def get_orders_by_user(db: Session, user_uid: str, status: Optional[str] = None) -> List[Order]:
    query = db.query(Order).filter(Order.user_uid == user_uid)
    if status is not None:
        query = query.filter(Order.status == status)
    return query.order_by(Order.id).all()
