from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from app.db.session import Base
import enum


class OrderStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    user_uid = Column(String, ForeignKey("users.uid"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    img_url = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    ordered_at = Column(DateTime, default=datetime.utcnow)
    # Kept as a plain string so admins can set statuses beyond the known ones
    status = Column(String, nullable=False, default=OrderStatus.pending.value)

    user = relationship("User", back_populates="orders")
    product = relationship("Product", back_populates="orders")
