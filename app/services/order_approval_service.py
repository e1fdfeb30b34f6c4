# app/services/order_approval_service.py
"""
Order approval workflow run from the admin console.

Approving an order marks it approved, collects every approved order of the
same user into one invoice, renders it to PDF and emails it to the user.

The status change is committed before invoicing starts and is kept when
rendering or mail delivery fails. Approving the order again re-sends an
invoice covering all of the user's approved orders.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.errors import AuthorizationError, NotFoundError, SmartCartError
from app.crud import order as crud_order
from app.crud import user as crud_user
from app.models.order import Order, OrderStatus
from app.schemas.order import OrderOut
from app.services.invoice_service import InvoiceItem, InvoiceRenderer
from app.services.mail_service import InvoiceMailer

logger = logging.getLogger(__name__)


@dataclass
class AdminIdentity:
    email: str
    role: str

    @classmethod
    def from_session(cls, data: Optional[Dict[str, Any]]) -> Optional["AdminIdentity"]:
        if not data:
            return None
        return cls(email=data.get("email", ""), role=data.get("role", ""))


@dataclass
class Notice:
    message: str
    type: str  # "success" | "error"


@dataclass
class ApprovalResult:
    order: Optional[OrderOut]
    notice: Notice
    invoice_path: Optional[Path] = None

    @property
    def ok(self) -> bool:
        return self.notice.type == "success"


def invoice_items_from_orders(orders: List[Order]) -> List[InvoiceItem]:
    return [
        InvoiceItem(
            product_id=str(order.product_id),
            img_url=order.img_url,
            quantity=order.quantity,
            price=float(order.price),
        )
        for order in orders
    ]


def ensure_admin(identity: Optional[AdminIdentity]) -> AdminIdentity:
    if identity is None or identity.role != "admin":
        raise AuthorizationError("Only admins can approve orders")
    return identity


class OrderApprovalService:
    def __init__(
        self,
        session_factory: sessionmaker,
        renderer: InvoiceRenderer,
        mailer: InvoiceMailer,
        invoice_dir: str = "invoices",
    ):
        self.session_factory = session_factory
        self.renderer = renderer
        self.mailer = mailer
        self.invoice_dir = Path(invoice_dir)

    def invoice_path(self, user_uid: str) -> Path:
        return self.invoice_dir / f"invoice-{user_uid}-{int(time.time() * 1000)}.pdf"

    def approve(self, order_id: int, acting_admin: Optional[AdminIdentity]) -> ApprovalResult:
        with self.session_factory() as db:
            order = crud_order.get_order(db, order_id)
            if order is None:
                return self._error(None, f"❌ Order {order_id} not found")

            try:
                ensure_admin(acting_admin)
            except AuthorizationError as e:
                return self._error(order, f"❌ {e}")

            crud_order.update_order_status(db, order, OrderStatus.approved.value)
            logger.info(f"Order {order.id} approved by {acting_admin.email}")

            try:
                invoice_path = self._send_invoice(db, order.user_uid)
            except NotFoundError as e:
                return self._error(order, f"❌ {e}")
            except (SmartCartError, SQLAlchemyError) as e:
                logger.exception(f"Invoicing failed for order {order.id}")
                return self._error(order, f"❌ Order approved but invoice failed: {e}")

            return ApprovalResult(
                order=OrderOut.model_validate(order),
                notice=Notice("✅ Order approved and invoice emailed", "success"),
                invoice_path=invoice_path,
            )

    def _send_invoice(self, db: Session, user_uid: str) -> Path:
        user = crud_user.get_user_by_uid(db, user_uid)
        if user is None or not user.email:
            raise NotFoundError("User not found or missing email")

        approved = crud_order.get_orders_by_user(db, user_uid, status=OrderStatus.approved.value)
        items = invoice_items_from_orders(approved)
        total = sum(item.price for item in items)

        path = self.renderer.render(items, total, self.invoice_path(user_uid))
        self.mailer.send(user.email, path)
        return path

    def _error(self, order: Optional[Order], message: str) -> ApprovalResult:
        logger.warning(message)
        snapshot = OrderOut.model_validate(order) if order is not None else None
        return ApprovalResult(order=snapshot, notice=Notice(message, "error"))

