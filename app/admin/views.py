import logging

from fastapi import FastAPI
from sqladmin import Admin, Flash, ModelView, action
from sqlalchemy.engine import Engine
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import RedirectResponse

from app.admin.auth import AdminAuth
from app.core.config import Settings
from app.models.models import CartItem, User
from app.models.order import Order
from app.models.payment import Payment
from app.models.product import Category, ImageCarousel, Product, Review
from app.services.order_approval_service import AdminIdentity, OrderApprovalService

logger = logging.getLogger(__name__)


class ProductAdmin(ModelView, model=Product):
    column_list = [Product.id, Product.title, Product.category, Product.price, Product.stock, Product.brand]
    column_searchable_list = [Product.title, Product.brand]


class CategoryAdmin(ModelView, model=Category):
    name_plural = "Categories"
    column_list = [Category.id, Category.name, Category.imgurl]


class ReviewAdmin(ModelView, model=Review):
    column_list = [Review.id, Review.product_id, Review.rating, Review.reviewer_name, Review.date]


class UserAdmin(ModelView, model=User):
    column_list = [User.uid, User.email, User.name, User.role, User.created_at]
    column_searchable_list = [User.email]


class ImageCarouselAdmin(ModelView, model=ImageCarousel):
    name = "Carousel Image"
    column_list = [ImageCarousel.id, ImageCarousel.title, ImageCarousel.image_url]


class CartItemAdmin(ModelView, model=CartItem):
    column_list = [CartItem.id, CartItem.user_uid, CartItem.product_id, CartItem.quantity, CartItem.price, CartItem.added_at]


class PaymentAdmin(ModelView, model=Payment):
    column_list = [Payment.id, Payment.amount, Payment.card_type, Payment.email, Payment.username, Payment.status, Payment.created_at]
    column_details_exclude_list = [Payment.cvv, Payment.card_number]
    column_default_sort = [("created_at", True)]


class OrderAdmin(ModelView, model=Order):
    column_list = [Order.id, Order.user_uid, Order.product_id, Order.quantity, Order.price, Order.status, Order.ordered_at]
    column_default_sort = [("ordered_at", True)]
    can_delete = False

    # Set on the per-app subclass built by register_admin
    approval_service: OrderApprovalService = None

    @action(
        name="approve",
        label="✅ Approve & Email",
        confirmation_message="Are you sure you want to approve this order and email the user?",
        add_in_detail=True,
        add_in_list=True,
    )
    async def approve(self, request: Request):
        admin = AdminIdentity.from_session(request.session.get("admin"))
        pks = [pk for pk in request.query_params.get("pks", "").split(",") if pk]

        for pk in pks:
            try:
                order_id = int(pk)
            except ValueError:
                Flash.error(request, f"❌ Invalid order id: {pk}")
                continue

            result = await run_in_threadpool(self.approval_service.approve, order_id, admin)
            if result.ok:
                logger.info(f"Order {pk}: {result.notice.message}")
                Flash.success(request, result.notice.message)
            else:
                logger.warning(f"Order {pk}: {result.notice.message}")
                Flash.error(request, result.notice.message)

        referer = request.headers.get("Referer")
        if referer:
            return RedirectResponse(referer)
        return RedirectResponse(request.url_for("admin:list", identity=self.identity))


MODEL_VIEWS = (
    ProductAdmin,
    CategoryAdmin,
    ReviewAdmin,
    UserAdmin,
    ImageCarouselAdmin,
    CartItemAdmin,
    PaymentAdmin,
)


def register_admin(app: FastAPI, engine: Engine, settings: Settings, approval_service: OrderApprovalService) -> Admin:
    admin = Admin(
        app,
        engine,
        title=f"{settings.STORE_NAME} Admin",
        authentication_backend=AdminAuth(
            secret_key=settings.ADMIN_COOKIE_SECRET,
            admin_email=settings.ADMIN_EMAIL,
            admin_password=settings.ADMIN_PASSWORD,
        ),
    )
    # sqladmin stores the session maker on the view class, so each app gets its own subclasses
    for view in MODEL_VIEWS:
        admin.add_view(type(view.__name__, (view,), {}))
    admin.add_view(type(OrderAdmin.__name__, (OrderAdmin,), {"approval_service": approval_service}))
    return admin
