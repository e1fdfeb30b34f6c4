import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from app.admin.views import register_admin
from app.api.routes_cart import router as cart_router
from app.api.routes_order import router as order_router
from app.api.routes_payment import router as payment_router
from app.api.routes_user import router as user_router
from app.core.config import Settings, get_settings
from app.db.session import Base, build_engine, build_session_factory
from app.services.invoice_service import InvoiceRenderer
from app.services.mail_service import InvoiceMailer
from app.services.order_approval_service import OrderApprovalService

# Register every model on Base.metadata before create_all
from app.models import models, order, payment, product  # noqa: F401

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=app.state.engine)
    logger.info("✅ DB Connected")
    logger.info("🛠️ Admin Panel mounted at /admin")
    yield
    app.state.http_client.close()
    app.state.engine.dispose()


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    app = FastAPI(
        title="smart-cart-api",
        description="Cart, orders, payments and an admin console for the Smart Cart store",
        version="1.0.0",
        lifespan=lifespan,
    )

    engine = build_engine(settings.DATABASE_URL)
    session_factory = build_session_factory(engine)
    http_client = httpx.Client(follow_redirects=True)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.http_client = http_client
    app.state.approval_service = OrderApprovalService(
        session_factory=session_factory,
        renderer=InvoiceRenderer(http_client, store_name=settings.STORE_NAME),
        mailer=InvoiceMailer(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_EMAIL,
            password=settings.SMTP_PASSWORD,
            sender=settings.EMAIL_SENDER,
        ),
        invoice_dir=settings.INVOICE_DIR,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/", tags=["Health"])
    def health():
        return {"status": "Server is running"}

    app.include_router(user_router, tags=["User"])
    app.include_router(cart_router, tags=["Cart"])
    app.include_router(order_router, tags=["Order"])
    app.include_router(payment_router, tags=["Payment"])

    app.state.admin = register_admin(app, engine, settings, app.state.approval_service)

    # 👇 Add custom OpenAPI with Bearer Auth
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Smart Cart API",
            version="1.0.0",
            description="API for carts, orders and payments.",
            routes=app.routes,
        )
        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT"
            }
        }
        for path in openapi_schema["paths"].values():
            for method in path.values():
                method["security"] = [{"BearerAuth": []}]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.PORT)
