import hmac
import logging
from typing import Optional

from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

logger = logging.getLogger(__name__)


class AdminAuth(AuthenticationBackend):
    """Single admin account configured through the environment, kept in a signed session cookie."""

    def __init__(self, secret_key: str, admin_email: Optional[str], admin_password: Optional[str]):
        super().__init__(secret_key=secret_key)
        self.admin_email = admin_email
        self.admin_password = admin_password

    def check_credentials(self, email: Optional[str], password: Optional[str]) -> bool:
        if not self.admin_email or not self.admin_password or not email or not password:
            return False
        return hmac.compare_digest(email, self.admin_email) and hmac.compare_digest(password, self.admin_password)

    async def login(self, request: Request) -> bool:
        form = await request.form()
        email, password = form.get("username"), form.get("password")
        if not self.check_credentials(email, password):
            logger.warning(f"Rejected admin login for {email}")
            return False
        request.session.update({"admin": {"email": email, "role": "admin"}})
        return True

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return "admin" in request.session
