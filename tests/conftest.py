# tests/conftest.py - shared fixtures

import io
import os
import smtplib
import tempfile
from pathlib import Path

# Settings are read at import time by app.main
_TMP = Path(tempfile.mkdtemp(prefix="smartcart-tests-"))
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TMP / 'import.db'}")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("ADMIN_EMAIL", "admin@example.com")
os.environ.setdefault("ADMIN_PASSWORD", "admin-pass")
os.environ.setdefault("ADMIN_COOKIE_SECRET", "cookie-secret")

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image as PILImage

from app.core.config import Settings
from app.core.security import create_access_token
from app.db.session import Base, build_engine, build_session_factory
from app.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        SECRET_KEY="test-secret",
        ADMIN_EMAIL="admin@example.com",
        ADMIN_PASSWORD="admin-pass",
        ADMIN_COOKIE_SECRET="cookie-secret",
        SMTP_EMAIL="store@example.com",
        SMTP_PASSWORD="smtp-pass",
        EMAIL_SENDER="Smart Cart <store@example.com>",
        INVOICE_DIR=str(tmp_path / "invoices"),
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(client):
    session = client.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def session_factory(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'service.db'}")
    # Registers every mapper on Base.metadata
    from app.models import models, order, payment, product  # noqa: F401
    Base.metadata.create_all(bind=engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def make_token(settings):
    def _make(**claims):
        return create_access_token(claims, settings)
    return _make


@pytest.fixture
def auth_headers(make_token):
    token = make_token(sub="user-1", email="buyer@example.com")
    return {"Authorization": f"Bearer {token}"}


def png_bytes(color=(200, 30, 30), size=(8, 8), mode="RGB"):
    buf = io.BytesIO()
    PILImage.new(mode, size, color).save(buf, format="PNG" if mode != "CMYK" else "JPEG")
    return buf.getvalue()


@pytest.fixture
def make_image():
    return png_bytes


@pytest.fixture
def image_transport():
    """Serves a small image for /ok/* URLs and 404 for everything else."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.startswith("/ok/"):
            return httpx.Response(200, content=png_bytes(), headers={"Content-Type": "image/png"})
        if request.url.path.startswith("/cmyk/"):
            return httpx.Response(200, content=png_bytes(color=(0, 0, 0, 0), mode="CMYK"))
        if request.url.path.startswith("/garbage/"):
            return httpx.Response(200, content=b"not an image")
        return httpx.Response(404)

    return httpx.MockTransport(handler)


class FakeSMTP:
    """Stands in for smtplib.SMTP and records every delivered message."""

    sent = []
    fail_login = False

    def __init__(self, host, port):
        self.host = host
        self.port = port
        self.started_tls = False
        self.logged_in_as = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.started_tls = True

    def login(self, user, password):
        if FakeSMTP.fail_login:
            raise smtplib.SMTPAuthenticationError(535, b"Authentication failed")
        self.logged_in_as = user

    def send_message(self, message):
        FakeSMTP.sent.append((self, message))


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.sent = []
    FakeSMTP.fail_login = False
    monkeypatch.setattr("app.services.mail_service.smtplib.SMTP", FakeSMTP)
    return FakeSMTP
