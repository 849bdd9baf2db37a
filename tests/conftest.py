"""
Shared fixtures: in-memory SQLite database, a recording payment gateway
and a TestClient with both wired in through dependency overrides.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.api import create_app
from storefront.api.routers.checkout import get_gateway
from storefront.data.database import Base, get_db
from storefront.domain.schemas import CheckoutSessionOut
from storefront.domain.errors import GatewayError
import storefront.data.models  # noqa: F401


class FakeGateway:
    """Records create_session calls and hands back a canned session."""

    def __init__(self, session_id="cs_test_123", url="https://checkout.example/cs_test_123"):
        self.session_id = session_id
        self.url = url
        self.calls = []
        self.error = None
        self.error_status = None

    def create_session(self, line_items, redirect_urls, metadata):
        self.calls.append(
            {"line_items": line_items, "redirect_urls": redirect_urls, "metadata": metadata}
        )
        if self.error:
            raise GatewayError(self.error, status_code=self.error_status)
        return CheckoutSessionOut(id=self.session_id, url=self.url)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def test_client(session_factory, gateway):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_gateway] = lambda: gateway
    return TestClient(app)
