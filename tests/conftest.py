"""Shared pytest fixtures: an isolated in-memory store per test."""
from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from metier_store.clients.api_client import StoreApiClient
from metier_store.database import build_engine, create_db_and_tables, get_session
from metier_store.main import app
from metier_store.services.catalog_service import seed_catalog
from metier_store.utils.session import Role, SessionContext


@pytest.fixture()
def engine():
    """Fresh seeded in-memory database."""
    engine = build_engine("sqlite://")
    create_db_and_tables(engine)
    with Session(engine) as session:
        seed_catalog(session)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def api_app(engine):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(api_app) -> TestClient:
    return TestClient(api_app)


@pytest.fixture()
def customer() -> SessionContext:
    return SessionContext(role=Role.CUSTOMER, session_id="customer-1")


@pytest.fixture()
def customer_headers(customer) -> dict:
    return customer.headers()


@pytest.fixture()
def admin_headers() -> dict:
    return SessionContext(role=Role.ADMIN, session_id="admin-1").headers()


@pytest.fixture()
def make_store_client(api_app):
    """Build StoreApiClient instances wired straight into the ASGI app."""

    def _make(session: SessionContext) -> StoreApiClient:
        return StoreApiClient(
            base_url="http://testserver",
            session=session,
            transport=httpx.ASGITransport(app=api_app),
        )

    return _make
