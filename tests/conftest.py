"""Pytest fixtures for the DAO, generator and dataset tests."""

from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool

from dao.dao_factory import DaoFactory
from utilities.database import create_session_factory
from utilities.models import Order, OrderItem, Product, Review, User
from utilities.tools import setup_database

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _configure_sqlite(dbapi_connection, connection_record):
    """Enable foreign keys and stand in for the stored database functions."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

    dbapi_connection.create_function("calculate_order_total", 1, lambda order_id: 108.75)
    dbapi_connection.create_function(
        "calculate_order_total_with_tax", 2, lambda order_id, rate: 100 * (1 + rate)
    )
    dbapi_connection.create_function(
        "get_user_loyalty_status", 1, lambda user_id: "GOLD" if user_id == 1 else "BRONZE"
    )
    dbapi_connection.create_function("get_product_rating", 1, lambda product_id: 4.5)


def new_engine():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _configure_sqlite)
    setup_database(engine)
    return engine


@pytest.fixture
def engine():
    """In-memory database with the full schema."""
    engine = new_engine()
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    session_factory = create_session_factory(engine)
    with session_factory() as session:
        yield session


@pytest.fixture
def make_session():
    """Open sessions on independent in-memory databases."""
    engines = []

    def factory():
        engine = new_engine()
        engines.append(engine)
        return create_session_factory(engine)()

    yield factory

    for engine in engines:
        engine.dispose()


@pytest.fixture
def daos(session):
    return DaoFactory(session)


@pytest.fixture
def dataset_dir():
    return FIXTURES_DIR / "dataset"


def make_user(**overrides) -> User:
    fields = dict(
        username="jdoe",
        email="jdoe@example.com",
        first_name="John",
        last_name="Doe",
        date_of_birth=date(1990, 5, 17),
        phone_number="555-0100",
        is_active=True,
    )
    fields.update(overrides)
    return User(**fields)


def make_product(**overrides) -> Product:
    fields = dict(
        name="Rustic Wooden Chair",
        description="A sturdy chair.",
        price=Decimal("49.99"),
        category="Furniture",
        sku="CHR-00000001",
        stock_quantity=10,
        is_available=True,
    )
    fields.update(overrides)
    return Product(**fields)


def make_order(user_id: int, **overrides) -> Order:
    fields = dict(
        user_id=user_id,
        order_number="ORD-00000001",
        total_amount=Decimal("99.98"),
        status="PENDING",
        order_date=datetime(2024, 3, 1, 12, 0, 0),
        delivery_address="1 Main St, Springfield",
    )
    fields.update(overrides)
    return Order(**fields)


def make_order_item(order_id: int, product_id: int, **overrides) -> OrderItem:
    fields = dict(
        order_id=order_id,
        product_id=product_id,
        quantity=2,
        unit_price=Decimal("49.99"),
        total_price=Decimal("99.98"),
    )
    fields.update(overrides)
    return OrderItem(**fields)


def make_review(user_id: int, product_id: int, **overrides) -> Review:
    fields = dict(
        user_id=user_id,
        product_id=product_id,
        rating=4,
        title="Solid chair",
        comment="Does what it says.",
        review_date=datetime(2024, 3, 5, 9, 30, 0),
        is_verified_purchase=False,
    )
    fields.update(overrides)
    return Review(**fields)
