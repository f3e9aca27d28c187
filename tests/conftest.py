"""Pytest configuration for retail query tests."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from retail_query.api.server import create_app
from retail_query.core.config import ServiceConfig
from retail_query.data.database import Base
from retail_query.data.models import Product, Supplier


SAMPLE_PRODUCTS = [
    dict(name="iPhone", brand="Apple", category="Phones", price=999.0,
         description="Apple smartphone with an A-series chip", rating=4.7),
    dict(name="Galaxy", brand="Samsung", category="Phones", price=899.0,
         description="Samsung Android flagship", rating=4.5),
    dict(name="Air Max", brand="Nike", category="Shoes", price=120.0,
         description="Cushioned running shoe", rating=4.2),
    dict(name="Pixel", brand="Google", category="Phones", price=499.0,
         description="Google phone", rating=None),
]

SAMPLE_SUPPLIERS = ["Acme Distribution", "Global Traders", "ACME Logistics"]


@pytest.fixture
def engine():
    """
    In-memory SQLite shared by every session in the test.
    StaticPool keeps the single connection alive across TestClient threads.
    """
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def seeded_engine(engine):
    session = sessionmaker(bind=engine)()
    for row in SAMPLE_PRODUCTS:
        session.add(Product(**row))
    for name in SAMPLE_SUPPLIERS:
        session.add(Supplier(name=name))
    session.commit()
    session.close()
    return engine


@pytest.fixture
def db_session(seeded_engine):
    session = sessionmaker(bind=seeded_engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def config():
    return ServiceConfig(env="production", log_level="WARNING")


@pytest.fixture
def app(config, seeded_engine):
    return create_app(config, engine=seeded_engine)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
