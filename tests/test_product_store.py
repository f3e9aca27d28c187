"""
Tests for ProductStore queries against the seeded SQLite catalog.
"""

from sqlalchemy import event

from retail_query.data.product_store import ProductStore


def test_all_products(db_session):
    rows = ProductStore(db_session).all_products()
    assert len(rows) == 4
    assert set(rows[0]) == {"name", "brand", "category", "price", "description", "rating"}


def test_price_range_bounds_inclusive(db_session):
    rows = ProductStore(db_session).products_in_price_range(499, 999)
    assert sorted(r["name"] for r in rows) == ["Galaxy", "Pixel", "iPhone"]


def test_degenerate_price_range(db_session):
    assert ProductStore(db_session).products_in_price_range(0, 0) == []


def test_products_named_empty(db_session):
    assert ProductStore(db_session).products_named([]) == []


def test_suppliers_empty_fragment_matches_all(db_session):
    assert len(ProductStore(db_session).suppliers_matching("")) == 3


def test_description_of(db_session):
    store = ProductStore(db_session)
    assert store.description_of("Pixel") == {"description": "Google phone"}
    assert store.description_of("pixel") is None


def test_product_exists(db_session):
    store = ProductStore(db_session)
    assert store.product_exists("Air Max") is True
    assert store.product_exists("") is False


def test_rating_of(db_session):
    store = ProductStore(db_session)
    assert store.rating_of("Galaxy") == 4.5
    assert store.rating_of("Pixel") is None
    assert store.rating_of("Nokia") is None


def test_each_lookup_is_one_round_trip(db_session, seeded_engine):
    statements = []

    def count(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(seeded_engine, "before_cursor_execute", count)
    try:
        store = ProductStore(db_session)
        store.products_by_brand("Apple")
        store.products_named(["iPhone", "Galaxy"])
        store.rating_of("iPhone")
    finally:
        event.remove(seeded_engine, "before_cursor_execute", count)

    assert len(statements) == 3
