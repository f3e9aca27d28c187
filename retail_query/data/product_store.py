"""
Read-only data access for the product catalog.

Every method issues exactly one parameterized query against the session it
was built with. Filters that return collections give lists of row dicts
shaped like the table (column name -> value); single-product lookups return
the value or None so callers can word their own "not found" message.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from retail_query.data.models import Product, Supplier
from retail_query.utils.logger import get_logger

logger = get_logger("data.product_store")

Row = Dict[str, Any]


class ProductStore:
    """Catalog queries bound to one database session (one per request)."""

    def __init__(self, session: Session):
        self.session = session

    def _product_rows(self, statement) -> List[Row]:
        products = self.session.scalars(statement).all()
        return [product.to_dict() for product in products]

    def all_products(self) -> List[Row]:
        return self._product_rows(select(Product))

    def products_by_brand(self, brand: str) -> List[Row]:
        return self._product_rows(select(Product).where(Product.brand == brand))

    def products_by_category(self, category: str) -> List[Row]:
        return self._product_rows(select(Product).where(Product.category == category))

    def suppliers_matching(self, fragment: str) -> List[Row]:
        """Case-insensitive substring match on supplier name; "" matches every supplier."""
        statement = select(Supplier).where(Supplier.name.ilike(f"%{fragment}%"))
        suppliers = self.session.scalars(statement).all()
        return [supplier.to_dict() for supplier in suppliers]

    def products_in_price_range(self, min_price: float, max_price: float) -> List[Row]:
        """Both bounds are inclusive."""
        statement = select(Product).where(Product.price.between(min_price, max_price))
        return self._product_rows(statement)

    def products_named(self, names: Sequence[str]) -> List[Row]:
        """
        Products whose name is exactly one of ``names``.
        An empty list still issues the query and yields no rows.
        """
        statement = select(Product).where(Product.name.in_(list(names)))
        return self._product_rows(statement)

    def description_of(self, name: str) -> Optional[Row]:
        """Return {"description": ...} for the named product, or None if there is no such product."""
        row = self.session.execute(
            select(Product.description).where(Product.name == name)
        ).first()
        if row is None:
            return None
        return {"description": row.description}

    def product_exists(self, name: str) -> bool:
        row = self.session.execute(
            select(Product.name).where(Product.name == name).limit(1)
        ).first()
        return row is not None

    def rating_of(self, name: str) -> Optional[Any]:
        """
        Return the product's rating.

        None means the product does not exist *or* has no rating; both read as
        "no ratings found" to the caller.
        """
        row = self.session.execute(
            select(Product.rating).where(Product.name == name)
        ).first()
        if row is None:
            return None
        return row.rating
