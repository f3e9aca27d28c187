"""
SQLAlchemy models for the product catalog.

The tables are owned by the external database; these mappings only describe
the columns the service reads. The service never creates or alters them
(tests create them in SQLite from this metadata).
"""

from typing import Any, Dict

from sqlalchemy import Column, Numeric, String, Text

from retail_query.data.database import Base


class Product(Base):
    """
    Product catalog row. Product names are unique and serve as the key;
    a product is "available" when its row exists.
    """
    __tablename__ = "products"

    name = Column(String(255), primary_key=True)
    brand = Column(String(100), index=True)
    category = Column(String(100), index=True)
    # asdecimal=False so rows serialize straight to JSON numbers
    price = Column(Numeric(10, 2, asdecimal=False))
    description = Column(Text)
    rating = Column(Numeric(3, 2, asdecimal=False))

    def to_dict(self) -> Dict[str, Any]:
        return {column.name: getattr(self, column.name) for column in self.__table__.columns}


class Supplier(Base):
    """Supplier row; the table has only a name, which doubles as the mapper key."""
    __tablename__ = "suppliers"

    name = Column(String(255), primary_key=True)

    def to_dict(self) -> Dict[str, Any]:
        return {column.name: getattr(self, column.name) for column in self.__table__.columns}
