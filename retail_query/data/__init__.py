"""Catalog models and read-only data access."""

from retail_query.data.models import Product, Supplier
from retail_query.data.product_store import ProductStore

__all__ = ['Product', 'Supplier', 'ProductStore']
