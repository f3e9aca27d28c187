"""
Keyword intent routing for free-text catalog queries.

The router is an ordered table of routes. Each route pairs an intent with a
predicate over the lowercased query and a handler that runs the matching
catalog lookup. Routes are tried top to bottom; the first predicate that
matches wins and nothing falls through. Queries no route claims (including
the empty string) go to the tokenizer fallback.

Priority, highest first:
    all products
    compare X and Y        (full comparison shape only)
    brand
    category
    supplier
    price range
    compare                (bare keyword; extracts nothing, returns [])
    description / tell me about
    available
    rating / how good is

The early comparison route keeps "compare brand X and brand Y" from being
read as a brand filter.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Tuple

from retail_query.data.product_store import ProductStore
from retail_query.parsing.extractors import (
    extract_comparison_items,
    extract_keyword,
    extract_price_range,
    has_comparison_pair,
    process_query,
)
from retail_query.utils.logger import get_logger

logger = get_logger("core.router")


class Intent(str, Enum):
    ALL_PRODUCTS = "all_products"
    BRAND = "brand"
    CATEGORY = "category"
    SUPPLIER = "supplier"
    PRICE_RANGE = "price_range"
    COMPARE = "compare"
    DESCRIPTION = "description"
    AVAILABILITY = "availability"
    RATING = "rating"
    FALLBACK = "fallback"


Handler = Callable[[str, ProductStore], Any]


@dataclass(frozen=True)
class Route:
    intent: Intent
    matches: Callable[[str], bool]
    handle: Handler


def contains_any(*triggers: str) -> Callable[[str], bool]:
    """Predicate: the lowercased query contains at least one trigger substring."""
    def predicate(lowered: str) -> bool:
        return any(trigger in lowered for trigger in triggers)
    return predicate


# ---------- Handlers ----------

def list_all_products(query: str, store: ProductStore):
    return store.all_products()


def filter_by_brand(query: str, store: ProductStore):
    return store.products_by_brand(extract_keyword(query, "brand"))


def filter_by_category(query: str, store: ProductStore):
    return store.products_by_category(extract_keyword(query, "category"))


def search_suppliers(query: str, store: ProductStore):
    return store.suppliers_matching(extract_keyword(query, "supplier"))


def filter_by_price_range(query: str, store: ProductStore):
    min_price, max_price = extract_price_range(query)
    return store.products_in_price_range(min_price, max_price)


def compare_products(query: str, store: ProductStore):
    return store.products_named(extract_comparison_items(query))


def describe_product(query: str, store: ProductStore):
    name = extract_keyword(query, "product")
    description = store.description_of(name)
    if description is None:
        return {"message": "No product found with that name."}
    return description


def check_availability(query: str, store: ProductStore):
    name = extract_keyword(query, "product")
    if store.product_exists(name):
        return {"message": f"{name} is available."}
    return {"message": f"{name} is not available."}


def product_rating(query: str, store: ProductStore):
    name = extract_keyword(query, "product")
    rating = store.rating_of(name)
    if rating is None:
        return {"message": f"No ratings found for {name}."}
    return {"message": f"The rating for {name} is {rating}."}


def fallback(query: str, store: Optional[ProductStore] = None):
    return process_query(query)


ROUTES: Tuple[Route, ...] = (
    Route(Intent.ALL_PRODUCTS, contains_any("all products"), list_all_products),
    Route(Intent.COMPARE, has_comparison_pair, compare_products),
    Route(Intent.BRAND, contains_any("brand"), filter_by_brand),
    Route(Intent.CATEGORY, contains_any("category"), filter_by_category),
    Route(Intent.SUPPLIER, contains_any("supplier"), search_suppliers),
    Route(Intent.PRICE_RANGE, contains_any("price range"), filter_by_price_range),
    Route(Intent.COMPARE, contains_any("compare"), compare_products),
    Route(Intent.DESCRIPTION, contains_any("description", "tell me about"), describe_product),
    Route(Intent.AVAILABILITY, contains_any("available"), check_availability),
    Route(Intent.RATING, contains_any("rating", "how good is"), product_rating),
)


def select_route(query: str, routes: Tuple[Route, ...] = ROUTES) -> Optional[Route]:
    """
    Return the first route whose predicate matches, or None for the fallback.

    Raises:
        TypeError: If query is not a string
    """
    if not isinstance(query, str):
        raise TypeError(f"query must be a string, got {type(query).__name__}")

    lowered = query.lower()
    for candidate in routes:
        if candidate.matches(lowered):
            return candidate
    return None


def classify(query: str) -> Intent:
    """Intent the router would pick for this query, without touching the database."""
    selected = select_route(query)
    return selected.intent if selected else Intent.FALLBACK


def route(query: str, store: ProductStore):
    """
    Classify the query and run its handler.

    Returns: A list of row dicts, a single dict, or a {"message": ...} dict
    depending on the intent
    """
    selected = select_route(query)
    if selected is None:
        logger.debug("No intent matched; using fallback tokenizer")
        return fallback(query)

    logger.info("Routing query as %s", selected.intent.value)
    return selected.handle(query, store)
