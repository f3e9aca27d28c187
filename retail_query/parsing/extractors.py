"""
Pattern-based extraction for free-text retail queries.

Handles queries like "show me brand Nike" or "price range 10-50" by pulling out:
- A labelled value (brand, category, supplier, product name)
- A numeric price range
- The two product names of a comparison

Every helper is total: when nothing matches it returns a default
("", [0, 0] or []) instead of raising.
"""

import re
from typing import Dict, List


PRICE_RANGE_PATTERN = re.compile(r"(\d+)-(\d+)")
COMPARISON_PATTERN = re.compile(r"compare (.+) and (.+)", re.IGNORECASE)
WORD_PATTERN = re.compile(r"\w+")


def extract_keyword(query: str, label: str) -> str:
    """
    Extract the text that follows a label.

    "brand Nike" with label "brand" -> "Nike". Everything after the label and a
    single space is taken, so "brand Nike running shoes" -> "Nike running shoes".

    Returns: Trimmed remainder, or "" when the label is absent
    """
    pattern = re.escape(label) + r" (.+)"
    match = re.search(pattern, query, re.IGNORECASE)
    return match.group(1).strip() if match else ""


def extract_price_range(query: str) -> List[int]:
    """
    Extract a "min-max" price range.

    Returns: [min, max], or [0, 0] when no digits-digits pair is present
    """
    match = PRICE_RANGE_PATTERN.search(query)
    if not match:
        return [0, 0]
    return [int(match.group(1)), int(match.group(2))]


def extract_comparison_items(query: str) -> List[str]:
    """
    Extract the two product names from "compare X and Y".

    Returns: [X, Y] trimmed, or [] when the query is not shaped like a comparison
    """
    match = COMPARISON_PATTERN.search(query)
    if not match:
        return []
    return [match.group(1).strip(), match.group(2).strip()]


def has_comparison_pair(query: str) -> bool:
    return COMPARISON_PATTERN.search(query) is not None


def tokenize(query: str) -> List[str]:
    """Split text into word tokens; punctuation and whitespace separate tokens."""
    return WORD_PATTERN.findall(query)


def process_query(query: str) -> Dict[str, str]:
    """Fallback for unclassified queries: echo the tokens back."""
    tokens = tokenize(query)
    return {"message": f"You asked about: {' '.join(tokens)}"}
