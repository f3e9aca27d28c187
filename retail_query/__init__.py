"""
Retail Query - keyword-routed natural language queries over a product catalog

A small service that:
- Classifies free-text questions into fixed catalog intents by keyword
- Extracts brands, categories, price ranges and comparison pairs with regexes
- Answers each intent with a single read-only SQL query
"""

__version__ = '0.1.0'

from retail_query.core.config import ServiceConfig, ConfigurationError
from retail_query.core.router import Intent, classify, route

__all__ = [
    'ServiceConfig',
    'ConfigurationError',
    'Intent',
    'classify',
    'route',
]
