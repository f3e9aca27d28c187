"""
Retail Query API module.

Provides the FastAPI application factory for the query service.
"""
from retail_query.api.server import create_app

__all__ = ['create_app']
