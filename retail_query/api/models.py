"""
Pydantic models for the retail query API.
"""
from pydantic import BaseModel, Field
from typing import Optional


class MessageResponse(BaseModel):
    """Body for message-style answers and for every error response."""
    message: str
    stack: Optional[str] = Field(default=None, description="Traceback, development mode only")


class HealthResponse(BaseModel):
    """Response model for the health endpoint."""
    status: str
    service: str
    version: str
    database: str
