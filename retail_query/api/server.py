"""
FastAPI server for the retail query service.

Exposes POST /query, which classifies a free-text question and answers it
from the product catalog, plus health endpoints.

Usage:
    python -m retail_query.api.server
    # or
    uvicorn retail_query.api.server:create_app --factory --port 5001
"""
import time
import traceback
from typing import Any, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from retail_query import __version__
from retail_query.api.models import HealthResponse, MessageResponse
from retail_query.core.config import ServiceConfig
from retail_query.core.router import route
from retail_query.data.database import build_engine, get_db, make_session_factory, ping
from retail_query.data.product_store import ProductStore
from retail_query.utils.logger import get_logger, setup_logging

logger = get_logger("api.server")

SERVICE_NAME = "retail-query"
INTERNAL_ERROR_MESSAGE = "Internal Server Error"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request: method, path, status and latency."""

    async def dispatch(self, request: Request, call_next):
        t0 = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - t0) * 1000, 1)
        client = request.client.host if request.client else "-"
        logger.info(
            "%s %s %s -> %d  %.1fms",
            client, request.method, request.url.path, response.status_code, duration_ms
        )
        return response


def _error_body(message: str, exc: Exception, config: ServiceConfig) -> dict:
    body = {"message": message}
    if config.is_development:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return body


def register_exception_handlers(app: FastAPI, config: ServiceConfig) -> None:
    """
    Last-resort error handling for anything that escapes a route.

    Every error body carries "message"; "stack" is added only in development.
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail), exc, config),
            headers=getattr(exc, "headers", None),
        )

    # Only bodies that are not valid JSON get here; any JSON value reaches /query
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning("Rejected request body on %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content=_error_body("Invalid request body", exc, config))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
        status_code = getattr(exc, "status_code", None) or getattr(exc, "status", None) or 500
        if not isinstance(status_code, int):
            status_code = 500
        # Server-side failure text stays in the log outside development
        if config.is_development or status_code < 500:
            message = str(exc) or INTERNAL_ERROR_MESSAGE
        else:
            message = INTERNAL_ERROR_MESSAGE
        return JSONResponse(status_code=status_code, content=_error_body(message, exc, config))


def create_app(config: Optional[ServiceConfig] = None, engine: Optional[Engine] = None) -> FastAPI:
    """
    Build the application around an explicitly supplied database engine.

    Args:
        config: Service settings; loaded from config/default.yaml and the environment if omitted
        engine: SQLAlchemy engine to query; built from ``config`` if omitted

    Returns:
        FastAPI app with the engine and its session factory on ``app.state``
    """
    config = config or ServiceConfig.from_env()
    setup_logging(config.log_level)
    engine = engine if engine is not None else build_engine(config)

    app = FastAPI(
        title="Retail Query API",
        description="Keyword-routed natural language queries over the product catalog",
        version=__version__,
    )
    app.state.config = config
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app, config)

    @app.get("/")
    def root():
        return {"service": SERVICE_NAME, "version": __version__, "status": "operational"}

    @app.get("/health", response_model=HealthResponse)
    def health_check(request: Request):
        """Service status plus database connectivity; never raises."""
        status = "healthy"
        try:
            ping(request.app.state.engine)
            database = "connected"
        except Exception as e:
            logger.warning("Database health check failed: %s", e)
            database = f"error: {e.__class__.__name__}"
            status = "degraded"
        return HealthResponse(status=status, service=SERVICE_NAME, version=__version__, database=database)

    @app.post("/query", responses={500: {"model": MessageResponse}})
    def run_query(
        payload: Any = Body(default=None, examples=[{"query": "compare iPhone and Galaxy"}]),
        db: Session = Depends(get_db),
    ):
        """
        Answer a free-text catalog question.

        Depending on the intent the body is a list of rows, a single object or
        {"message": ...}. Any failure while routing or querying is logged and
        answered with a 500 and a fixed message.

        The body is taken as raw JSON: a missing body, a non-object or a
        non-string "query" fails inside the handler like any other error.
        """
        try:
            return route(payload["query"], ProductStore(db))
        except Exception:
            logger.exception("Error handling query body: %r", payload)
            return JSONResponse(status_code=500, content={"message": INTERNAL_ERROR_MESSAGE})

    return app


def main() -> None:
    import uvicorn

    config = ServiceConfig.from_env()
    app = create_app(config)
    logger.info("Server is running on port %d", config.port)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
