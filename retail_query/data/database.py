"""
Database engine and session management.
Uses SQLAlchemy for Postgres connections.

Nothing here is created at import time: the app factory builds the engine from
ServiceConfig and keeps it (plus its session factory) on ``app.state``.
"""

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from retail_query.core.config import ServiceConfig
from retail_query.utils.logger import get_logger

logger = get_logger("data.database")

# Base class for the product catalog models
Base = declarative_base()


def build_engine(config: ServiceConfig) -> Engine:
    """
    Create the engine (and its connection pool) for the configured database.

    pool_pre_ping ensures pooled connections are alive before they are handed out.

    Raises:
        ConfigurationError: If the database URL cannot be assembled
    """
    url = config.sqlalchemy_url()
    kwargs = {"pool_pre_ping": True}
    if not url.startswith("sqlite"):
        kwargs.update(pool_size=config.pool_size, max_overflow=config.max_overflow)

    engine = create_engine(url, **kwargs)
    logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def ping(engine: Engine) -> None:
    """Run SELECT 1; raises whatever the driver raises when the database is unreachable."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def get_db(request: Request):
    """
    Dependency function that provides a database session.
    The session comes from the factory the app was built with and is closed
    after the request is done.

    Usage in FastAPI:
        @app.post("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
