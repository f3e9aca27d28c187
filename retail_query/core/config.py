"""
Configuration management for the retail query service.

Non-secret defaults are read from config/default.yaml; connection parameters,
port and runtime mode come from the environment (optionally via a .env file)
and always take precedence.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import quote_plus

import yaml
from dotenv import load_dotenv


def _project_root() -> Path:
    """Return project root (parent of retail_query package)."""
    return Path(__file__).resolve().parent.parent.parent


DEFAULT_CONFIG_PATH = _project_root() / "config" / "default.yaml"

DB_ENV_VARS = ("DB_USER", "DB_HOST", "DB_NAME")


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


@dataclass
class ServiceConfig:
    """Settings for the HTTP server and its database connection."""

    # Server
    host: str = "0.0.0.0"
    port: int = 5001
    env: str = "production"
    log_level: str = "INFO"
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])

    # Database
    database_url: Optional[str] = None
    db_user: Optional[str] = None
    db_password: Optional[str] = None
    db_host: Optional[str] = None
    db_port: int = 5432
    db_name: Optional[str] = None
    pool_size: int = 10
    max_overflow: int = 20

    @property
    def is_development(self) -> bool:
        return self.env.lower() in ("development", "dev")

    def sqlalchemy_url(self) -> str:
        """
        Return the SQLAlchemy URL for the product database.

        DATABASE_URL wins when set; otherwise the DB_* parameters are assembled
        into a PostgreSQL URL.

        Raises:
            ConfigurationError: If neither form is fully configured.
        """
        if self.database_url:
            return self.database_url

        values = {"DB_USER": self.db_user, "DB_HOST": self.db_host, "DB_NAME": self.db_name}
        missing = [key for key in DB_ENV_VARS if not values[key]]
        if missing:
            raise ConfigurationError(
                f"Missing database settings: {', '.join(missing)}. "
                f"Set DATABASE_URL or the DB_* variables in your .env file."
            )

        credentials = quote_plus(self.db_user)
        if self.db_password:
            credentials += ":" + quote_plus(self.db_password)
        return f"postgresql+psycopg2://{credentials}@{self.db_host}:{self.db_port}/{self.db_name}"

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "ServiceConfig":
        """Load file defaults only. A missing file yields the dataclass defaults."""
        path = config_path or DEFAULT_CONFIG_PATH
        if not path.exists():
            return cls()

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        server = data.get("server", {})
        database = data.get("database", {})
        cors = data.get("cors", {})

        return cls(
            host=server.get("host", "0.0.0.0"),
            port=int(server.get("port", 5001)),
            log_level=server.get("log_level", "INFO"),
            cors_allow_origins=list(cors.get("allow_origins", ["*"])),
            pool_size=int(database.get("pool_size", 10)),
            max_overflow=int(database.get("max_overflow", 20)),
        )

    @classmethod
    def from_env(
        cls,
        config_path: Optional[Path] = None,
        environ: Optional[Dict[str, Any]] = None,
    ) -> "ServiceConfig":
        """
        Load file defaults, then apply environment overrides.

        Args:
            config_path: YAML file with non-secret defaults
            environ: Mapping to read instead of os.environ (tests pass a dict)

        Returns:
            ServiceConfig
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        config = cls.from_yaml(config_path)

        config.host = environ.get("HOST", config.host)
        config.port = int(environ.get("PORT") or config.port)
        config.env = environ.get("ENV", config.env)
        config.log_level = environ.get("LOG_LEVEL", config.log_level)

        config.database_url = environ.get("DATABASE_URL") or None
        config.db_user = environ.get("DB_USER") or None
        config.db_password = environ.get("DB_PASSWORD") or None
        config.db_host = environ.get("DB_HOST") or None
        config.db_port = int(environ.get("DB_PORT") or config.db_port)
        config.db_name = environ.get("DB_NAME") or None

        return config
