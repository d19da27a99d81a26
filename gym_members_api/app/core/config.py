"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  A ``.env`` file in the working directory is
loaded first so local deployments can keep database credentials out of
the shell.  Defaults are provided for all fields.

The database location is resolved in this order:

1. ``DATABASE_URL`` – a full SQLAlchemy URL, used as is.
2. ``DB_HOST`` – a server database built from ``DB_DIALECT``,
   ``DB_USER``, ``DB_PASSWORD``, ``DB_HOST``, ``DB_PORT`` and ``DB_NAME``.
3. ``SQLITE_PATH`` – an SQLite file, resolved relative to the project
   root when the path is not absolute.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from sqlalchemy.engine import URL

load_dotenv()


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Gym Management API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Listening address for ``run.py``.
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))

    # Comma‑separated list of origins allowed to call the API from a
    # browser.  ``*`` allows any origin.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    explicit_database_url: str = os.getenv("DATABASE_URL", "")
    db_dialect: str = os.getenv("DB_DIALECT", "mysql+pymysql")
    db_host: str = os.getenv("DB_HOST", "")
    db_port: int = int(os.getenv("DB_PORT", "3306"))
    db_name: str = os.getenv("DB_NAME", "gym_management")
    db_user: str = os.getenv("DB_USER", "root")
    db_password: str = os.getenv("DB_PASSWORD", "")
    sqlite_path: str = os.getenv("SQLITE_PATH", "gym_members.db")

    # Base URL of the API as seen by the browser client.
    api_url: str = os.getenv("GYM_API_URL", "http://localhost:5000")

    @property
    def database_url(self) -> str:
        """Return the SQLAlchemy URL for the member table's database."""
        if self.explicit_database_url:
            return self.explicit_database_url
        if self.db_host:
            url = URL.create(
                drivername=self.db_dialect,
                username=self.db_user,
                password=self.db_password or None,
                host=self.db_host,
                port=self.db_port,
                database=self.db_name,
            )
            return url.render_as_string(hide_password=False)
        path = Path(self.sqlite_path)
        if not path.is_absolute():
            # Resolve relative to the project root (parent of gym_members_api/)
            path = Path(__file__).resolve().parent.parent.parent.parent / path
        return f"sqlite:///{path}"

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before importing this module.
settings = Settings()
