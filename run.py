"""Entry point for the Gym Management API.

Starts the FastAPI application with Uvicorn.  Host and port come from
the ``HOST`` and ``PORT`` environment variables (or a ``.env`` file in
the project root); defaults are ``0.0.0.0`` and ``5000``.

Usage:
    python run.py

The browser client is started separately:
    streamlit run gym_members_web.py
"""
import logging

from uvicorn import Config, Server

from gym_members_api.app.core.config import settings
from gym_members_api.app.main import app


def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Server running on port %s", settings.port)
    server.run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
