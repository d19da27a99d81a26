"""
Logging setup for the Gym Management API.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger the first time it is called.  SQL echo
from SQLAlchemy is kept at WARNING so that per‑request queries do not
flood the console; raise ``sqlalchemy.engine`` to INFO when debugging
the generated statements.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to INFO.
    logfile : Optional[str]
        Path of a file that receives the same records as the console.
        Empty or ``None`` disables file logging.
    """
    root = logging.getLogger()
    if root.handlers:
        # Already configured (tests, repeated create_app calls, uvicorn reload).
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
