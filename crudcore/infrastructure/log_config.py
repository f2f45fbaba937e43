"""Logging configuration.

Applies per-category log levels from Settings so that noisy loggers
(SQLAlchemy statement echo, connection pool) can be silenced without
affecting the rest of the application.

Usage:
    from crudcore.infrastructure.log_config import setup_logging
    setup_logging()   # once at startup
"""

from __future__ import annotations

import logging
import sys

from crudcore.infrastructure.database import Settings, settings as default_settings

# Settings field → logger names it controls.
_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
    ],
}


def setup_logging(settings: Settings | None = None) -> None:
    settings = settings or default_settings
    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    # Test runners and scripts may not have installed a handler.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)-8s %(name)s - %(message)s"))
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field, "INFO"))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s, sql=%s", settings.log_level, settings.log_level_sql
    )


def _parse_level(raw: str) -> int:
    """Convert a level name to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
