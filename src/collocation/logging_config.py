import logging
from logging.config import dictConfig

from .config import settings

_FORMATS = {
    "dev": "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    "brief": "%(levelname)s %(name)s: %(message)s",
}


def setup_logging(level: str | None = None) -> None:
    """
    Route log records to a single console handler.

    The level defaults to `settings.log_level`; unknown names fall back to INFO.
    Outside the "dev" environment a shorter format without timestamps is used.
    """
    level_name = (level or settings.log_level).upper()
    resolved = getattr(logging, level_name, logging.INFO)
    if not isinstance(resolved, int):
        resolved = logging.INFO
    formatter = "dev" if settings.environment == "dev" else "brief"

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {name: {"format": fmt} for name, fmt in _FORMATS.items()},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "level": resolved,
            }
        },
        "loggers": {
            # package records pass through the root handler only
            "collocation": {"level": resolved, "propagate": True},
        },
        "root": {
            "handlers": ["console"],
            "level": resolved,
        },
    }

    dictConfig(config)


__all__ = ["setup_logging"]
