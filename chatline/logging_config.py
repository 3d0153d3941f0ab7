"""Logging configuration applied by the application factory."""

import logging.config


def setup_logging(log_level: str = "INFO") -> None:
    """Route application and server logs to stderr at ``log_level``."""

    level = log_level.upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                },
            },
            "loggers": {
                "chatline": {"level": level, "handlers": ["console"], "propagate": False},
                "uvicorn.error": {"level": level},
            },
            "root": {"level": "WARNING", "handlers": ["console"]},
        }
    )


__all__ = ["setup_logging"]
