import logging.config
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "TURNLOOP_LOG_LEVEL"


def configure_logging(level: Optional[str] = None):
    level = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,

        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
        },

        "handlers": {
            "console": {
                "level": level,
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": sys.stdout,
            },
        },

        "loggers": {
            "turnloop": {
                "handlers": ["console"],
                "level": level,
                "propagate": False
            },
        }
    }

    logging.config.dictConfig(logging_config)
