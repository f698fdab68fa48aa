import logging.config

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
        },
    },
    "root": {"level": "INFO", "handlers": ["console"]},
}


def configure_logging(level: str = "INFO") -> None:
    """Install the single-line JSON console logging used by the service and the CLI."""
    config = {**LOGGING_CONFIG, "root": {**LOGGING_CONFIG["root"], "level": level.upper()}}
    logging.config.dictConfig(config)
