"""Logging setup shared by the app factory and the CLI entry point."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_LEVEL = "INFO"


def setup_logging(level: str = DEFAULT_LEVEL) -> None:
    # getLevelName maps a known name to its number, anything else to a string
    valid = isinstance(logging.getLevelName(level), int)
    resolved = level if valid else DEFAULT_LEVEL

    # basicConfig is a no-op when handlers already exist (uvicorn, pytest)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger("db_keepalive").setLevel(resolved)

    if not valid:
        logging.getLogger(__name__).warning(
            "Unknown LOG_LEVEL %r, using %s", level, DEFAULT_LEVEL
        )
