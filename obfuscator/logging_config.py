"""Root logging configuration for the API and CLI entry points.

`setup_logging()` is idempotent; the first call wins.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# Third-party loggers kept at WARNING unless DEBUG is requested
_SUPPRESSED_LOGGERS = ("uvicorn.access",)

_logging_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once.

    Args:
        level: Log level name, e.g. `INFO`.

    Returns:
        None: Logging is configured as side effect.

    Raises:
        AttributeError: Raised when level is not a logging level name.
    """
    global _logging_configured  # noqa: PLW0603
    if _logging_configured:
        return
    _logging_configured = True

    numeric_level = getattr(logging, level.upper())
    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    if numeric_level > logging.DEBUG:
        for name in _SUPPRESSED_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
