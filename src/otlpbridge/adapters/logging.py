"""Standard-library logging setup for otlpbridge processes.

The engine modules only create module loggers; a host process calls
``configure_logging`` once at startup to decide where records go.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

# Loggers whose DEBUG output is one line per record.
_PER_RECORD_LOGGERS = ("otlpbridge.core.rules", "otlpbridge.pipeline")


def get_logger(name: str) -> logging.Logger:
    """Return a logger in the otlpbridge namespace.

    Example:
        ```python
        from otlpbridge import get_logger

        logger = get_logger(__name__)
        ```
    """
    return logging.getLogger(name)


def configure_logging(level: str = "INFO", per_record_debug: bool = False) -> None:
    """Configure root logging with a stderr stream handler.

    Args:
        level: Log level name (e.g., "DEBUG", "INFO"). Unknown names fall
            back to INFO.
        per_record_debug: Keep per-record DEBUG lines (rule matches, skips).
            When False those loggers are capped at INFO even if ``level``
            is DEBUG.
    """
    resolved = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(resolved, int):
        resolved = logging.INFO
    logging.basicConfig(
        level=resolved,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    for name in _PER_RECORD_LOGGERS:
        logging.getLogger(name).setLevel(
            logging.NOTSET if per_record_debug else max(resolved, logging.INFO)
        )
