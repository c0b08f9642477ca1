"""Logging setup for applications embedding the runtime."""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are noisy at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "anthropic", "aiosqlite")


def configure_logging(verbose: bool = False) -> None:
    """
    Configure root logging.

    Args:
        verbose: Log at DEBUG, including third-party HTTP clients
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=log_level, format=LOG_FORMAT)

    # Suppress noisy loggers in non-verbose mode
    if not verbose:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
