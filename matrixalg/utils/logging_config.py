# matrixalg/utils/logging_config.py
import logging
from typing import Optional

LIBRARY_LOGGER = "matrixalg"

def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Attach a console handler (and optionally a file handler) to the matrixalg logger.

    Args:
        level: Logging level (e.g., logging.INFO, logging.DEBUG).
        log_file: Optional path to a file for logging output.
    """
    logger = logging.getLogger(LIBRARY_LOGGER)
    logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    ch = logging.StreamHandler()
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    if log_file:
        fh = logging.FileHandler(log_file)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

def get_logger(name: str) -> logging.Logger:
    """
    Retrieve a module logger. Library code never configures handlers itself;
    records propagate to whatever `setup_logging` (or the host application) installed.

    Args:
        name: Usually the module's ``__name__``.

    Returns:
        The named logger.
    """
    logger = logging.getLogger(name)
    if name == LIBRARY_LOGGER and not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger

# Silence "no handler" warnings for library users that never call setup_logging.
get_logger(LIBRARY_LOGGER)
