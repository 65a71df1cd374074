"""
Logging setup for the ``trimeshcal`` namespace.
The library modules only create loggers; call setup_logging() from applications.
"""
from __future__ import annotations
import logging
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler

def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the 'trimeshcal' logger.

    Args:
        level: logging level (logging.DEBUG, logging.INFO, ...)
        log_file: optional path to also write plain-text logs to.
    """
    logger = logging.getLogger("trimeshcal")
    logger.setLevel(level)
    # avoid duplicate handlers when called twice
    for h in list(logger.handlers):
        logger.removeHandler(h); h.close()

    console = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    console.setLevel(level)
    logger.addHandler(console)

    if log_file:
        fh = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                                          datefmt="%H:%M:%S"))
        logger.addHandler(fh)
    logger.propagate = False
    return logger
