"""
Logging for Quality Lens.

Handlers live on the ``quality_lens`` package logger, never on the root
logger, so an application embedding the library keeps its own logging
setup. Calling setup_logging again replaces the handlers it installed.
Records are rendered by rich on stderr and never mix with report output
written to stdout.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "quality_lens"

# AnalysisConfig.verbosity -> logging level
VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Install the rich stderr handler (and an optional file handler).

    Args:
        verbosity: "quiet", "normal" or "verbose", as in AnalysisConfig
        log_file: Optional path; records are appended in plain text

    Returns:
        The quality_lens package logger
    """
    level = VERBOSITY_LEVELS[verbosity]
    verbose = level == logging.DEBUG

    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_path=verbose,
        )
    )

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the quality_lens namespace (the package logger for None)."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
