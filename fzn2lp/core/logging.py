import logging
import os

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "fzn2lp"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)

    if not root.handlers:
        # Log level from environment, warnings by default
        log_level_str = os.getenv("FZN2LP_LOG_LEVEL", "WARNING").upper()
        root.setLevel(getattr(logging, log_level_str, logging.WARNING))

        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)

        # Facts go to stdout; diagnostics must never leak into a parent's handlers
        root.propagate = False

    return root


def get_logger(name: str) -> logging.Logger:
    """
    Returns a logger under the fzn2lp namespace.
    The namespace root gets a single stderr handler on first use.
    """
    _configure_root()
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_level(level: int) -> None:
    """Override the level picked from FZN2LP_LOG_LEVEL (used by the CLI flags)."""
    _configure_root().setLevel(level)


# Default library logger
logger = get_logger(ROOT_LOGGER_NAME)
