"""
Core module for fzn2lp.
Provides the fatal error types and logging.
"""
from .errors import (
    TranslationError, MultipleSolveItems, NoSolveItem, InputParseError,
    MalformedAnnotation, OrderingViolation,
)
from .logging import get_logger, set_level

__all__ = [
    "TranslationError", "MultipleSolveItems", "NoSolveItem", "InputParseError",
    "MalformedAnnotation", "OrderingViolation",
    "get_logger", "set_level",
]
