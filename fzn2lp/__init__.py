"""
fzn2lp - FlatZinc to logic-program facts.

Translates FlatZinc constraint models into ground facts for answer-set /
Prolog style reasoners.
"""

from .core.errors import (
    TranslationError, MultipleSolveItems, NoSolveItem, InputParseError,
    MalformedAnnotation, OrderingViolation,
)
from .language import FactTranslator, FznParser, ParseError, parse_fzn, parse_statement
from .runtime import FactStream, TranslatorConfig, TranslationResult, iter_statement_units
from .factory import translate_file, translate_string, translate_statements

__version__ = "0.1.0"

__all__ = [
    "TranslationError",
    "MultipleSolveItems",
    "NoSolveItem",
    "InputParseError",
    "MalformedAnnotation",
    "OrderingViolation",
    "FactTranslator",
    "FznParser",
    "ParseError",
    "parse_fzn",
    "parse_statement",
    "FactStream",
    "TranslatorConfig",
    "TranslationResult",
    "iter_statement_units",
    "translate_file",
    "translate_string",
    "translate_statements",
]
