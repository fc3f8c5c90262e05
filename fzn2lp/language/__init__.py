from __future__ import annotations

from .ast import Statement, Comment, PredicateDecl, ParameterDecl, VariableDecl, ConstraintItem, SolveGoal
from .parser import FznParser, ParseError, parse_fzn, parse_fzn_file, parse_statement
from .ordering import OrderingStateMachine, TranslationState, Phase
from .translator import FactTranslator

__all__ = [
    "Statement",
    "Comment",
    "PredicateDecl",
    "ParameterDecl",
    "VariableDecl",
    "ConstraintItem",
    "SolveGoal",
    "FznParser",
    "ParseError",
    "parse_fzn",
    "parse_fzn_file",
    "parse_statement",
    "OrderingStateMachine",
    "TranslationState",
    "Phase",
    "FactTranslator",
]
