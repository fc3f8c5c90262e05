"""
Fact Translator - AST to Logic-Program Facts

Translates FlatZinc statements into ground facts for answer-set / Prolog
style reasoners.

Architecture:
1. Ordering: every statement passes the phase state machine first
   (phase order, constraint numbering, single solve item).
2. Emission: the statement is routed to the emitter for its own kind,
   which composes encoder fragments into complete fact lines.
"""

from typing import List, Optional
import logging

from fzn2lp.core.errors import (
    TranslationError, MultipleSolveItems, NoSolveItem, InputParseError,
    MalformedAnnotation, OrderingViolation,
)
from fzn2lp.core.logging import get_logger
from fzn2lp.engines.facts import (
    AnnotationInterpreter,
    emit_comment,
    emit_predicate,
    emit_parameter,
    emit_variable,
    emit_constraint,
    emit_solve,
)
from fzn2lp.engines.facts.annotations import MalformedAnnotationBehavior
from .ast import (
    Statement, Comment, PredicateDecl, ParameterDecl, VariableDecl,
    ConstraintItem,
)
from .ordering import OrderingStateMachine, OrderingViolationBehavior, TranslationState

__all__ = [
    "FactTranslator",
    "TranslationError",
    "MultipleSolveItems",
    "NoSolveItem",
    "InputParseError",
    "MalformedAnnotation",
    "OrderingViolation",
]


class FactTranslator:
    """
    The statement dispatcher.
    One instance translates exactly one stream of statements.

    Usage:
        translator = FactTranslator()
        for stmt in statements:
            for fact in translator.translate(stmt):
                out.write(fact + "\\n")
        translator.finish()
    """

    def __init__(
        self,
        ordering_violation_behavior: OrderingViolationBehavior = "warn",
        malformed_annotation_behavior: MalformedAnnotationBehavior = "fail",
        echo_comments: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or get_logger(__name__)
        self.ordering = OrderingStateMachine(ordering_violation_behavior, self.logger)
        self.annotations = AnnotationInterpreter(malformed_annotation_behavior, self.logger)
        self.echo_comments = echo_comments

    @property
    def state(self) -> TranslationState:
        return self.ordering.state

    @property
    def warnings(self) -> List[str]:
        return self.ordering.violations + self.annotations.warnings

    def translate(self, stmt: Statement) -> List[str]:
        """
        Translate one statement into its fact lines.

        Raises:
            TranslationError: on any fatal condition; the stream must stop
        """
        self.ordering.observe(stmt)

        if isinstance(stmt, Comment):
            return list(emit_comment(stmt)) if self.echo_comments else []

        if isinstance(stmt, PredicateDecl):
            return list(emit_predicate(stmt))

        if isinstance(stmt, ParameterDecl):
            return list(emit_parameter(stmt))

        if isinstance(stmt, VariableDecl):
            return list(emit_variable(stmt, self.annotations))

        if isinstance(stmt, ConstraintItem):
            return list(emit_constraint(stmt, self.state.constraint_id))

        # observe() has already rejected every other statement type
        return list(emit_solve(stmt))

    def translate_all(self, statements) -> List[str]:
        """Translate a complete stream, including the end-of-stream check."""
        facts: List[str] = []
        for stmt in statements:
            facts.extend(self.translate(stmt))
        self.finish()
        return facts

    def finish(self) -> None:
        self.ordering.finish()
