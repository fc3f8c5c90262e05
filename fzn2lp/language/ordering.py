"""
Statement Ordering - Phase Tracking

Tracks where a statement stream is in the canonical FlatZinc order:
- predicates, parameters, variables, constraints, solve item
- constraint numbering (c1, c2, ...)
- exactly one solve item per stream

Out-of-order statements are observed, not blocked: they are reported and
translated according to their own kind.
"""

from typing import List, Literal, Optional
from dataclasses import dataclass
from enum import IntEnum
import logging

from fzn2lp.core.errors import (
    TranslationError, MultipleSolveItems, NoSolveItem, OrderingViolation,
)
from fzn2lp.core.logging import get_logger
from .ast import (
    Statement, Comment, PredicateDecl, ParameterDecl, VariableDecl,
    ConstraintItem, SolveGoal,
)


OrderingViolationBehavior = Literal["warn", "fail", "ignore"]


class Phase(IntEnum):
    START = 0
    PREDICATES = 1
    PARAMETERS = 2
    VARIABLES = 3
    CONSTRAINTS = 4
    SOLVE = 5


@dataclass
class TranslationState:
    """Per-stream state; created once, never reset mid-stream."""
    phase: int = Phase.START
    constraint_counter: int = 0

    @property
    def constraint_id(self) -> str:
        return f"c{self.constraint_counter}"


class OrderingStateMachine:
    """
    Phase gate in front of the fact emitters.

    on_violation:
        - "warn" (default): log the out-of-order statement and continue
        - "fail": raise OrderingViolation
        - "ignore": continue silently
    """

    def __init__(
        self,
        on_violation: OrderingViolationBehavior = "warn",
        logger: Optional[logging.Logger] = None,
    ):
        self.state = TranslationState()
        self.on_violation = on_violation
        self.logger = logger or get_logger(__name__)
        self.violations: List[str] = []

    def observe(self, stmt: Statement) -> None:
        """Check stmt against the current phase and advance the state."""
        state = self.state

        if isinstance(stmt, Comment):
            return

        if isinstance(stmt, PredicateDecl):
            # Predicates belong to phase 1 but never move the phase
            if state.phase > Phase.PREDICATES:
                self._violation(stmt, "predicate")
            return

        if isinstance(stmt, ParameterDecl):
            self._enter(stmt, Phase.PARAMETERS, "parameter")
            return

        if isinstance(stmt, VariableDecl):
            self._enter(stmt, Phase.VARIABLES, "variable")
            return

        if isinstance(stmt, ConstraintItem):
            self._enter(stmt, Phase.CONSTRAINTS, "constraint")
            state.constraint_counter += 1
            return

        if isinstance(stmt, SolveGoal):
            if state.phase == Phase.SOLVE:
                raise MultipleSolveItems(stmt.location)
            state.phase = Phase.SOLVE
            return

        raise TranslationError(
            f"Unsupported statement type: {stmt.__class__.__name__}",
            getattr(stmt, "location", None)
        )

    def finish(self) -> None:
        """End of stream: a solve item must have been seen."""
        if self.state.phase < Phase.SOLVE:
            raise NoSolveItem()

    def _enter(self, stmt: Statement, phase: Phase, kind: str) -> None:
        if self.state.phase > phase:
            self._violation(stmt, kind)
        else:
            self.state.phase = phase

    def _violation(self, stmt: Statement, kind: str) -> None:
        current = Phase(self.state.phase).name.lower()
        msg = f"Statements in wrong order: {kind} '{_name(stmt)}' after {current}"
        if stmt.location:
            msg = f"Line {stmt.location[0]}: {msg}"

        if self.on_violation == "ignore":
            return
        if self.on_violation == "fail":
            raise OrderingViolation(msg)

        self.logger.warning(msg)
        self.violations.append(msg)


def _name(stmt: Statement) -> str:
    return getattr(stmt, "name", stmt.__class__.__name__)
