"""
fzn2lp - Streaming Runtime

Drives a whole FlatZinc stream through the translator:
- groups raw lines into parseable units
- parses each unit and translates its statements in order
- writes facts to the sink one statement at a time (never buffers the model)
- checks for the solve item at end of stream
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, TextIO, Tuple
import re
import time

from .core.errors import TranslationError, InputParseError
from .core.logging import get_logger
from .language.ast import Comment, ConstraintItem, SolveGoal
from .language.parser import FznParser, ParseError
from .language.ordering import OrderingViolationBehavior
from .language.translator import FactTranslator
from .engines.facts.annotations import MalformedAnnotationBehavior

logger = get_logger(__name__)


@dataclass(frozen=True)
class TranslatorConfig:
    """
    Translation behavior toggles. Ordering problems warn, malformed annotations fail.
    """
    ordering_violation_behavior: OrderingViolationBehavior = "warn"
    malformed_annotation_behavior: MalformedAnnotationBehavior = "fail"
    echo_comments: bool = True
    flush_each_statement: bool = True


@dataclass
class TranslationResult:
    """Summary of a translation run (stable, audit-friendly)."""
    statements: int = 0
    facts: int = 0
    comments: int = 0
    constraints: int = 0
    warnings: List[str] = field(default_factory=list)
    solve_goal: Optional[str] = None
    latency_ms: float = 0.0

    @property
    def is_clean(self) -> bool:
        return len(self.warnings) == 0


_STRING = re.compile(r'"([^"\\]|\\.)*"')


def _code_part(line: str) -> str:
    """Line without strings and trailing comment"""
    return _STRING.sub('""', line).split('%', 1)[0]


def iter_statement_units(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    """
    Group raw lines into parseable units.

    Yields (first_line_number, text). A unit ends at a line whose code ends
    with ';'; a comment-only line is a unit of its own; blank lines are
    skipped. A trailing incomplete unit is still yielded so the parser can
    report it.
    """
    buffer: List[str] = []
    start = 0

    for lineno, line in enumerate(lines, 1):
        if not buffer:
            if not line.strip():
                continue
            if line.lstrip().startswith('%'):
                yield lineno, line
                continue
            start = lineno

        buffer.append(line)
        if _code_part(line).rstrip().endswith(';'):
            yield start, "".join(buffer)
            buffer = []

    if buffer and "".join(buffer).strip():
        yield start, "".join(buffer)


class FactStream:
    """
    Streaming translator front end.

    Usage:
        stream = FactStream(TranslatorConfig(echo_comments=False))
        result = stream.run(open("model.fzn"), sys.stdout)
    """

    def __init__(self, config: Optional[TranslatorConfig] = None):
        self.config = config or TranslatorConfig()
        self.parser = FznParser()

    def run(self, lines: Iterable[str], out: TextIO) -> TranslationResult:
        """
        Translate every statement read from lines into out.

        Raises:
            TranslationError: on the first fatal error; error.result holds
            the partial summary and the facts written so far stay written
        """
        start_time = time.perf_counter()
        translator = FactTranslator(
            ordering_violation_behavior=self.config.ordering_violation_behavior,
            malformed_annotation_behavior=self.config.malformed_annotation_behavior,
            echo_comments=self.config.echo_comments,
        )
        result = TranslationResult()

        try:
            for first_line, unit in self._units(lines):
                try:
                    statements = self.parser.parse(unit, first_line)
                except ParseError as e:
                    raise InputParseError(e) from e

                for stmt in statements:
                    facts = translator.translate(stmt)
                    for fact in facts:
                        out.write(fact + "\n")
                    if self.config.flush_each_statement:
                        out.flush()
                    self._count(result, stmt, facts)

            translator.finish()
        except TranslationError as e:
            e.result = self._finalize(result, translator, start_time)
            raise

        return self._finalize(result, translator, start_time)

    @staticmethod
    def _units(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
        # Undecodable input is reported like any other unreadable unit
        try:
            yield from iter_statement_units(lines)
        except UnicodeDecodeError as e:
            raise InputParseError(e) from e

    def _count(self, result: TranslationResult, stmt, facts: List[str]) -> None:
        result.statements += 1
        if isinstance(stmt, Comment):
            result.comments += 1
        else:
            result.facts += len(facts)
        if isinstance(stmt, ConstraintItem):
            result.constraints += 1
        if isinstance(stmt, SolveGoal):
            result.solve_goal = stmt.kind.value
        logger.debug("%r -> %d line(s)", stmt, len(facts))

    def _finalize(self, result: TranslationResult, translator: FactTranslator, start_time: float) -> TranslationResult:
        result.warnings = list(translator.warnings)
        result.latency_ms = float((time.perf_counter() - start_time) * 1000.0)
        return result
