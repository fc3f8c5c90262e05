"""
Fact emitters, one per statement kind.

Each emitter sees a single statement and yields its complete fact lines
(without trailing newline). No emitter looks at other statements.
"""

from typing import Iterator

from fzn2lp.language.ast import (
    Comment, PredicateDecl, ParameterDecl, VariableDecl, ConstraintItem,
    SolveGoal, GoalKind,
)
from .encoder import EncodingMode, encode_type, encode_value, encode_variable_type, identifier
from .annotations import AnnotationInterpreter


def emit_comment(stmt: Comment) -> Iterator[str]:
    yield f"%{stmt.text}"


def emit_predicate(stmt: PredicateDecl) -> Iterator[str]:
    name = identifier(stmt.name)
    yield f"predicate({name})."
    for pos, param in enumerate(stmt.parameters):
        for fragment in encode_type(param.type):
            yield f"predicate_parameter({name},{pos},{identifier(param.name)},{fragment})."


def emit_parameter(stmt: ParameterDecl) -> Iterator[str]:
    # Parameters are described by their value only, no type facts
    name = identifier(stmt.name)
    for fragment in encode_value(stmt.value, EncodingMode.DECLARATION):
        yield f"parameter_value({name},{fragment})."


def emit_variable(stmt: VariableDecl, annotations: AnnotationInterpreter) -> Iterator[str]:
    name = identifier(stmt.name)
    for fragment in encode_variable_type(stmt.type):
        yield f"variable_type({name},{fragment})."

    if stmt.value is not None:
        for fragment in encode_value(stmt.value, EncodingMode.EXPRESSION):
            yield f"variable_value({name},{fragment})."

    yield from annotations.facts_for(stmt)


def emit_constraint(stmt: ConstraintItem, constraint_id: str) -> Iterator[str]:
    yield f"constraint({constraint_id},{identifier(stmt.name)})."
    for pos, argument in enumerate(stmt.arguments):
        for fragment in encode_value(argument, EncodingMode.EXPRESSION):
            yield f"constraint_value({constraint_id},{pos},{fragment})."


def emit_solve(stmt: SolveGoal) -> Iterator[str]:
    if stmt.kind == GoalKind.SATISFY:
        yield "solve(satisfy)."
        return
    for fragment in encode_value(stmt.objective, EncodingMode.EXPRESSION):
        yield f"solve({stmt.kind.value},{fragment})."
