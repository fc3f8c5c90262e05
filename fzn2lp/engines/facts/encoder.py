"""
Value and type encoders.

Turns AST expressions and declared types into the comma-separated fact
fragments that the emitters splice into complete facts. Every encoder is a
pure generator: one fragment per leaf, so sets and arrays (of sets) expand
to several fragments and each becomes its own fact line.

Two modes share the same recursion for values:
- EXPRESSION: a value occurrence (initializers, constraint arguments, goals)
- DECLARATION: a literal that fixes a parameter (float ranges use `bounds`)
"""

from decimal import Decimal
from enum import Enum
from typing import Iterator
import math

from fzn2lp.core.errors import TranslationError
from fzn2lp.language.ast import (
    Expression, Literal, Identifier, RangeLiteral, SetLiteral, ArrayLiteral,
    TypeExpr, ScalarType, IntRangeType, IntSetType, FloatRangeType, FloatSetType,
    SetOfIntType, SubsetOfRangeType, SubsetOfSetType, ArrayType,
)


EMPTY_SET = "empty_set"


class EncodingMode(Enum):
    EXPRESSION = "expression"
    DECLARATION = "declaration"


# ============================================================================
# LITERALS
# ============================================================================

def identifier(name: str) -> str:
    return f'"{name}"'


def bool_literal(value: bool) -> str:
    return "true" if value else "false"


def int_literal(value: int) -> str:
    return str(value)


def float_text(value: float) -> str:
    """
    Shortest round-trip decimal in positional notation.

    1.0 -> 1, 42.1 -> 42.1, 1e-07 -> 0.0000001, 1e+22 -> 10000000000000000000000
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return format(Decimal(repr(value)).normalize(), "f")


def float_literal(value: float) -> str:
    return f'"{float_text(value)}"'


def _literal(expr: Literal) -> str:
    if expr.type == "bool":
        return bool_literal(expr.value)
    if expr.type == "int":
        return int_literal(expr.value)
    if expr.type == "float":
        return float_literal(expr.value)
    raise TranslationError(
        f"Cannot encode {expr.type} literal {expr.value!r} as a value",
        expr.location
    )


# ============================================================================
# VALUES
# ============================================================================

def encode_value(expr: Expression, mode: EncodingMode = EncodingMode.EXPRESSION) -> Iterator[str]:
    """
    Encode an expression into one or more fragments.

    Arrays tag every fragment of element i with i, so an array of sets
    yields one fragment per (index, set element) pair.
    """
    if isinstance(expr, Literal):
        yield f"value,{_literal(expr)}"

    elif isinstance(expr, Identifier):
        yield f"var,{identifier(expr.name)}"

    elif isinstance(expr, RangeLiteral):
        yield _encode_range(expr, mode)

    elif isinstance(expr, SetLiteral):
        if not expr.elements:
            yield EMPTY_SET
            return
        for element in expr.elements:
            for fragment in encode_value(element, mode):
                yield f"set,({fragment})"

    elif isinstance(expr, ArrayLiteral):
        for index, element in enumerate(expr.elements):
            for fragment in encode_value(element, mode):
                yield f"array,({index},{fragment})"

    else:
        # Annotations and unknown nodes -> fail closed
        raise TranslationError(
            f"Unsupported expression type: {expr.__class__.__name__}",
            getattr(expr, "location", None)
        )


def _encode_range(expr: RangeLiteral, mode: EncodingMode) -> str:
    lower = _single(expr.lower, mode)
    upper = _single(expr.upper, mode)
    if not expr.is_float:
        return f"range,({lower},{upper})"
    if mode == EncodingMode.DECLARATION:
        return f"bounds,({lower},{upper})"
    return f"float_bound,({lower},{upper})"


def _single(expr: Expression, mode: EncodingMode) -> str:
    if not isinstance(expr, (Literal, Identifier)):
        raise TranslationError(
            f"Range bounds must be literals or identifiers, got {expr.__class__.__name__}",
            getattr(expr, "location", None)
        )
    return next(encode_value(expr, mode))


# ============================================================================
# DECLARED TYPES
# ============================================================================

def encode_type(type_expr: TypeExpr) -> Iterator[str]:
    """
    Encode a declared type; enumerated domains give one fragment per value.
    """
    if isinstance(type_expr, ScalarType):
        yield type_expr.base.value

    elif isinstance(type_expr, IntRangeType):
        yield f"range,(value,{int_literal(type_expr.lb)},value,{int_literal(type_expr.ub)})"

    elif isinstance(type_expr, IntSetType):
        if not type_expr.values:
            yield EMPTY_SET
        for value in type_expr.values:
            yield f"set,(value,{int_literal(value)})"

    elif isinstance(type_expr, FloatRangeType):
        yield f"float,(bounds,value,{float_literal(type_expr.lb)},value,{float_literal(type_expr.ub)})"

    elif isinstance(type_expr, FloatSetType):
        if not type_expr.values:
            yield EMPTY_SET
        for value in type_expr.values:
            yield f"float_in_set({float_text(value)})"

    elif isinstance(type_expr, SetOfIntType):
        yield "set_of_int"

    elif isinstance(type_expr, SubsetOfRangeType):
        yield f"set_of_int,(range,value,{int_literal(type_expr.lb)},value,{int_literal(type_expr.ub)})"

    elif isinstance(type_expr, SubsetOfSetType):
        if not type_expr.values:
            yield f"set_of_int,{EMPTY_SET}"
        for value in type_expr.values:
            yield f"set_of_int,(set,value,{int_literal(value)})"

    elif isinstance(type_expr, ArrayType):
        for fragment in encode_type(type_expr.element):
            yield f"array({_index(type_expr)},{fragment})"

    else:
        raise TranslationError(
            f"Unsupported type: {type_expr.__class__.__name__}",
            getattr(type_expr, "location", None)
        )


def encode_variable_type(type_expr: TypeExpr) -> Iterator[str]:
    """Declared type of a variable; arrays of unbounded int sets are tagged `set`."""
    if isinstance(type_expr, ArrayType) and isinstance(type_expr.element, SetOfIntType):
        yield f"array({_index(type_expr)},set)"
        return
    yield from encode_type(type_expr)


def _index(type_expr: ArrayType) -> str:
    return "int" if type_expr.size is None else str(type_expr.size)
