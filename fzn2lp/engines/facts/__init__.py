from __future__ import annotations

from .encoder import EncodingMode, encode_value, encode_type, encode_variable_type, float_literal, float_text
from .annotations import AnnotationInterpreter
from .emitters import (
    emit_comment,
    emit_predicate,
    emit_parameter,
    emit_variable,
    emit_constraint,
    emit_solve,
)

__all__ = [
    "EncodingMode",
    "encode_value",
    "encode_type",
    "encode_variable_type",
    "float_literal",
    "float_text",
    "AnnotationInterpreter",
    "emit_comment",
    "emit_predicate",
    "emit_parameter",
    "emit_variable",
    "emit_constraint",
    "emit_solve",
]
