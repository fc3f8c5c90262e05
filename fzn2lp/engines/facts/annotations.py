"""
Annotation interpreter.

Only two annotations carry meaning for the emitted facts:
- output_var on scalar variables  -> output_var("x").
- output_array on array variables -> output_array("x",pos,(lb,ub)). per index range
Every other annotation is ignored.
"""

from typing import List, Literal as TypingLiteral, Optional
import logging

from fzn2lp.core.errors import MalformedAnnotation
from fzn2lp.core.logging import get_logger
from fzn2lp.language.ast import (
    Annotation, ArrayLiteral, Literal, RangeLiteral, VariableDecl,
)
from .encoder import identifier, int_literal


MalformedAnnotationBehavior = TypingLiteral["fail", "warn"]


class AnnotationInterpreter:
    """
    Emits visibility facts for a variable declaration's annotations.

    malformed_behavior:
        - "fail" (default): a malformed output_array aborts the run
        - "warn": the annotation is logged, recorded and skipped; the rest
          of the declaration is still emitted
    """

    def __init__(
        self,
        malformed_behavior: MalformedAnnotationBehavior = "fail",
        logger: Optional[logging.Logger] = None,
    ):
        self.malformed_behavior = malformed_behavior
        self.logger = logger or get_logger(__name__)
        self.warnings: List[str] = []

    def facts_for(self, decl: VariableDecl) -> List[str]:
        if decl.is_array:
            return self._output_array(decl.name, decl.annotations)
        return self._output_var(decl.name, decl.annotations)

    def _output_var(self, name: str, annotations: List[Annotation]) -> List[str]:
        for annotation in annotations:
            if annotation.name == "output_var":
                # first match wins
                return [f"output_var({identifier(name)})."]
        return []

    def _output_array(self, name: str, annotations: List[Annotation]) -> List[str]:
        for annotation in annotations:
            if annotation.name != "output_array":
                continue
            try:
                bounds = self._index_ranges(annotation)
            except MalformedAnnotation as e:
                if self.malformed_behavior == "fail":
                    raise
                msg = f"Skipping annotation on '{name}': {e}"
                self.logger.warning(msg)
                self.warnings.append(msg)
                return []
            return [
                f"output_array({identifier(name)},{pos},({int_literal(lb)},{int_literal(ub)}))."
                for pos, (lb, ub) in enumerate(bounds)
            ]
        return []

    def _index_ranges(self, annotation: Annotation) -> List[tuple]:
        """Validate the whole argument before anything is emitted."""
        args = annotation.arguments
        if not args or not isinstance(args[0], ArrayLiteral):
            raise MalformedAnnotation(
                "output_array expects an array of index sets",
                annotation.location
            )

        bounds = []
        for element in args[0].elements:
            if not (
                isinstance(element, RangeLiteral)
                and _is_int(element.lower)
                and _is_int(element.upper)
            ):
                raise MalformedAnnotation(
                    f"output_array expects integer index ranges, got {element!r}",
                    getattr(element, "location", None) or annotation.location
                )
            bounds.append((element.lower.value, element.upper.value))
        return bounds


def _is_int(expr) -> bool:
    return isinstance(expr, Literal) and expr.type == "int"
