"""
Abstract Syntax Tree (AST) for FlatZinc statements

Defines the node types produced by the statement parser and consumed by
the fact translator. Each node represents one syntactic element of a
FlatZinc item: an expression, a declared type, or a whole statement.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union
from enum import Enum


# ============================================================================
# BASE NODE
# ============================================================================

@dataclass(kw_only=True)
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location (line, column) for error reporting
    """
    location: Optional[tuple] = None  # (line, column)

    def __repr__(self):
        return f"{self.__class__.__name__}(...)"


# ============================================================================
# ENUMS
# ============================================================================

class BasicType(Enum):
    """Scalar base types"""
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"


class GoalKind(Enum):
    """Solve goal kinds"""
    SATISFY = "satisfy"
    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"


# ============================================================================
# EXPRESSIONS
# ============================================================================

@dataclass
class Expression(ASTNode):
    """Base class for expressions"""
    pass


@dataclass
class Literal(Expression):
    """Literal value (bool, int, float, string)"""
    value: Union[bool, int, float, str]
    type: str  # "bool", "int", "float", "string"

    def __repr__(self):
        return f"Literal({self.value!r})"


@dataclass
class Identifier(Expression):
    """Reference to a declared parameter or variable"""
    name: str

    def __repr__(self):
        return f"Identifier({self.name})"


@dataclass
class RangeLiteral(Expression):
    """Contiguous range (e.g., 1..10, 23..X, 0.5..1.5)"""
    lower: Expression
    upper: Expression

    @property
    def is_float(self) -> bool:
        """True when either bound is a float literal"""
        return any(
            isinstance(bound, Literal) and bound.type == "float"
            for bound in (self.lower, self.upper)
        )

    def __repr__(self):
        return f"{self.lower}..{self.upper}"


@dataclass
class SetLiteral(Expression):
    """Explicit set (e.g., {1, 3, X}); may be empty"""
    elements: List[Expression] = field(default_factory=list)

    def __repr__(self):
        return "{" + ", ".join(str(e) for e in self.elements) + "}"


@dataclass
class ArrayLiteral(Expression):
    """Array literal (e.g., [42, 17, X]); positions are 0-based"""
    elements: List[Expression] = field(default_factory=list)

    def __repr__(self):
        return "[" + ", ".join(str(e) for e in self.elements) + "]"


@dataclass
class Annotation(Expression):
    """
    Annotation attached to an item (e.g., :: output_array([1..2])).

    Annotation arguments may themselves be annotations, as in
    seq_search([int_search(...), ...]).
    """
    name: str
    arguments: List[Expression] = field(default_factory=list)

    def __repr__(self):
        if not self.arguments:
            return self.name
        args_str = ", ".join(str(a) for a in self.arguments)
        return f"{self.name}({args_str})"


# ============================================================================
# DECLARED TYPES
# ============================================================================

@dataclass
class TypeExpr(ASTNode):
    """Base class for declared types"""
    pass


@dataclass
class ScalarType(TypeExpr):
    """bool, int or float"""
    base: BasicType

    def __repr__(self):
        return self.base.value


@dataclass
class IntRangeType(TypeExpr):
    """Integer domain given as a range (e.g., 1..3)"""
    lb: int
    ub: int

    def __repr__(self):
        return f"{self.lb}..{self.ub}"


@dataclass
class IntSetType(TypeExpr):
    """Integer domain given by enumeration (e.g., {1, 2, 3})"""
    values: List[int] = field(default_factory=list)


@dataclass
class FloatRangeType(TypeExpr):
    """Bounded float domain (e.g., 0.5..1.5)"""
    lb: float
    ub: float

    def __repr__(self):
        return f"{self.lb}..{self.ub}"


@dataclass
class FloatSetType(TypeExpr):
    """Float domain given by enumeration; only used by predicate parameters"""
    values: List[float] = field(default_factory=list)


@dataclass
class SetOfIntType(TypeExpr):
    """Unbounded set of int"""

    def __repr__(self):
        return "set of int"


@dataclass
class SubsetOfRangeType(TypeExpr):
    """Set of int drawn from a range (e.g., set of 17..42)"""
    lb: int
    ub: int

    def __repr__(self):
        return f"set of {self.lb}..{self.ub}"


@dataclass
class SubsetOfSetType(TypeExpr):
    """Set of int drawn from an enumeration (e.g., set of {17, 23, 100})"""
    values: List[int] = field(default_factory=list)


@dataclass
class ArrayType(TypeExpr):
    """
    Array type.

    size is the upper bound of the 1-based index set (array [1..size]),
    or None for the unsized `array [int]` form used by predicate parameters.
    """
    size: Optional[int]
    element: TypeExpr

    def __repr__(self):
        index = "int" if self.size is None else f"1..{self.size}"
        return f"array [{index}] of {self.element}"


# ============================================================================
# STATEMENTS
# ============================================================================

@dataclass
class Statement(ASTNode):
    """Base class for FlatZinc items"""
    pass


@dataclass
class Comment(Statement):
    """Comment line (% text)"""
    text: str


@dataclass
class PredicateParameter(ASTNode):
    """Formal parameter of a predicate declaration"""
    name: str
    type: TypeExpr
    is_var: bool = False

    def __repr__(self):
        prefix = "var " if self.is_var else ""
        return f"{prefix}{self.type}: {self.name}"


@dataclass
class PredicateDecl(Statement):
    """
    Predicate declaration

    Example: predicate my_pred(var int: x, array [int] of var int: y);
    """
    name: str
    parameters: List[PredicateParameter] = field(default_factory=list)

    def __repr__(self):
        return f"PredicateDecl({self.name})"


@dataclass
class ParameterDecl(Statement):
    """
    Parameter declaration; always carries a value.

    Example: array [1..2] of int: d = [42, 23];
    """
    name: str
    type: TypeExpr
    value: Expression
    annotations: List[Annotation] = field(default_factory=list)

    def __repr__(self):
        return f"ParameterDecl({self.name})"


@dataclass
class VariableDecl(Statement):
    """
    Variable declaration; the initializer is optional.

    Example: var 1..3: a :: output_var = 2;
    """
    name: str
    type: TypeExpr
    value: Optional[Expression] = None
    annotations: List[Annotation] = field(default_factory=list)

    @property
    def is_array(self) -> bool:
        return isinstance(self.type, ArrayType)

    def __repr__(self):
        return f"VariableDecl({self.name})"


@dataclass
class ConstraintItem(Statement):
    """
    Constraint item

    Example: constraint int_lin_le([1, 2], [x, y], 10);
    """
    name: str
    arguments: List[Expression] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)

    def __repr__(self):
        return f"ConstraintItem({self.name})"


@dataclass
class SolveGoal(Statement):
    """
    Solve item

    objective is None for satisfaction problems.
    """
    kind: GoalKind
    objective: Optional[Expression] = None
    annotations: List[Annotation] = field(default_factory=list)

    def __repr__(self):
        if self.objective is None:
            return f"SolveGoal({self.kind.value})"
        return f"SolveGoal({self.kind.value} {self.objective})"
