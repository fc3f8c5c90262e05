"""
FlatZinc Parser - Text to AST Conversion

Parses FlatZinc items (predicate, parameter, variable, constraint and solve
items, plus comment lines) into the statement AST consumed by the fact
translator.

Regex tokenizer + recursive descent, one statement per call to
_parse_statement.
"""

import re
from typing import List, Optional, Tuple, Union
from dataclasses import dataclass

from .ast import (
    # Statements
    Statement,
    Comment,
    PredicateDecl,
    PredicateParameter,
    ParameterDecl,
    VariableDecl,
    ConstraintItem,
    SolveGoal,

    # Expressions
    Expression,
    Literal,
    Identifier,
    RangeLiteral,
    SetLiteral,
    ArrayLiteral,
    Annotation,

    # Types
    TypeExpr,
    ScalarType,
    IntRangeType,
    IntSetType,
    FloatRangeType,
    FloatSetType,
    SetOfIntType,
    SubsetOfRangeType,
    SubsetOfSetType,
    ArrayType,

    # Enums
    BasicType,
    GoalKind,
)


# ============================================================================
# EXCEPTIONS
# ============================================================================

class ParseError(Exception):
    """Base exception for parsing errors"""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"Line {line}, Col {column}: {message}")


# ============================================================================
# TOKENIZER
# ============================================================================

@dataclass
class Token:
    """Lexical token"""
    type: str
    value: str
    line: int
    column: int


class Tokenizer:
    """
    Regex-based tokenizer for FlatZinc.

    Token types:
    - KEYWORD: var, array, of, constraint, solve, ...
    - IDENTIFIER: variable, parameter, predicate and annotation names
    - INT / FLOAT: numeric literals (sign included)
    - STRING: quoted strings (annotation arguments only)
    - RANGE: ..
    - DOUBLE_COLON: :: (annotation marker)
    - DELIMITER: { } ( ) [ ] : , ; =
    - COMMENT: % up to end of line (kept, FlatZinc comments are items)
    """

    KEYWORDS = {
        'array', 'bool', 'constraint', 'false', 'float', 'int',
        'maximize', 'minimize', 'of', 'predicate', 'satisfy', 'set',
        'solve', 'true', 'var',
    }

    PATTERNS = [
        ('COMMENT', r'%[^\n]*'),
        ('STRING', r'"([^"\\]|\\.)*"'),
        ('FLOAT', r'[-+]?\d+\.\d+(?:[eE][-+]?\d+)?|[-+]?\d+[eE][-+]?\d+'),
        ('INT', r'[-+]?0x[0-9a-fA-F]+|[-+]?0o[0-7]+|[-+]?\d+'),
        ('RANGE', r'\.\.'),
        ('DOUBLE_COLON', r'::'),
        ('DELIMITER', r'[{}()\[\]:,;=]'),
        ('IDENTIFIER', r'_*[A-Za-z][A-Za-z0-9_]*'),
        ('WHITESPACE', r'\s+'),
    ]

    _COMPILED = [(name, re.compile(pattern)) for name, pattern in PATTERNS]

    def __init__(self, text: str, first_line: int = 1):
        self.text = text
        self.position = 0
        self.line = first_line
        self.column = 1
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """Tokenize entire text"""
        while self.position < len(self.text):
            self._next_token()
        return self.tokens

    def _next_token(self):
        """Extract next token"""
        for token_type, regex in self._COMPILED:
            match = regex.match(self.text, self.position)
            if not match:
                continue

            value = match.group(0)

            if token_type == 'WHITESPACE':
                self._advance(len(value))
                return

            if token_type == 'IDENTIFIER' and value in self.KEYWORDS:
                token_type = 'KEYWORD'

            token_value = value[1:].rstrip() if token_type == 'COMMENT' else value
            self.tokens.append(Token(
                type=token_type,
                value=token_value,
                line=self.line,
                column=self.column
            ))
            self._advance(len(value))
            return

        # No pattern matched - unexpected character
        raise ParseError(
            f"Unexpected character: '{self.text[self.position]}'",
            self.line,
            self.column
        )

    def _advance(self, count: int):
        """Advance position and update line/column"""
        for _ in range(count):
            if self.position < len(self.text):
                if self.text[self.position] == '\n':
                    self.line += 1
                    self.column = 1
                else:
                    self.column += 1
                self.position += 1


# ============================================================================
# PARSER
# ============================================================================

class FznParser:
    """
    Recursive descent parser for FlatZinc items.

    Grammar (simplified):
        model       ::= item*
        item        ::= comment | predicate | declaration | constraint | solve
        predicate   ::= "predicate" id "(" pred_param ("," pred_param)* ")" ";"
        declaration ::= type ":" id annotations ["=" expr] ";"
        constraint  ::= "constraint" id "(" expr ("," expr)* ")" annotations ";"
        solve       ::= "solve" annotations ("satisfy" | ("minimize" | "maximize") expr) ";"
    """

    def __init__(self):
        self.tokens: List[Token] = []
        self.position = 0
        self.current_token: Optional[Token] = None

    def parse(self, text: str, first_line: int = 1) -> List[Statement]:
        """
        Parse FlatZinc text into a list of statements.

        Args:
            text: FlatZinc source (one or more items)
            first_line: line number of the first line of text, for diagnostics

        Returns:
            Statements in source order

        Raises:
            ParseError: On syntax error
        """
        tokenizer = Tokenizer(text, first_line)
        self.tokens = self._drop_inner_comments(tokenizer.tokenize())
        self.position = 0
        self.current_token = self.tokens[0] if self.tokens else None

        statements: List[Statement] = []
        try:
            while self.current_token:
                statements.append(self._parse_statement())
        except RecursionError:
            line = self.current_token.line if self.current_token else 0
            column = self.current_token.column if self.current_token else 0
            raise ParseError(
                "Input too complex: Maximum nesting depth exceeded",
                line,
                column
            )
        return statements

    def parse_file(self, filepath: str) -> List[Statement]:
        """Parse FlatZinc file with strict UTF-8 encoding"""
        with open(filepath, 'r', encoding='utf-8') as f:
            text = f.read()
        return self.parse(text)

    # ========================================================================
    # UTILITY METHODS
    # ========================================================================

    @staticmethod
    def _drop_inner_comments(tokens: List[Token]) -> List[Token]:
        """Comments are items only between items; inside an item they are skipped."""
        kept: List[Token] = []
        at_boundary = True
        for tok in tokens:
            if tok.type == 'COMMENT':
                if at_boundary:
                    kept.append(tok)
                continue
            kept.append(tok)
            at_boundary = tok.type == 'DELIMITER' and tok.value == ';'
        return kept

    def _advance(self):
        """Move to next token"""
        self.position += 1
        if self.position < len(self.tokens):
            self.current_token = self.tokens[self.position]
        else:
            self.current_token = None

    def _peek(self, offset: int = 1) -> Optional[Token]:
        """Look ahead at token"""
        pos = self.position + offset
        if pos < len(self.tokens):
            return self.tokens[pos]
        return None

    def _expect(self, token_type: str, value: Optional[str] = None) -> Token:
        """
        Expect specific token type/value.

        Raises ParseError if not matched.
        """
        if not self.current_token:
            last = self.tokens[-1] if self.tokens else None
            raise ParseError(
                f"Unexpected end of input, expected {value or token_type}",
                last.line if last else 0,
                last.column if last else 0
            )

        if self.current_token.type != token_type:
            raise ParseError(
                f"Expected {value or token_type}, got {self.current_token.type}({self.current_token.value})",
                self.current_token.line,
                self.current_token.column
            )

        if value and self.current_token.value != value:
            raise ParseError(
                f"Expected '{value}', got '{self.current_token.value}'",
                self.current_token.line,
                self.current_token.column
            )

        token = self.current_token
        self._advance()
        return token

    def _match(self, token_type: str, value: Optional[str] = None) -> bool:
        """Check if current token matches"""
        if not self.current_token:
            return False

        if self.current_token.type != token_type:
            return False

        if value and self.current_token.value != value:
            return False

        return True

    def _consume_if(self, token_type: str, value: Optional[str] = None) -> bool:
        """Consume token if it matches"""
        if self._match(token_type, value):
            self._advance()
            return True
        return False

    def _unexpected(self, what: str) -> ParseError:
        tok = self.current_token
        if tok is None:
            last = self.tokens[-1] if self.tokens else None
            return ParseError(
                f"Unexpected end of input, expected {what}",
                last.line if last else 0,
                last.column if last else 0
            )
        return ParseError(
            f"Expected {what}, got {tok.type}({tok.value})",
            tok.line,
            tok.column
        )

    # ========================================================================
    # ITEMS
    # ========================================================================

    def _parse_statement(self) -> Statement:
        tok = self.current_token

        if tok.type == 'COMMENT':
            self._advance()
            return Comment(text=tok.value, location=(tok.line, tok.column))

        if self._match('KEYWORD', 'predicate'):
            return self._parse_predicate()

        if self._match('KEYWORD', 'constraint'):
            return self._parse_constraint()

        if self._match('KEYWORD', 'solve'):
            return self._parse_solve()

        return self._parse_declaration()

    def _parse_predicate(self) -> PredicateDecl:
        """
        Parse predicate declaration.

        predicate all_different_int(array [int] of var int: x);
        """
        start = self._expect('KEYWORD', 'predicate')
        name = self._expect('IDENTIFIER').value
        self._expect('DELIMITER', '(')

        parameters: List[PredicateParameter] = []
        if not self._match('DELIMITER', ')'):
            while True:
                param_tok = self.current_token
                is_var, param_type = self._parse_type(allow_unsized=True)
                self._expect('DELIMITER', ':')
                param_name = self._expect('IDENTIFIER').value
                parameters.append(PredicateParameter(
                    name=param_name,
                    type=param_type,
                    is_var=is_var,
                    location=(param_tok.line, param_tok.column)
                ))
                if not self._consume_if('DELIMITER', ','):
                    break

        self._expect('DELIMITER', ')')
        self._expect('DELIMITER', ';')
        return PredicateDecl(
            name=name,
            parameters=parameters,
            location=(start.line, start.column)
        )

    def _parse_declaration(self) -> Statement:
        """
        Parse parameter or variable declaration.

        The item is a variable declaration iff its type carries `var`.
        """
        start = self.current_token
        is_var, decl_type = self._parse_type()
        self._expect('DELIMITER', ':')
        name = self._expect('IDENTIFIER').value
        annotations = self._parse_annotations()

        value = None
        if self._consume_if('DELIMITER', '='):
            value = self._parse_expression()
        self._expect('DELIMITER', ';')

        location = (start.line, start.column)
        if is_var:
            return VariableDecl(
                name=name,
                type=decl_type,
                value=value,
                annotations=annotations,
                location=location
            )

        if value is None:
            raise ParseError(f"Parameter '{name}' has no value", start.line, start.column)

        return ParameterDecl(
            name=name,
            type=decl_type,
            value=value,
            annotations=annotations,
            location=location
        )

    def _parse_constraint(self) -> ConstraintItem:
        start = self._expect('KEYWORD', 'constraint')
        name = self._expect('IDENTIFIER').value
        self._expect('DELIMITER', '(')
        arguments = self._parse_expression_list(')')
        self._expect('DELIMITER', ')')
        annotations = self._parse_annotations()
        self._expect('DELIMITER', ';')
        return ConstraintItem(
            name=name,
            arguments=arguments,
            annotations=annotations,
            location=(start.line, start.column)
        )

    def _parse_solve(self) -> SolveGoal:
        start = self._expect('KEYWORD', 'solve')
        annotations = self._parse_annotations()

        objective = None
        if self._consume_if('KEYWORD', 'satisfy'):
            kind = GoalKind.SATISFY
        elif self._match('KEYWORD', 'minimize') or self._match('KEYWORD', 'maximize'):
            kind = GoalKind(self.current_token.value)
            self._advance()
            objective = self._parse_expression()
        else:
            raise self._unexpected("satisfy, minimize or maximize")

        self._expect('DELIMITER', ';')
        return SolveGoal(
            kind=kind,
            objective=objective,
            annotations=annotations,
            location=(start.line, start.column)
        )

    # ========================================================================
    # TYPES
    # ========================================================================

    def _parse_type(self, allow_unsized: bool = False) -> Tuple[bool, TypeExpr]:
        """
        Parse a declared type.

        Returns:
            (is_var, type) where is_var tells whether `var` was present
        """
        if not self._match('KEYWORD', 'array'):
            return self._parse_basic_type()

        start = self._expect('KEYWORD', 'array')
        self._expect('DELIMITER', '[')

        if allow_unsized and self._consume_if('KEYWORD', 'int'):
            size = None
        else:
            lb_tok = self.current_token
            lb = self._parse_int()
            self._expect('RANGE')
            size = self._parse_int()
            if lb != 1:
                raise ParseError(
                    f"Array index set must start at 1, got {lb}..{size}",
                    lb_tok.line,
                    lb_tok.column
                )

        self._expect('DELIMITER', ']')
        self._expect('KEYWORD', 'of')
        is_var, element = self._parse_basic_type()
        return is_var, ArrayType(size=size, element=element, location=(start.line, start.column))

    def _parse_basic_type(self) -> Tuple[bool, TypeExpr]:
        is_var = self._consume_if('KEYWORD', 'var')
        tok = self.current_token
        if tok is None:
            raise self._unexpected("a type")
        location = (tok.line, tok.column)

        if tok.type == 'KEYWORD' and tok.value in ('bool', 'int', 'float'):
            self._advance()
            return is_var, ScalarType(base=BasicType(tok.value), location=location)

        if self._consume_if('KEYWORD', 'set'):
            self._expect('KEYWORD', 'of')
            if self._consume_if('KEYWORD', 'int'):
                return is_var, SetOfIntType(location=location)
            if self._match('DELIMITER', '{'):
                values = self._parse_number_set()
                return is_var, SubsetOfSetType(values=[int(v) for v in values], location=location)
            lb = self._parse_int()
            self._expect('RANGE')
            ub = self._parse_int()
            return is_var, SubsetOfRangeType(lb=lb, ub=ub, location=location)

        if tok.type in ('INT', 'FLOAT'):
            lb = self._parse_number()
            self._expect('RANGE')
            ub = self._parse_number()
            if isinstance(lb, float) or isinstance(ub, float):
                return is_var, FloatRangeType(lb=float(lb), ub=float(ub), location=location)
            return is_var, IntRangeType(lb=lb, ub=ub, location=location)

        if self._match('DELIMITER', '{'):
            values = self._parse_number_set()
            if any(isinstance(v, float) for v in values):
                return is_var, FloatSetType(values=[float(v) for v in values], location=location)
            return is_var, IntSetType(values=values, location=location)

        raise self._unexpected("a type")

    def _parse_number_set(self) -> List[Union[int, float]]:
        self._expect('DELIMITER', '{')
        values: List[Union[int, float]] = []
        if not self._match('DELIMITER', '}'):
            while True:
                values.append(self._parse_number())
                if not self._consume_if('DELIMITER', ','):
                    break
        self._expect('DELIMITER', '}')
        return values

    def _parse_number(self) -> Union[int, float]:
        if self._match('INT'):
            return self._parse_int()
        if self._match('FLOAT'):
            value = float(self.current_token.value)
            self._advance()
            return value
        raise self._unexpected("a number")

    def _parse_int(self) -> int:
        tok = self._expect('INT')
        return _int_value(tok.value)

    # ========================================================================
    # ANNOTATIONS
    # ========================================================================

    def _parse_annotations(self) -> List[Annotation]:
        annotations: List[Annotation] = []
        while self._consume_if('DOUBLE_COLON'):
            annotations.append(self._parse_annotation())
        return annotations

    def _parse_annotation(self) -> Annotation:
        tok = self._expect('IDENTIFIER')
        arguments: List[Expression] = []
        if self._consume_if('DELIMITER', '('):
            arguments = self._parse_expression_list(')', in_annotation=True)
            self._expect('DELIMITER', ')')
        return Annotation(name=tok.value, arguments=arguments, location=(tok.line, tok.column))

    # ========================================================================
    # EXPRESSIONS
    # ========================================================================

    def _parse_expression_list(self, closing: str, in_annotation: bool = False) -> List[Expression]:
        """Comma-separated expressions up to (not including) the closing delimiter"""
        items: List[Expression] = []
        if self._match('DELIMITER', closing):
            return items
        while True:
            items.append(self._parse_expression(in_annotation))
            if not self._consume_if('DELIMITER', ','):
                break
        return items

    def _parse_expression(self, in_annotation: bool = False) -> Expression:
        tok = self.current_token
        if tok is None:
            raise self._unexpected("an expression")
        location = (tok.line, tok.column)

        # 1. BOOLEAN
        if tok.type == 'KEYWORD' and tok.value in ('true', 'false'):
            self._advance()
            return Literal(value=(tok.value == 'true'), type="bool", location=location)

        # 2. NUMBERS (optionally the lower bound of a range)
        if tok.type == 'INT':
            self._advance()
            lower = Literal(value=_int_value(tok.value), type="int", location=location)
            return self._maybe_range(lower, location)

        if tok.type == 'FLOAT':
            self._advance()
            lower = Literal(value=float(tok.value), type="float", location=location)
            return self._maybe_range(lower, location)

        # 3. STRING
        if tok.type == 'STRING':
            self._advance()
            return Literal(value=_unquote(tok.value), type="string", location=location)

        # 4. IDENTIFIER / NESTED ANNOTATION
        if tok.type == 'IDENTIFIER':
            nxt = self._peek()
            if in_annotation and nxt and nxt.type == 'DELIMITER' and nxt.value == '(':
                return self._parse_annotation()
            self._advance()
            return self._maybe_range(Identifier(name=tok.value, location=location), location)

        # 5. SET LITERAL
        if self._consume_if('DELIMITER', '{'):
            elements = self._parse_expression_list('}')
            self._expect('DELIMITER', '}')
            return SetLiteral(elements=elements, location=location)

        # 6. ARRAY LITERAL
        if self._consume_if('DELIMITER', '['):
            elements = self._parse_expression_list(']', in_annotation)
            self._expect('DELIMITER', ']')
            return ArrayLiteral(elements=elements, location=location)

        raise self._unexpected("an expression")

    def _maybe_range(self, lower: Expression, location: tuple) -> Expression:
        if not self._consume_if('RANGE'):
            return lower

        tok = self.current_token
        if tok is None:
            raise self._unexpected("a range bound")
        bound_location = (tok.line, tok.column)

        if tok.type == 'INT':
            upper = Literal(value=_int_value(tok.value), type="int", location=bound_location)
        elif tok.type == 'FLOAT':
            upper = Literal(value=float(tok.value), type="float", location=bound_location)
        elif tok.type == 'IDENTIFIER':
            upper = Identifier(name=tok.value, location=bound_location)
        else:
            raise self._unexpected("a range bound")

        self._advance()
        return RangeLiteral(lower=lower, upper=upper, location=location)


# ============================================================================
# HELPERS
# ============================================================================

def _int_value(text: str) -> int:
    """Decimal, 0x hexadecimal or 0o octal integer literal"""
    sign = -1 if text.startswith('-') else 1
    body = text.lstrip('+-')
    if body[:2] in ('0x', '0o'):
        return sign * int(body, 0)
    return sign * int(body)


def _unquote(text: str) -> str:
    return re.sub(r'\\(.)', r'\1', text[1:-1])


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def parse_fzn(text: str, first_line: int = 1) -> List[Statement]:
    """Parse FlatZinc text into statements"""
    parser = FznParser()
    return parser.parse(text, first_line)


def parse_fzn_file(filepath: str) -> List[Statement]:
    """Parse FlatZinc file into statements"""
    parser = FznParser()
    return parser.parse_file(filepath)


def parse_statement(text: str) -> Statement:
    """Parse text holding exactly one FlatZinc item"""
    statements = parse_fzn(text)
    if len(statements) != 1:
        raise ParseError(f"Expected exactly one statement, found {len(statements)}", 1, 1)
    return statements[0]
