"""
Defines the abstract syntax tree (AST) node structure for SQLAST.

Classes:
    ASTNode:
        Base of every node. Supplies `kind`, source position and `to_dict()`.

    ASTDict:
        TypedDict representation for serializing ASTNode instances to plain Python
        dictionaries, suitable for JSON output or debugging.

    Expressions:
        Identifier, Number, StringLiteral, Boolean, Null, UnaryOperation, BinaryOperation

    Statements:
        Select, CreateTable

    Table definitions:
        ColumnType, Constraint, ColumnDefinition

Every node records the `line` and `col` of its first token. Positions are kept
out of equality and `repr`, so two trees compare equal when their structure
matches regardless of where they were parsed from.

Each node exclusively owns its children; the parser never shares a subtree
between two parents.

Example:
    node = BinaryOperation(BinaryOperator.GT, Identifier("id"), Number(10))
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar, TypedDict, Union


class UnaryOperator(str, Enum):
    MINUS = "-"
    PLUS = "+"
    NOT = "NOT"
    ASC = "ASC"
    DESC = "DESC"


class BinaryOperator(str, Enum):
    OR = "OR"
    AND = "AND"
    EQ = "="
    NE = "<>"
    BANG_NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    PLUS = "+"
    MINUS = "-"
    MULT = "*"
    DIV = "/"


class ConstraintKind(str, Enum):
    NOT_NULL = "NOT NULL"
    PRIMARY_KEY = "PRIMARY KEY"
    UNIQUE = "UNIQUE"
    DEFAULT = "DEFAULT"
    CHECK = "CHECK"


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an ASTNode used for serialization.

    Only `kind`, `line` and `col` are present on every node; the other keys
    appear on the node kinds that own the matching field.
    """

    kind: str
    line: int
    col: int
    name: str
    value: Any
    operator: str
    operand: "ASTDict"
    left: "ASTDict"
    right: "ASTDict"
    columns: list["ASTDict"]
    # `from` is a Python keyword, so Select stores it as `from_`.
    where: Union["ASTDict", None]
    orderby: list["ASTDict"]
    type: "ASTDict"
    length: int | None
    constraints: list["ASTDict"]


@dataclass
class ASTNode:
    """
    Base class for every node in a SQLAST syntax tree.

    Attributes:
        kind (str): Stable snake_case name of the node type (e.g. "select").
        line (int): Source line of the node's first token (default 0).
        col (int): Source column of the node's first token (default 0).
    """

    kind: ClassVar[str] = "node"

    line: int = field(default=0, compare=False, repr=False, kw_only=True)
    col: int = field(default=0, compare=False, repr=False, kw_only=True)

    def to_dict(self) -> ASTDict:
        """Converts the node and all descendants into nested plain dictionaries."""
        out: dict[str, Any] = {"kind": self.kind}
        for f in fields(self):
            if f.name in ("line", "col"):
                continue
            out[f.name.rstrip("_")] = _plain(getattr(self, f.name))
        out["line"] = self.line
        out["col"] = self.col
        return out  # type: ignore[return-value]


def _plain(value: Any) -> Any:
    if isinstance(value, ASTNode):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    return value


# Expressions


@dataclass
class Expression(ASTNode):
    kind: ClassVar[str] = "expression"


@dataclass
class Identifier(Expression):
    kind: ClassVar[str] = "identifier"

    name: str


@dataclass
class Number(Expression):
    kind: ClassVar[str] = "number"

    value: int


@dataclass
class StringLiteral(Expression):
    kind: ClassVar[str] = "string"

    value: str


@dataclass
class Boolean(Expression):
    kind: ClassVar[str] = "boolean"

    value: bool


@dataclass
class Null(Expression):
    kind: ClassVar[str] = "null"


@dataclass
class UnaryOperation(Expression):
    """A prefix operator (`-`, `+`, `NOT`) or an ORDER BY direction (`ASC`, `DESC`)."""

    kind: ClassVar[str] = "unary"

    operator: UnaryOperator
    operand: Expression


@dataclass
class BinaryOperation(Expression):
    kind: ClassVar[str] = "binary"

    operator: BinaryOperator
    left: Expression
    right: Expression


# Table definitions


@dataclass
class ColumnType(ASTNode):
    """Declared column type. `length` is only set for `VARCHAR(n)`."""

    kind: ClassVar[str] = "column_type"

    name: str
    length: int | None = None


@dataclass
class Constraint(ASTNode):
    """A column constraint. `value` holds the DEFAULT literal or the CHECK predicate."""

    kind: ClassVar[str] = "constraint"

    name: ConstraintKind
    value: Expression | None = None


@dataclass
class ColumnDefinition(ASTNode):
    kind: ClassVar[str] = "column"

    name: str
    type: ColumnType
    constraints: list[Constraint] = field(default_factory=list)


# Statements


@dataclass
class Statement(ASTNode):
    kind: ClassVar[str] = "statement"


@dataclass
class Select(Statement):
    """
    A SELECT statement.

    Attributes:
        columns (list[Expression]): Projection list, in source order.
        from_ (str): Source table name (serialized as `from`).
        where (Expression | None): Filter predicate, if any.
        orderby (list[UnaryOperation]): Sort keys, each wrapped in ASC or DESC.
    """

    kind: ClassVar[str] = "select"

    columns: list[Expression]
    from_: str
    where: Expression | None = None
    orderby: list[UnaryOperation] = field(default_factory=list)


@dataclass
class CreateTable(Statement):
    kind: ClassVar[str] = "create_table"

    name: str
    columns: list[ColumnDefinition]


__all__ = [
    "ASTDict",
    "ASTNode",
    "BinaryOperation",
    "BinaryOperator",
    "Boolean",
    "ColumnDefinition",
    "ColumnType",
    "Constraint",
    "ConstraintKind",
    "CreateTable",
    "Expression",
    "Identifier",
    "Null",
    "Number",
    "Select",
    "Statement",
    "StringLiteral",
    "UnaryOperation",
    "UnaryOperator",
]
