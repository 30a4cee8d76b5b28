"""
Translates SQLAST nodes back into canonical SQL text.

Output conventions:
    - Keywords in upper case, one space between clauses, trailing `;`.
    - Strings in single quotes, embedded quotes doubled.
    - Parentheses only where the precedence table requires them, so parsing
      the emitted text yields an AST equal to the one that was emitted.

Raises:
    - `NotImplementedError`: If an unrecognized node kind reaches the emitter.
"""

from sqlast.sqlast_ast import (
    BinaryOperation,
    Boolean,
    ColumnDefinition,
    Constraint,
    CreateTable,
    Expression,
    Identifier,
    Null,
    Number,
    Select,
    StringLiteral,
    UnaryOperation,
    UnaryOperator,
)
from sqlast.sqlast_constants import PREFIX_PRECEDENCE, RIGHT, binary_precedence


class SQLEmitter:
    """Emits SQL statements from SQLAST nodes.

    Attributes:
        lines (list[str]): One emitted statement per entry.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def emit_select(self, node: Select) -> None:
        parts = [
            "SELECT " + ", ".join(self.emit_expr(c) for c in node.columns),
            f"FROM {node.from_}",
        ]
        if node.where is not None:
            parts.append("WHERE " + self.emit_expr(node.where))
        if node.orderby:
            parts.append(
                "ORDER BY " + ", ".join(self.emit_sort_key(k) for k in node.orderby)
            )
        self.lines.append(" ".join(parts) + ";")

    def emit_sort_key(self, node: UnaryOperation) -> str:
        return f"{self.emit_expr(node.operand)} {node.operator.value}"

    def emit_create_table(self, node: CreateTable) -> None:
        columns = ", ".join(self.emit_column(c) for c in node.columns)
        self.lines.append(f"CREATE TABLE {node.name} ({columns});")

    def emit_column(self, node: ColumnDefinition) -> str:
        parts = [node.name, node.type.name]
        if node.type.length is not None:
            parts[-1] += f"({node.type.length})"
        parts.extend(self.emit_constraint(c) for c in node.constraints)
        return " ".join(parts)

    def emit_constraint(self, node: Constraint) -> str:
        if node.value is None:
            return node.name.value
        if node.name.value == "CHECK":
            return f"CHECK ({self.emit_expr(node.value)})"
        return f"{node.name.value} {self.emit_expr(node.value)}"

    def emit_expr(self, node: Expression) -> str:
        if isinstance(node, Identifier):
            return node.name
        if isinstance(node, Number):
            return str(node.value)
        if isinstance(node, StringLiteral):
            return "'" + node.value.replace("'", "''") + "'"
        if isinstance(node, Boolean):
            return "TRUE" if node.value else "FALSE"
        if isinstance(node, Null):
            return "NULL"
        if isinstance(node, UnaryOperation):
            return self.emit_expr_unary(node)
        if isinstance(node, BinaryOperation):
            return self.emit_expr_binary(node)
        raise NotImplementedError(f"No expression emitter for kind '{node.kind}'")

    def emit_expr_unary(self, node: UnaryOperation) -> str:
        if node.operator in (UnaryOperator.ASC, UnaryOperator.DESC):
            return self.emit_sort_key(node)
        operand = self.emit_expr(node.operand)
        # Any operator operand needs parens: it binds looser, and `- -x` would lex as a comment.
        if isinstance(node.operand, (UnaryOperation, BinaryOperation)):
            operand = f"({operand})"
        if node.operator is UnaryOperator.NOT:
            return f"NOT {operand}"
        return f"{node.operator.value}{operand}"

    def emit_expr_binary(self, node: BinaryOperation) -> str:
        precedence, associativity = binary_precedence[node.operator.value]
        left = self.emit_operand(node.left, precedence, associativity == RIGHT)
        right = self.emit_operand(node.right, precedence, associativity != RIGHT)
        return f"{left} {node.operator.value} {right}"

    def emit_operand(self, node: Expression, parent: int, strict: bool) -> str:
        """Emit one side of a binary operation, parenthesized if it would regroup.

        `strict` marks the side where an equal-precedence child must keep its parens.
        """
        text = self.emit_expr(node)
        child = self.precedence_of(node)
        if child < parent or (strict and child == parent):
            return f"({text})"
        return text

    @staticmethod
    def precedence_of(node: Expression) -> int:
        if isinstance(node, BinaryOperation):
            return binary_precedence[node.operator.value][0]
        return PREFIX_PRECEDENCE
