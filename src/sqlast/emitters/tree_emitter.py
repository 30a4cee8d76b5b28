"""
Renders SQLAST statements as an indented, human-readable tree.

The rendering is stable: the same AST always produces the same text, and the
labels follow the node field names (`columns`, `from`, `where`, `orderby`,
`name`, `type`, `constraints`).

Example output for `SELECT id FROM users WHERE id > 10;`::

    Select
      columns:
        Identifier 'id'
      from: 'users'
      where:
        BinaryOperation >
          Identifier 'id'
          Number 10
      orderby: []
"""

from sqlast.sqlast_ast import (
    ASTNode,
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
)


class TreeEmitter:
    """Emits an indented tree from SQLAST nodes.

    Attributes:
        lines (list[str]): Accumulated output lines.
        indent (int): Current indentation level.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent = 0

    def indent_str(self) -> str:
        return "  " * self.indent

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def write(self, text: str) -> None:
        self.lines.append(self.indent_str() + text)

    def write_list(self, label: str, items: list[ASTNode]) -> None:
        if not items:
            self.write(f"{label}: []")
            return
        self.write(f"{label}:")
        self.indent += 1
        for item in items:
            self._visit(item)
        self.indent -= 1

    # Statements

    def emit_select(self, node: Select) -> None:
        self.write("Select")
        self.indent += 1
        self.write_list("columns", list(node.columns))
        self.write(f"from: {node.from_!r}")
        if node.where is None:
            self.write("where: None")
        else:
            self.write("where:")
            self.indent += 1
            self.emit_expr(node.where)
            self.indent -= 1
        self.write_list("orderby", list(node.orderby))
        self.indent -= 1

    def emit_create_table(self, node: CreateTable) -> None:
        self.write("CreateTable")
        self.indent += 1
        self.write(f"name: {node.name!r}")
        self.write_list("columns", list(node.columns))
        self.indent -= 1

    def emit_column(self, node: ColumnDefinition) -> None:
        self.write(f"ColumnDefinition {node.name!r}")
        self.indent += 1
        col_type = node.type.name
        if node.type.length is not None:
            col_type += f"({node.type.length})"
        self.write(f"type: {col_type}")
        self.write_list("constraints", list(node.constraints))
        self.indent -= 1

    def emit_constraint(self, node: Constraint) -> None:
        self.write(node.name.value)
        if node.value is not None:
            self.indent += 1
            self.emit_expr(node.value)
            self.indent -= 1

    # Expressions

    def emit_expr(self, node: Expression) -> None:
        if isinstance(node, Identifier):
            self.write(f"Identifier {node.name!r}")
        elif isinstance(node, Number):
            self.write(f"Number {node.value}")
        elif isinstance(node, StringLiteral):
            self.write(f"StringLiteral {node.value!r}")
        elif isinstance(node, Boolean):
            self.write(f"Boolean {'TRUE' if node.value else 'FALSE'}")
        elif isinstance(node, Null):
            self.write("Null")
        elif isinstance(node, UnaryOperation):
            self.write(f"UnaryOperation {node.operator.value}")
            self.indent += 1
            self.emit_expr(node.operand)
            self.indent -= 1
        elif isinstance(node, BinaryOperation):
            self.write(f"BinaryOperation {node.operator.value}")
            self.indent += 1
            self.emit_expr(node.left)
            self.emit_expr(node.right)
            self.indent -= 1
        else:
            raise NotImplementedError(f"TreeEmitter: no emitter for {node.kind}")

    def _visit(self, node: ASTNode) -> None:
        if isinstance(node, Expression):
            self.emit_expr(node)
            return
        meth = getattr(self, f"emit_{node.kind}", None)
        if not meth:
            raise NotImplementedError(f"TreeEmitter: no emitter for {node.kind}")
        meth(node)
