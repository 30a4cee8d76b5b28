"""Serializes SQLAST statements to JSON via `ASTNode.to_dict()`."""

import json

from sqlast.sqlast_ast import CreateTable, Select, Statement


class JSONEmitter:
    """Emits one indented JSON document per statement.

    Attributes:
        lines (list[str]): Emitted documents.
        include_positions (bool): Keep `line`/`col` keys in the output.
    """

    def __init__(self, include_positions: bool = True) -> None:
        self.lines: list[str] = []
        self.include_positions = include_positions

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def emit_statement(self, node: Statement) -> None:
        data: object = node.to_dict()
        if not self.include_positions:
            data = _strip_positions(data)
        self.lines.append(json.dumps(data, indent=2))

    def emit_select(self, node: Select) -> None:
        self.emit_statement(node)

    def emit_create_table(self, node: CreateTable) -> None:
        self.emit_statement(node)


def _strip_positions(node: object) -> object:
    if isinstance(node, list):
        return [_strip_positions(n) for n in node]
    if isinstance(node, dict):
        return {
            k: _strip_positions(v) for k, v in node.items() if k not in ("line", "col")
        }
    return node
