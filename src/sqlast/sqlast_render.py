"""
Provides the `Renderer` class and emitter interface for displaying SQLAST statements.

Classes and Features:
    - Emitter (Protocol): Interface for all output emitters. Requires `__init__` and `get_output`.
    - TreeEmitter: Indented tree using the AST field names.
    - JSONEmitter: `to_dict()` serialized as JSON.
    - SQLEmitter: Canonical SQL text that re-parses to an equal AST.
    - Renderer: Picks the emitter for an output format and dispatches statements
      to its `emit_<kind>` methods.

Example:
    >>> Renderer("sql").render(parse_sql("select a from t"))
    'SELECT a FROM t;'

Raises:
    ValueError: If the output format is not supported.
    TypeError: If a non-statement is passed in.
    NotImplementedError: If the emitter lacks an `emit_*` method for a node kind.
"""

import os
from typing import Protocol

from sqlast.emitters.json_emitter import JSONEmitter
from sqlast.emitters.sql_emitter import SQLEmitter
from sqlast.emitters.tree_emitter import TreeEmitter
from sqlast.sqlast_ast import Statement

DEFAULT_FORMAT = "tree"
FORMAT_ENV_VAR = "SQLAST_FORMAT"


class Emitter(Protocol):  # pragma: no cover
    """Protocol for all SQLAST output emitters.

    Methods:
        __init__(): Initializes the emitter.
        get_output(): Returns the complete emitted text as a string.
    """

    def __init__(self) -> None: ...  # pragma: no cover

    def get_output(self) -> str: ...  # pragma: no cover


EmitterType = type[Emitter]
"""Alias for a concrete Emitter class type."""

emitters: dict[str, EmitterType] = {
    "tree": TreeEmitter,
    "json": JSONEmitter,
    "sql": SQLEmitter,
}


def default_format() -> str:
    """Output format from `SQLAST_FORMAT`, falling back to `tree`."""
    fmt = os.getenv(FORMAT_ENV_VAR, DEFAULT_FORMAT).strip().lower()
    return fmt if fmt in emitters else DEFAULT_FORMAT


class Renderer:
    """Dispatches SQLAST statements to the emitter for an output format.

    Attributes:
        fmt (str): Normalized format name.
        emitter (Emitter): The selected emitter instance.
    """

    def __init__(self, fmt: str = DEFAULT_FORMAT) -> None:
        fmt = fmt.lower()
        if fmt not in emitters:
            raise ValueError(f"Unknown output format: {fmt!r}")
        self.fmt = fmt
        self.emitter: Emitter = emitters[fmt]()

    def render(self, statement: Statement) -> str:
        """Renders one statement and returns the emitted text.

        A fresh emitter is used per call, so a Renderer can be reused.

        Raises:
            TypeError: If `statement` is not a Statement.
        """
        if not isinstance(statement, Statement):
            raise TypeError("Renderer expects a Statement instance.")
        self.emitter = emitters[self.fmt]()
        self._visit(statement)
        return self.emitter.get_output()

    def _visit(self, node: Statement) -> None:
        method_name = f"emit_{node.kind}"
        if hasattr(self.emitter, method_name):
            emit_method = getattr(self.emitter, method_name)
            emit_method(node)
        else:
            raise NotImplementedError(
                f"No emitter method for node kind '{node.kind}' "
                f"(line {node.line}, col {node.col})"
            )


def render(statement: Statement, fmt: str = DEFAULT_FORMAT) -> str:
    return Renderer(fmt).render(statement)


__all__ = ["Emitter", "Renderer", "default_format", "emitters", "render"]
