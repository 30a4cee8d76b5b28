"""
SQLAST Parser

Parses a SQLAST token list into one statement AST.

This module implements the statement grammar for `SELECT` and `CREATE TABLE`
and a Pratt (precedence-climbing) engine for expressions. Operator binding
powers come from `sqlast_constants.binary_precedence`, so the expression loop
itself never names an operator.

Supported Constructs
--------------------
- Expressions:
    * Literals: integers, strings, `TRUE`, `FALSE`, `NULL`
    * Identifiers
    * Prefix operators: `-`, `+`, `NOT`
    * Binary operators, low to high: `OR`, `AND`, comparisons, `+ -`, `* /`
    * Parenthesized sub-expressions

- Statements:
    * `SELECT <exprs> FROM <table> [WHERE <expr>] [ORDER BY <expr> [ASC|DESC], ...] [;]`
    * `CREATE TABLE <name> (<column> <type> [<constraint> ...], ...) [;]`

Parser Behavior
---------------
- Fail-fast: the first grammar violation raises a `ParseError` subclass and
  no partial AST is returned.
- The cursor only moves forward; one token of lookahead is enough.
- Expressions nest at most `MAX_NESTING_DEPTH` levels deep; deeper input is
  rejected with `UnexpectedToken` instead of exhausting the Python stack.

Entry Points
------------
- `parse(tokens)`: Parse a token list (ending with EOF) into a Statement.
- `parse_sql(source)`: Tokenize and parse a statement string.
- `try_parse(source)`: Like `parse_sql`, but returns the error instead of raising it.

Raises
------
ParseError
    Raised when the token list does not match the grammar.
"""

from __future__ import annotations

import logging

from sqlast.sqlast_ast import (
    BinaryOperation,
    BinaryOperator,
    Boolean,
    ColumnDefinition,
    ColumnType,
    Constraint,
    ConstraintKind,
    CreateTable,
    Expression,
    Identifier,
    Null,
    Number,
    Select,
    Statement,
    StringLiteral,
    UnaryOperation,
    UnaryOperator,
)
from sqlast.sqlast_constants import (
    LOWEST_PRECEDENCE,
    MAX_NESTING_DEPTH,
    PREFIX_PRECEDENCE,
    RIGHT,
    binary_precedence,
    constraint_keywords,
    prefix_operators,
    sort_directions,
    type_keywords,
)
from sqlast.sqlast_errors import (
    EmptyColumnList,
    EmptyProjectionList,
    ExpectedIdentifier,
    ParseError,
    SQLSyntaxError,
    TrailingTokens,
    UnexpectedEndOfInput,
    UnexpectedToken,
    UnknownConstraint,
    UnmatchedParenthesis,
)
from sqlast.sqlast_lexer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)


class Parser:
    """
    SQLAST Parser Class

    Transforms a list of tokens into a single `Statement`.

    Attributes
    ----------
    tokens : list[Token]
        The input token stream. A trailing EOF token is appended if missing.
    position : int
        Current index into the token stream.
    depth : int
        Open parentheses and prefix operators around the current expression.

    Methods
    -------
    parse() -> Statement
        Parse one complete statement, rejecting trailing tokens.
    parse_select() -> Select
        Parse a SELECT statement.
    parse_create_table() -> CreateTable
        Parse a CREATE TABLE statement.
    parse_expression(min_precedence) -> Expression
        Pratt loop over binary operators.
    parse_prefix() -> Expression
        Parse a literal, identifier, unary operation or parenthesized expression.
    """

    def __init__(self, tokens: list[Token]) -> None:
        if not tokens or tokens[-1].kind is not TokenKind.EOF:
            last = tokens[-1] if tokens else None
            tokens = list(tokens) + [
                Token(
                    TokenKind.EOF,
                    "EOF",
                    last.line if last else 1,
                    last.col if last else 1,
                    last.offset if last else 0,
                )
            ]
        self.tokens: list[Token] = tokens
        self.position: int = 0
        self.depth: int = 0

    # Cursor

    def current(self) -> Token:
        return self.tokens[self.position]

    def peek(self, offset: int = 1) -> Token:
        index = min(self.position + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def advance(self) -> Token:
        """Consumes the current token and returns it. EOF is never consumed."""
        tok = self.current()
        if self.position < len(self.tokens) - 1:
            self.position += 1
        return tok

    def at_end(self) -> bool:
        return self.current().kind is TokenKind.EOF

    def error(
        self, cls: type[ParseError], message: str, tok: Token | None = None
    ) -> ParseError:
        tok = tok or self.current()
        return cls(message, tok.offset, tok.line, tok.col)

    def unexpected(self, expected: str) -> ParseError:
        """Builds the error for a token that does not fit, or for a premature end."""
        tok = self.current()
        if tok.kind is TokenKind.EOF:
            return self.error(UnexpectedEndOfInput, f"Expected {expected}, got end of input")
        return self.error(UnexpectedToken, f"Expected {expected}, got {tok.describe()}")

    def match_keyword(self, *names: str) -> Token:
        tok = self.current()
        if tok.is_keyword(*names):
            return self.advance()
        raise self.unexpected(" or ".join(names))

    def match_symbol(self, *symbols: str) -> Token:
        tok = self.current()
        if tok.is_symbol(*symbols):
            return self.advance()
        raise self.unexpected(" or ".join(f"'{s}'" for s in symbols))

    def match_identifier(self, what: str) -> Token:
        tok = self.current()
        if tok.kind is TokenKind.IDENT:
            return self.advance()
        raise self.error(ExpectedIdentifier, f"Expected {what}, got {tok.describe()}")

    # Statements

    def parse(self) -> Statement:
        """Parse exactly one statement, optionally terminated by `;`."""
        tok = self.current()
        if tok.is_keyword("SELECT"):
            stmt: Statement = self.parse_select()
        elif tok.is_keyword("CREATE"):
            stmt = self.parse_create_table()
        else:
            raise self.unexpected("SELECT or CREATE")
        self.parse_terminator()
        logger.debug("parsed %s statement", stmt.kind)
        return stmt

    def parse_terminator(self) -> None:
        if self.current().is_symbol(";"):
            self.advance()
        if not self.at_end():
            raise self.error(
                TrailingTokens,
                f"Unexpected {self.current().describe()} after end of statement",
            )

    def parse_select(self) -> Select:
        select_tok = self.match_keyword("SELECT")

        tok = self.current()
        if tok.is_keyword("FROM") or tok.is_symbol(";") or tok.kind is TokenKind.EOF:
            raise self.error(EmptyProjectionList, "SELECT requires at least one column")

        columns = self.parse_expression_list()

        self.match_keyword("FROM")
        table_tok = self.match_identifier("table name after FROM")

        where: Expression | None = None
        if self.current().is_keyword("WHERE"):
            self.advance()
            where = self.parse_expression()

        orderby: list[UnaryOperation] = []
        if self.current().is_keyword("ORDER"):
            self.advance()
            self.match_keyword("BY")
            while True:
                orderby.append(self.parse_sort_key())
                if not self.current().is_symbol(","):
                    break
                self.advance()

        return Select(
            columns,
            str(table_tok.value),
            where,
            orderby,
            line=select_tok.line,
            col=select_tok.col,
        )

    def parse_expression_list(self) -> list[Expression]:
        items = [self.parse_expression()]
        while self.current().is_symbol(","):
            self.advance()
            items.append(self.parse_expression())
        return items

    def parse_sort_key(self) -> UnaryOperation:
        expr = self.parse_expression()
        direction = UnaryOperator.ASC
        if self.current().is_keyword(*sort_directions):
            direction = UnaryOperator(self.advance().value)
        return UnaryOperation(direction, expr, line=expr.line, col=expr.col)

    def parse_create_table(self) -> CreateTable:
        create_tok = self.match_keyword("CREATE")
        self.match_keyword("TABLE")
        name_tok = self.match_identifier("table name")

        open_tok = self.match_symbol("(")
        if self.current().is_symbol(")"):
            raise self.error(EmptyColumnList, f"Table {name_tok.value} declares no columns")

        try:
            columns = [self.parse_column_definition()]
            while self.current().is_symbol(","):
                self.advance()
                columns.append(self.parse_column_definition())
        except ParseError:
            # Any failure at end of input means the list was cut off.
            if not self.at_end():
                raise
            raise self.error(
                UnmatchedParenthesis, "Column list is never closed", open_tok
            ) from None
        self.match_symbol(")")

        return CreateTable(
            str(name_tok.value), columns, line=create_tok.line, col=create_tok.col
        )

    def parse_column_definition(self) -> ColumnDefinition:
        name_tok = self.match_identifier("column name")
        col_type = self.parse_column_type()

        constraints: list[Constraint] = []
        while not self.current().is_symbol(",", ")"):
            tok = self.current()
            if not tok.is_keyword(*constraint_keywords):
                raise self.error(UnknownConstraint, f"Unknown column constraint {tok.describe()}")
            constraints.append(self.parse_constraint())

        return ColumnDefinition(
            str(name_tok.value),
            col_type,
            constraints,
            line=name_tok.line,
            col=name_tok.col,
        )

    def parse_column_type(self) -> ColumnType:
        tok = self.current()
        if not tok.is_keyword(*type_keywords):
            raise self.unexpected("column type (" + ", ".join(sorted(type_keywords)) + ")")
        self.advance()

        length = None
        if tok.value == "VARCHAR":
            self.match_symbol("(")
            len_tok = self.current()
            if len_tok.kind is not TokenKind.NUMBER:
                raise self.unexpected("VARCHAR length")
            self.advance()
            length = int(len_tok.value)
            self.match_symbol(")")

        return ColumnType(str(tok.value), length, line=tok.line, col=tok.col)

    def parse_constraint(self) -> Constraint:
        tok = self.advance()
        pos = {"line": tok.line, "col": tok.col}

        if tok.value == "NOT":
            self.match_keyword("NULL")
            return Constraint(ConstraintKind.NOT_NULL, **pos)
        if tok.value == "PRIMARY":
            self.match_keyword("KEY")
            return Constraint(ConstraintKind.PRIMARY_KEY, **pos)
        if tok.value == "UNIQUE":
            return Constraint(ConstraintKind.UNIQUE, **pos)
        if tok.value == "DEFAULT":
            return Constraint(ConstraintKind.DEFAULT, self.parse_default_value(), **pos)
        if tok.value == "CHECK":
            self.match_symbol("(")
            predicate = self.parse_expression()
            self.expect_close_paren(tok)
            return Constraint(ConstraintKind.CHECK, predicate, **pos)
        raise AssertionError(f"Unhandled constraint keyword: {tok}")  # pragma: no cover

    def parse_default_value(self) -> Expression:
        """DEFAULT accepts a literal, optionally signed when numeric."""
        tok = self.current()
        if tok.is_symbol("-", "+") and self.peek().kind is TokenKind.NUMBER:
            self.advance()
            operand = self.parse_literal(self.advance())
            return UnaryOperation(
                UnaryOperator(tok.value), operand, line=tok.line, col=tok.col
            )
        if tok.kind in (TokenKind.NUMBER, TokenKind.STRING) or tok.is_keyword(
            "TRUE", "FALSE", "NULL"
        ):
            return self.parse_literal(self.advance())
        raise self.unexpected("literal DEFAULT value")

    # Expressions

    def parse_expression(self, min_precedence: int = LOWEST_PRECEDENCE) -> Expression:
        """Pratt loop: fold binary operators binding at least `min_precedence`."""
        left = self.parse_prefix()

        while True:
            binding = self.binary_binding(self.current())
            if binding is None:
                break
            precedence, associativity = binding
            if precedence < min_precedence:
                break
            op_tok = self.advance()
            next_min = precedence if associativity == RIGHT else precedence + 1
            right = self.parse_expression(next_min)
            left = BinaryOperation(
                BinaryOperator(op_tok.value),
                left,
                right,
                line=left.line,
                col=left.col,
            )

        return left

    @staticmethod
    def binary_binding(tok: Token) -> tuple[int, str] | None:
        if tok.kind in (TokenKind.OPERATOR, TokenKind.KEYWORD):
            return binary_precedence.get(str(tok.value))
        return None

    def parse_prefix(self) -> Expression:
        tok = self.current()

        if tok.kind is TokenKind.IDENT:
            self.advance()
            return Identifier(str(tok.value), line=tok.line, col=tok.col)

        if tok.kind in (TokenKind.NUMBER, TokenKind.STRING) or tok.is_keyword(
            "TRUE", "FALSE", "NULL"
        ):
            return self.parse_literal(self.advance())

        if tok.is_symbol("("):
            self.advance()
            self.enter_nested(tok)
            inner = self.parse_expression(LOWEST_PRECEDENCE)
            self.expect_close_paren(tok)
            self.depth -= 1
            return inner

        if (tok.kind is TokenKind.OPERATOR or tok.kind is TokenKind.KEYWORD) and str(
            tok.value
        ) in prefix_operators:
            self.advance()
            self.enter_nested(tok)
            operand = self.parse_expression(PREFIX_PRECEDENCE)
            self.depth -= 1
            return UnaryOperation(
                UnaryOperator(tok.value), operand, line=tok.line, col=tok.col
            )

        raise self.unexpected("expression")

    def enter_nested(self, tok: Token) -> None:
        self.depth += 1
        if self.depth > MAX_NESTING_DEPTH:
            raise self.error(
                UnexpectedToken,
                f"Expression nested too deeply (limit {MAX_NESTING_DEPTH} levels)",
                tok,
            )

    def parse_literal(self, tok: Token) -> Expression:
        pos = {"line": tok.line, "col": tok.col}
        if tok.kind is TokenKind.NUMBER:
            return Number(int(tok.value), **pos)
        if tok.kind is TokenKind.STRING:
            return StringLiteral(str(tok.value), **pos)
        if tok.value == "NULL":
            return Null(**pos)
        return Boolean(tok.value == "TRUE", **pos)

    def expect_close_paren(self, open_tok: Token) -> None:
        if not self.current().is_symbol(")"):
            raise self.error(
                UnmatchedParenthesis,
                f"'(' at line {open_tok.line}, col {open_tok.col} is never closed; "
                f"got {self.current().describe()}",
            )
        self.advance()


def parse(tokens: list[Token]) -> Statement:
    """Parse a token list (as produced by `tokenize`) into one Statement."""
    return Parser(tokens).parse()


def parse_sql(source: str) -> Statement:
    """Tokenize and parse one statement.

    Raises:
        SQLSyntaxError: The first tokenize or parse error.
    """
    return parse(tokenize(source))


def try_parse(source: str) -> Statement | SQLSyntaxError:
    """Tokenize and parse one statement, returning the error as a value."""
    try:
        return parse_sql(source)
    except SQLSyntaxError as e:
        logger.debug("rejected statement: %s", e)
        return e


__all__ = ["Parser", "parse", "parse_sql", "try_parse"]
