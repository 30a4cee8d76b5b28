"""
Error taxonomy for the SQLAST tokenizer and parser.

Every failure raised by the core derives from `SQLSyntaxError`, which itself
subclasses the built-in `SyntaxError` so callers can catch either. Each error
carries the position of the offending character or token.

Tokenize-time:
    UnterminatedString, InvalidNumber, UnexpectedCharacter

Parse-time:
    UnexpectedToken, ExpectedIdentifier, EmptyProjectionList, EmptyColumnList,
    UnknownConstraint, UnmatchedParenthesis, TrailingTokens, UnexpectedEndOfInput
"""


class SQLSyntaxError(SyntaxError):
    """Base class for all tokenize and parse errors.

    Attributes:
        message (str): Human-readable explanation.
        offset (int): 0-based character offset into the statement text.
        line (int): 1-based line number.
        col (int): 1-based column number.
    """

    def __init__(self, message: str, offset: int = 0, line: int = 1, col: int = 1):
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.line = line
        self.col = col

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return f"{self.kind} at line {self.line}, col {self.col}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.kind}({self.message!r}, offset={self.offset})"


class TokenizeError(SQLSyntaxError):
    """Raised by the lexer when the input cannot be split into tokens."""


class UnterminatedString(TokenizeError):
    pass


class InvalidNumber(TokenizeError):
    pass


class UnexpectedCharacter(TokenizeError):
    pass


class ParseError(SQLSyntaxError):
    """Raised by the parser when the token list does not match the grammar."""


class UnexpectedToken(ParseError):
    pass


class ExpectedIdentifier(ParseError):
    pass


class EmptyProjectionList(ParseError):
    pass


class EmptyColumnList(ParseError):
    pass


class UnknownConstraint(ParseError):
    pass


class UnmatchedParenthesis(ParseError):
    pass


class TrailingTokens(ParseError):
    pass


class UnexpectedEndOfInput(ParseError):
    pass


__all__ = [
    "EmptyColumnList",
    "EmptyProjectionList",
    "ExpectedIdentifier",
    "InvalidNumber",
    "ParseError",
    "SQLSyntaxError",
    "TokenizeError",
    "TrailingTokens",
    "UnexpectedCharacter",
    "UnexpectedEndOfInput",
    "UnexpectedToken",
    "UnknownConstraint",
    "UnmatchedParenthesis",
    "UnterminatedString",
]
