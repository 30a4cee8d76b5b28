"""
Lexical analyzer for the SQLAST SQL subset.

This module converts raw statement text into an ordered, finite list of tokens:

Classes:
    CharacterStream: Character cursor with offset/line/column tracking.
    TokenKind: The closed set of token kinds.
    Token: An immutable token with kind, payload and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Functions:
    tokenize(source): Returns every token of `source`, terminated by one EOF token.

Features:
    - Skips whitespace and `--` line comments
    - Longest-match recognition of operators and punctuation (`>=` before `>`)
    - Recognizes:
        * Identifiers and keywords (keywords matched case-insensitively)
        * Integer numbers
        * Strings in single or double quotes (a doubled quote escapes itself)

Raises:
    UnterminatedString: A quote is opened but never closed.
    InvalidNumber: A digit run runs straight into letters, `_` or `.`.
    UnexpectedCharacter: A character that starts no token.

Example:
    >>> [t.value for t in tokenize("select id from t")]
    ['SELECT', 'id', 'FROM', 't', 'EOF']
"""

import logging
from collections.abc import Iterator
from enum import Enum
from typing import Any

from sqlast.sqlast_constants import (
    COMMENT_START,
    MAX_SYMBOL_LENGTH,
    keywords,
    symbol_hashmap,
)
from sqlast.sqlast_errors import InvalidNumber, UnexpectedCharacter, UnterminatedString

logger = logging.getLogger(__name__)


def is_digit(ch: str) -> bool:
    return ch != "" and ch in "0123456789"


class CharacterStream:
    """Cursor over the statement text that tracks offset, line and column."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.offset = 0
        self.line = 1
        self.col = 1

    def next(self) -> str:
        """Consumes one character.

        Raises:
            EOFError: If the whole source has been consumed.
        """
        if self.end_of_file():
            raise EOFError(f"No character left at offset {self.offset}")
        char = self.source[self.offset]
        self.offset += 1
        if char == "\n":
            self.line, self.col = self.line + 1, 1
        else:
            self.col += 1
        return char

    def peek(self, ahead: int = 0) -> str:
        """The character `ahead` places past the cursor, or "" past the end."""
        start = self.offset + ahead
        return self.source[start : start + 1]

    def end_of_file(self) -> bool:
        return self.offset >= len(self.source)

    def location(self) -> tuple[int, int, int]:
        return self.offset, self.line, self.col


class TokenKind(str, Enum):
    IDENT = "IDENT"
    KEYWORD = "KEYWORD"
    NUMBER = "NUMBER"
    STRING = "STRING"
    OPERATOR = "OPERATOR"
    PUNCT = "PUNCT"
    EOF = "EOF"


class Token:
    """Represents a single lexical token.

    Tokens are immutable once built.

    Attributes:
        kind (TokenKind): The token kind.
        value (str | int): Identifier text, upper-case keyword, integer value,
            string contents or symbol text.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
        offset (int): The 0-based character offset where the token starts.
    """

    __slots__ = ("kind", "value", "line", "col", "offset")

    kind: TokenKind
    value: str | int
    line: int
    col: int
    offset: int

    def __init__(
        self,
        kind: TokenKind | str,
        value: str | int,
        line: int = 0,
        col: int = 0,
        offset: int = 0,
    ) -> None:
        object.__setattr__(self, "kind", TokenKind(kind))
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "col", col)
        object.__setattr__(self, "offset", offset)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable; cannot set {name!r}")

    def is_keyword(self, *names: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.value in names

    def is_symbol(self, *symbols: str) -> bool:
        return (
            self.kind in (TokenKind.OPERATOR, TokenKind.PUNCT) and self.value in symbols
        )

    def describe(self) -> str:
        """Short form used in error messages, e.g. `keyword FROM` or `end of input`."""
        if self.kind is TokenKind.EOF:
            return "end of input"
        if self.kind is TokenKind.STRING:
            return f"string {self.value!r}"
        return f"{self.kind.value.lower()} {self.value}"

    def __repr__(self) -> str:
        return f"Token({self.kind.value}, {self.value!r})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.kind == other.kind
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
            and self.offset == other.offset
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.value, self.line, self.col, self.offset))


class Lexer:
    """Lexical analyzer for the SQL subset.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips all whitespace and `--` comments in the stream."""
        while not self.stream.end_of_file():
            if self.peek() in " \t\r\n":
                self.advance()
            elif self.peek() + self.peek(1) == COMMENT_START:
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        """Advances through the stream until the end of a comment line."""
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def match_symbol(self) -> Token | None:
        """Attempts to match the longest operator or punctuation symbol.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        offset, line, col = self.stream.location()
        max_symbol = None
        candidate = ""

        for i in range(MAX_SYMBOL_LENGTH):
            ch = self.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in symbol_hashmap:
                max_symbol = candidate

        if max_symbol:
            for _ in range(len(max_symbol)):
                self.advance()
            return Token(symbol_hashmap[max_symbol], max_symbol, line, col, offset)

        return None

    def read_word(self) -> Token:
        offset, line, col = self.stream.location()
        word = ""
        while not self.stream.end_of_file() and (
            self.peek().isalnum() or self.peek() == "_"
        ):
            word += self.advance()
        if word.upper() in keywords:
            return Token(TokenKind.KEYWORD, word.upper(), line, col, offset)
        return Token(TokenKind.IDENT, word, line, col, offset)

    def read_number(self) -> Token:
        offset, line, col = self.stream.location()
        digits = ""
        while not self.stream.end_of_file() and is_digit(self.peek()):
            digits += self.advance()
        follower = self.peek()
        if follower and (follower.isalpha() or follower in "_."):
            raise InvalidNumber(
                f"Malformed number starting with {digits!r}: unexpected {follower!r}",
                offset,
                line,
                col,
            )
        return Token(TokenKind.NUMBER, int(digits), line, col, offset)

    def read_string(self) -> Token:
        offset, line, col = self.stream.location()
        quote = self.advance()
        val = ""
        while not self.stream.end_of_file():
            ch = self.advance()
            if ch != quote:
                val += ch
            elif self.peek() == quote:
                val += self.advance()
            else:
                return Token(TokenKind.STRING, val, line, col, offset)
        raise UnterminatedString(
            f"String opened with {quote} is never closed", offset, line, col
        )

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Raises:
            TokenizeError: If a malformed token is encountered.
        """
        self.skip_whitespace()

        if self.stream.end_of_file():
            offset, line, col = self.stream.location()
            return Token(TokenKind.EOF, "EOF", line, col, offset)

        ch = self.peek()

        # 1. Identifier or keyword
        if ch.isalpha() or ch == "_":
            return self.read_word()

        # 2. Integer
        if is_digit(ch):
            return self.read_number()

        # 3. String
        if ch in ("'", '"'):
            return self.read_string()

        # 4. Operator or punctuation
        token = self.match_symbol()
        if token:
            return token

        # 5. Unknown character
        offset, line, col = self.stream.location()
        raise UnexpectedCharacter(f"Unexpected character {ch!r}", offset, line, col)

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind is TokenKind.EOF:
                return


def tokenize(source: str) -> list[Token]:
    """Tokenizes a complete statement.

    Args:
        source (str): The statement text.

    Returns:
        list[Token]: Every token in order, ending with exactly one EOF token.

    Raises:
        TokenizeError: On the first malformed token.
    """
    tokens = list(Lexer(CharacterStream(source)))
    logger.debug("tokenized %d characters into %d tokens", len(source), len(tokens))
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "TokenKind", "tokenize"]
