import pytest
from hypothesis import given
from hypothesis import strategies as st

from sqlast.sqlast_constants import keywords
from sqlast.sqlast_errors import (
    InvalidNumber,
    TokenizeError,
    UnexpectedCharacter,
    UnterminatedString,
)
from sqlast.sqlast_lexer import CharacterStream, Lexer, Token, TokenKind, tokenize


def kinds_and_values(source: str) -> list[tuple[str, object]]:
    return [(tok.kind.value, tok.value) for tok in tokenize(source)]


def test_select_statement_tokens() -> None:
    assert kinds_and_values("SELECT id, name FROM users;") == [
        ("KEYWORD", "SELECT"),
        ("IDENT", "id"),
        ("PUNCT", ","),
        ("IDENT", "name"),
        ("KEYWORD", "FROM"),
        ("IDENT", "users"),
        ("PUNCT", ";"),
        ("EOF", "EOF"),
    ]


def test_keywords_are_case_insensitive() -> None:
    tokens = tokenize("select From wHeRe")
    assert [t.kind for t in tokens[:-1]] == [TokenKind.KEYWORD] * 3
    assert [t.value for t in tokens[:-1]] == ["SELECT", "FROM", "WHERE"]


def test_identifier_keeps_spelling() -> None:
    tok = tokenize("UserName_2")[0]
    assert tok.kind is TokenKind.IDENT
    assert tok.value == "UserName_2"


def test_identifier_may_start_with_underscore() -> None:
    assert kinds_and_values("_tmp")[0] == ("IDENT", "_tmp")


def test_number_payload_is_int() -> None:
    tok = tokenize("0042")[0]
    assert tok.kind is TokenKind.NUMBER
    assert tok.value == 42


def test_strings_with_either_quote() -> None:
    assert kinds_and_values("'abc' \"d e\"")[:2] == [
        ("STRING", "abc"),
        ("STRING", "d e"),
    ]


def test_doubled_quote_escapes_itself() -> None:
    assert tokenize("'it''s'")[0].value == "it's"


def test_other_quote_is_plain_content() -> None:
    assert tokenize("'say \"hi\"'")[0].value == 'say "hi"'


def test_empty_string() -> None:
    assert kinds_and_values("''")[0] == ("STRING", "")


@pytest.mark.parametrize(
    "source,expected",
    [
        (">=", [">="]),
        ("<=", ["<="]),
        ("<>", ["<>"]),
        ("!=", ["!="]),
        ("> =", [">", "="]),
        ("<>=", ["<>", "="]),
        ("+-*/", ["+", "-", "*", "/"]),
        ("(),;", ["(", ")", ",", ";"]),
    ],
)
def test_longest_symbol_match(source: str, expected: list[str]) -> None:
    assert [t.value for t in tokenize(source)[:-1]] == expected


def test_operator_and_punctuation_kinds() -> None:
    tokens = tokenize("= (")
    assert tokens[0].kind is TokenKind.OPERATOR
    assert tokens[1].kind is TokenKind.PUNCT


def test_whitespace_and_comments_are_skipped() -> None:
    source = "  SELECT -- all of it\n\t a\r\n FROM t -- trailing"
    assert [t.value for t in tokenize(source)] == ["SELECT", "a", "FROM", "t", "EOF"]


def test_single_minus_is_not_a_comment() -> None:
    assert [t.value for t in tokenize("a - -1")] == ["a", "-", "-", 1, "EOF"]


def test_negative_number_is_two_tokens() -> None:
    assert kinds_and_values("-5")[:2] == [("OPERATOR", "-"), ("NUMBER", 5)]


def test_positions() -> None:
    tokens = tokenize("SELECT a\nFROM  t")
    assert [(t.offset, t.line, t.col) for t in tokens] == [
        (0, 1, 1),
        (7, 1, 8),
        (9, 2, 1),
        (15, 2, 7),
        (16, 2, 8),
    ]


def test_exactly_one_eof() -> None:
    tokens = tokenize("a b c")
    assert [t.kind for t in tokens].count(TokenKind.EOF) == 1
    assert tokens[-1].kind is TokenKind.EOF


def test_empty_input_is_just_eof() -> None:
    assert tokenize("") == [Token(TokenKind.EOF, "EOF", 1, 1, 0)]
    assert kinds_and_values("  -- nothing here") == [("EOF", "EOF")]


def test_unterminated_string_reports_opening_quote() -> None:
    with pytest.raises(UnterminatedString) as exc:
        tokenize("SELECT 'abc FROM t;")
    assert exc.value.offset == 7
    assert (exc.value.line, exc.value.col) == (1, 8)


def test_unterminated_string_after_escaped_quote() -> None:
    with pytest.raises(UnterminatedString):
        tokenize("'abc''")


@pytest.mark.parametrize("source", ["12abc", "3.14", "7_"])
def test_invalid_number(source: str) -> None:
    with pytest.raises(InvalidNumber) as exc:
        tokenize("SELECT " + source)
    assert exc.value.offset == 7


@pytest.mark.parametrize("source,offset", [("a # b", 2), ("!", 0), ("x @", 2)])
def test_unexpected_character(source: str, offset: int) -> None:
    with pytest.raises(UnexpectedCharacter) as exc:
        tokenize(source)
    assert exc.value.offset == offset


def test_tokenize_errors_are_syntax_errors() -> None:
    with pytest.raises(SyntaxError):
        tokenize("'open")


def test_lexer_is_restartable() -> None:
    source = "SELECT a FROM t"
    assert tokenize(source) == tokenize(source)


def test_lexer_iterates_through_eof() -> None:
    tokens = list(Lexer(CharacterStream("a")))
    assert [t.kind for t in tokens] == [TokenKind.IDENT, TokenKind.EOF]


def test_character_stream_methods() -> None:
    stream = CharacterStream("ab\nc")
    assert stream.peek() == "a"
    assert stream.next() == "a"
    assert stream.peek(1) == "\n"
    stream.next()
    stream.next()
    assert stream.location() == (3, 2, 1)
    stream.next()
    assert stream.end_of_file()
    assert stream.peek() == ""


def test_character_stream_next_past_eof_raises() -> None:
    stream = CharacterStream("")
    with pytest.raises(EOFError):
        stream.next()


def test_token_repr_eq_and_hash() -> None:
    t1 = Token(TokenKind.NUMBER, 42, 1, 2, 1)
    t2 = Token("NUMBER", 42, 1, 2, 1)
    t3 = Token(TokenKind.IDENT, "x")

    assert repr(t1) == "Token(NUMBER, 42)"
    assert t1 == t2
    assert t1 != t3
    assert len({t1, t2, t3}) == 2


def test_token_is_immutable() -> None:
    tok = Token(TokenKind.IDENT, "x")
    with pytest.raises(AttributeError):
        tok.value = "y"  # type: ignore[misc]


def test_token_describe() -> None:
    assert Token(TokenKind.EOF, "EOF").describe() == "end of input"
    assert Token(TokenKind.KEYWORD, "FROM").describe() == "keyword FROM"
    assert Token(TokenKind.STRING, "a").describe() == "string 'a'"


@given(st.integers(min_value=0, max_value=10**30))  # type: ignore[misc]
def test_integers_tokenize_to_their_value(n: int) -> None:
    tokens = tokenize(str(n))
    assert [(t.kind, t.value) for t in tokens[:-1]] == [(TokenKind.NUMBER, n)]


@given(  # type: ignore[misc]
    st.from_regex(r"[A-Za-z_][A-Za-z0-9_]{0,12}", fullmatch=True).filter(
        lambda s: s.upper() not in keywords
    )
)
def test_non_keywords_are_identifiers(name: str) -> None:
    tok = tokenize(name)[0]
    assert tok.kind is TokenKind.IDENT
    assert tok.value == name


@given(st.sampled_from(sorted(keywords)), st.booleans())  # type: ignore[misc]
def test_every_keyword_is_recognized(word: str, lower: bool) -> None:
    tok = tokenize(word.lower() if lower else word)[0]
    assert tok.kind is TokenKind.KEYWORD
    assert tok.value == word


@given(st.text())  # type: ignore[misc]
def test_arbitrary_text_tokenizes_or_raises_tokenize_error(source: str) -> None:
    try:
        tokens = tokenize(source)
    except TokenizeError as e:
        assert 0 <= e.offset <= len(source)
    else:
        assert tokens[-1].kind is TokenKind.EOF
        assert sum(t.kind is TokenKind.EOF for t in tokens) == 1
        offsets = [t.offset for t in tokens]
        assert offsets == sorted(offsets)
