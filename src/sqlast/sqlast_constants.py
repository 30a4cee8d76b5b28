"""
Lexical and grammatical tables for the SQLAST tokenizer and parser.

Everything the lexer and the Pratt loop need to classify input lives here as
plain data, so adding a keyword or an operator never requires a control-flow
change.

Exports:
    keywords: Reserved words, matched case-insensitively.
    symbol_hashmap: Operator and punctuation symbols mapped to token kinds.
    binary_precedence: Binary operator -> (precedence, associativity).
    PREFIX_PRECEDENCE: Binding power of unary prefix operators.
    type_keywords: Keywords accepted as a column type.
"""

LEFT = "left"
RIGHT = "right"

keywords: frozenset[str] = frozenset(
    {
        "SELECT",
        "FROM",
        "WHERE",
        "ORDER",
        "BY",
        "ASC",
        "DESC",
        "CREATE",
        "TABLE",
        "AND",
        "OR",
        "NOT",
        "NULL",
        "TRUE",
        "FALSE",
        "PRIMARY",
        "KEY",
        "UNIQUE",
        "DEFAULT",
        "CHECK",
        "INT",
        "BOOL",
        "TEXT",
        "VARCHAR",
    }
)

# Symbol text -> token kind. The lexer matches the longest prefix.
symbol_hashmap: dict[str, str] = {
    "=": "OPERATOR",
    "<>": "OPERATOR",
    "!=": "OPERATOR",
    "<": "OPERATOR",
    "<=": "OPERATOR",
    ">": "OPERATOR",
    ">=": "OPERATOR",
    "+": "OPERATOR",
    "-": "OPERATOR",
    "*": "OPERATOR",
    "/": "OPERATOR",
    "(": "PUNCT",
    ")": "PUNCT",
    ",": "PUNCT",
    ";": "PUNCT",
}

MAX_SYMBOL_LENGTH = max(len(symbol) for symbol in symbol_hashmap)

# Lowest threshold accepted by the expression parser.
LOWEST_PRECEDENCE = 0

binary_precedence: dict[str, tuple[int, str]] = {
    "OR": (1, LEFT),
    "AND": (2, LEFT),
    "=": (3, LEFT),
    "<>": (3, LEFT),
    "!=": (3, LEFT),
    "<": (3, LEFT),
    "<=": (3, LEFT),
    ">": (3, LEFT),
    ">=": (3, LEFT),
    "+": (4, LEFT),
    "-": (4, LEFT),
    "*": (5, LEFT),
    "/": (5, LEFT),
}

# Prefix operators bind tighter than any binary operator.
PREFIX_PRECEDENCE = max(prec for prec, _ in binary_precedence.values()) + 1

# Parentheses and prefix operators each open one level.
MAX_NESTING_DEPTH = 200

prefix_operators: frozenset[str] = frozenset({"-", "+", "NOT"})

type_keywords: frozenset[str] = frozenset({"INT", "BOOL", "TEXT", "VARCHAR"})

constraint_keywords: frozenset[str] = frozenset(
    {"NOT", "PRIMARY", "UNIQUE", "DEFAULT", "CHECK"}
)

sort_directions: frozenset[str] = frozenset({"ASC", "DESC"})

COMMENT_START = "--"

__all__ = [
    "COMMENT_START",
    "LEFT",
    "LOWEST_PRECEDENCE",
    "MAX_NESTING_DEPTH",
    "MAX_SYMBOL_LENGTH",
    "PREFIX_PRECEDENCE",
    "RIGHT",
    "binary_precedence",
    "constraint_keywords",
    "keywords",
    "prefix_operators",
    "sort_directions",
    "symbol_hashmap",
    "type_keywords",
]
