"""
SQLAST CLI Entrypoint.

This module provides the command-line interface for parsing SQL statements.

Features:
    - Read a statement from a `.sql` file or an inline string.
    - Tokenize and parse it into an AST.
    - Render the AST as a tree, JSON or canonical SQL.
    - Output to console or file.
    - Launch the interactive shell.

Example usage:
    sqlast query.sql
    sqlast -s "SELECT id FROM users WHERE id > 10;" -f json
    sqlast schema.sql -f sql -o schema.canonical.sql
    sqlast --repl --verbose

Functions:
    run_sqlast(source, is_string=False, fmt="tree", out=None) -> str:
        Executes the full pipeline (tokenize -> parse -> render -> output).

    main(argv=None) -> int:
        Parses CLI arguments and invokes the appropriate action.
"""

import argparse
import logging
import sys

from sqlast.sqlast_errors import SQLSyntaxError
from sqlast.sqlast_parser import parse_sql
from sqlast.sqlast_render import Renderer, default_format, emitters

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def run_sqlast(
    source: str,
    is_string: bool = False,
    fmt: str = "tree",
    out: str | None = None,
) -> str:
    """
    Run the SQLAST pipeline: tokenize, parse, render, then print or write the result.

    Args:
        source (str): The statement text or path to a `.sql` file.
        is_string (bool): If True, treats `source` as the statement itself. Defaults to False.
        fmt (str): Output format ('tree', 'json' or 'sql'). Defaults to 'tree'.
        out (str | None): Optional path to write the rendering to. If None, prints to stdout.

    Returns:
        str: The rendered statement.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.sql'.
        SQLSyntaxError: If the statement does not tokenize or parse.
    """
    if not is_string and not source.endswith(".sql"):
        raise ValueError("Only .sql files are supported.")
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    statement = parse_sql(source)
    logger.debug("parsed %s from %d characters", statement.kind, len(source))
    rendered = Renderer(fmt).render(statement)

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(rendered + "\n")
        logger.info("wrote %s output to %s", fmt, out)
    else:
        print(rendered)
    return rendered


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlast", description="Parse a SQL statement into an AST."
    )
    parser.add_argument("source", nargs="?", help="Filename or raw statement (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=tuple(emitters),
        default=None,
        help="Output format (default: $SQLAST_FORMAT or tree)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch the interactive shell instead of parsing SOURCE",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the SQLAST CLI.

    - Launches the shell if no source is given or `--repl` is specified.
    - Otherwise parses SOURCE and renders it.

    Returns:
        int: Process exit status; 1 when the statement is rejected.
    """
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING, format=LOG_FORMAT
    )
    fmt = args.fmt or default_format()

    if args.repl or args.source is None:
        from sqlast.sqlast_repl import start_repl

        start_repl(fmt=fmt, verbose=args.verbose)
        return 0

    try:
        run_sqlast(source=args.source, is_string=args.string, fmt=fmt, out=args.out)
    except SQLSyntaxError as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    sys.exit(main())
