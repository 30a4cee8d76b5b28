"""
Interactive SQLAST shell.

Collects input lines until the buffer ends with `;`, parses the statement and
prints the rendered AST or the parse error, then prompts again. A failed
statement never affects the next one.

Commands (only at the start of a statement):
    exit, quit          Leave the shell (an empty line on an empty buffer also exits).
    .format FMT         Switch output to tree, json or sql.
    .verbose            Toggle debug logging and tracebacks.
"""

import io
import logging
import traceback

from sqlast.sqlast_errors import SQLSyntaxError
from sqlast.sqlast_parser import try_parse
from sqlast.sqlast_render import Renderer, default_format, emitters

logger = logging.getLogger(__name__)

PROMPT = "sql> "
CONTINUATION_PROMPT = "...> "
TERMINATOR = ";"


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def set_verbose(verbose: bool) -> None:
    logging.getLogger("sqlast").setLevel(logging.DEBUG if verbose else logging.WARNING)


def statement_complete(buffer: str) -> bool:
    return buffer.rstrip().endswith(TERMINATOR)


def handle_command(src: str, state: dict[str, object]) -> bool:
    """Runs a dot-command. Returns True if `src` was one."""
    src = src.strip()
    if not src.startswith("."):
        return False
    parts = src.split()
    command = parts[0].lower()
    if command == ".format":
        if len(parts) != 2 or parts[1].lower() not in emitters:
            print(f"[error] >>> Usage: .format <{'|'.join(emitters)}>")
            return True
        state["fmt"] = parts[1].lower()
        print(f"[mode] >>> Output format {state['fmt']}")
        return True
    if command == ".verbose":
        state["verbose"] = not state["verbose"]
        set_verbose(bool(state["verbose"]))
        print(f"[mode] >>> Verbose mode {'ON' if state['verbose'] else 'OFF'}")
        return True
    print(f"[error] >>> Unknown command: {command}")
    return True


def run_statement(src: str, fmt: str, verbose: bool = False) -> bool:
    """Parses and prints one statement. Returns False if it was rejected."""
    result = try_parse(src)
    if isinstance(result, SQLSyntaxError):
        print(f"[error] >>> {result}")
        if verbose:
            logger.debug("rejected source: %r", src)
        return False
    try:
        print(Renderer(fmt).render(result))
    except (NotImplementedError, ValueError):
        print_traceback()
        return False
    return True


def start_repl(fmt: str | None = None, verbose: bool = False) -> None:
    state: dict[str, object] = {"fmt": fmt or default_format(), "verbose": verbose}
    set_verbose(verbose)
    print("SQLAST shell. End statements with `;`. Type `exit` to quit.")

    buffer: list[str] = []
    while True:
        try:
            line = input(CONTINUATION_PROMPT if buffer else PROMPT)
        except (KeyboardInterrupt, EOFError):
            break

        if not buffer:
            stripped = line.strip()
            if stripped.lower() in ("exit", "quit") or not stripped:
                break
            if handle_command(stripped, state):
                continue

        buffer.append(line)
        src = "\n".join(buffer)
        if not statement_complete(src):
            continue
        buffer.clear()
        run_statement(src, str(state["fmt"]), bool(state["verbose"]))

    print("\nExiting SQLAST shell.")


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
