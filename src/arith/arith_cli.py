"""
ARITH CLI Entrypoint.

This module provides the command-line interface for the ARITH front end.
It parses ARITH source and prints what the parser produced.

Features:
    - Read source from `.arith` files or inline strings.
    - Lex and parse the program, failing fast on the first syntax error.
    - Emit the AST as JSON, as canonical source, or the raw token list.
    - Output to console or file.
    - Launch an interactive REPL with optional verbosity.

Example usage:
    arith loop.arith
    arith -s "a = b = 5;" -e source
    arith loop.arith -o loop.json
    arith --repl --verbose

Functions:
    render(source: str, emit: str = "json") -> str:
        Lexes and parses source text and renders it in the requested form.

    run_arith(source: str, is_string: bool = False, emit: str = "json", out: Optional[str] = None,
              pretty: bool = False) -> None:
        Executes the full pipeline (lex → parse → emit → output).

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or parse).
"""

import argparse
import json
import sys

from arith.arith_ast import program_to_dict
from arith.arith_lexer import tokenize
from arith.arith_parser import Parser
from arith.emitters.source_emitter import SourceEmitter

EMIT_CHOICES = ("json", "source", "tokens")


def render(source: str, emit: str = "json") -> str:
    """
    Lex and parse `source`, returning the result rendered as `emit`.

    Raises:
        ValueError: If `emit` is not one of `EMIT_CHOICES`.
        SyntaxError: If lexing or parsing fails.
    """
    if emit not in EMIT_CHOICES:
        raise ValueError(f"Unknown emit format: {emit!r}")

    tokens = tokenize(source)
    if emit == "tokens":
        return json.dumps([tok.to_dict() for tok in tokens], indent=2)

    ast = Parser(tokens).parse_program()
    if emit == "source":
        return SourceEmitter().emit_program(ast)
    return json.dumps(program_to_dict(ast), indent=2)


def run_arith(
    source: str,
    is_string: bool = False,
    emit: str = "json",
    out: str | None = None,
    pretty: bool = False,
) -> None:
    """
    Run the ARITH front end: lex, parse, and print or write the rendered result.

    Args:
        source (str): The ARITH source code or path to a `.arith` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path. Defaults to False.
        emit (str): Output form ('json', 'source' or 'tokens'). Defaults to 'json'.
        out (str | None): Optional path to write the output. If None, prints to stdout.
        pretty (bool): If True, prints formatted banners around the output. Defaults to False.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.arith'.
        SyntaxError: If the source does not lex or parse.
    """
    if not is_string and not source.endswith(".arith"):
        raise ValueError("Only .arith files are supported.")
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    text = render(source, emit)

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        if pretty:
            print(f"(wrote to {out})")
    elif pretty:
        banner = "=" * 20
        print(f"{banner}\nARITH {emit}\n{banner}\n{text}\n{banner}\n")
    else:
        print(text)


def main() -> None:
    """
    Entry point for the ARITH CLI.

    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise, parses the source and emits the result.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-e`, `--emit`: Output form ('json', 'source' or 'tokens'), default is 'json'.
        - `-o`, `--out`: Write output to a file.
        - `-p`, `--pretty`: Show banners around the output.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Enable verbose REPL mode.

    A syntax error is reported on stderr and the process exits with status 1.
    """
    if len(sys.argv) == 1:
        from arith.arith_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="arith")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-e",
        "--emit",
        choices=EMIT_CHOICES,
        default="json",
        help="Output form (default: json)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of parsing a source",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from arith.arith_repl import start_repl

        start_repl(emit=args.emit, verbose=args.verbose)
        return

    try:
        run_arith(
            source=args.source,
            is_string=args.string,
            emit=args.emit,
            out=args.out,
            pretty=args.pretty,
        )
    except SyntaxError as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
