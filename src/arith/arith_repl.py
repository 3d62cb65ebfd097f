"""
Interactive read-parse-print loop for ARITH.

Each chunk of input is lexed and parsed as a complete program and the result is
printed as JSON or canonical source. Input continues on a `... ` prompt while a
`{` is still open, so blocks can be typed across lines.

Commands:
    exit / quit      leave the REPL
    verbose-mode     toggle printing of the token stream before each parse
"""

import io
import json
import traceback

from arith.arith_ast import program_to_dict
from arith.arith_lexer import Token, tokenize
from arith.arith_parser import Parser
from arith.emitters.source_emitter import SourceEmitter


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def read_chunk() -> str | None:
    """Reads one logical chunk of input; returns None when the user asks to leave."""
    src_lines: list[str] = []
    brace_count = 0
    while True:
        prompt = ">>> " if not src_lines else "... "
        line = input(prompt)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        brace_count += line.count("{") - line.count("}")
        if brace_count <= 0:
            return "\n".join(src_lines).strip()


def show_tokens(tokens: list[Token]) -> None:
    print("[tokens] >>>")
    for tok in tokens:
        print(f"  {tok.line}:{tok.col} {tok.type:<16} {tok.value}")


def start_repl(emit: str = "json", verbose: bool = False) -> None:
    print(f"ARITH REPL [emit={emit}]. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src = read_chunk()
        except (EOFError, KeyboardInterrupt):
            print()
            src = None
        if src is None:
            print("Exiting ARITH REPL.")
            return
        if not src:
            continue
        if src.lower() == "verbose-mode":
            verbose = not verbose
            print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
            continue

        try:
            tokens = tokenize(src)
            if verbose or emit == "tokens":
                show_tokens(tokens)
            if emit == "tokens":
                continue
            ast = Parser(tokens).parse_program()
        except SyntaxError as e:
            print(f"[error] >>> {e}")
            continue

        try:
            if emit == "source":
                print(SourceEmitter().emit_program(ast))
            else:
                print(json.dumps(program_to_dict(ast), indent=2))
        except (TypeError, ValueError):
            print_traceback()
