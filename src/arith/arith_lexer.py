"""
Lexical analyzer for the ARITH language.

This module turns raw source text into the flat token stream consumed by the parser:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with type, value, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.

Features:
    - Any other character, including non-ASCII letters and digits, becomes an `ERROR` token
    - Skips whitespace, `//` line comments and `/* ... */` block comments, so the
      parser never sees layout or comment tokens
    - Longest-match recognition of operators (`+=` over `+`, `++` over `+`)
    - Recognizes:
        * ASCII identifiers (`[A-Za-z_][A-Za-z0-9_]*`) and the keywords `print`, `if`, `else`, `while`, `for`
        * Numbers (ASCII digit runs with an optional `.digits` fraction)
        * Operators and punctuation

Raises:
    SyntaxError: On an unterminated block comment or a number with two fractions.

Example:
    >>> lexer = Lexer(CharacterStream("print x;"))
    >>> lexer.next_token()
    Token(PRINT, print)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

import string
from typing import Any

from arith.arith_constants import keyword_tokens, operator_map

# Longest operator spelling; bounds the lookahead in match_operator
MAX_OPERATOR_LEN = max(len(op) for op in operator_map)

IDENT_START = frozenset(string.ascii_letters + "_")
IDENT_CHARS = IDENT_START | frozenset(string.digits)
DIGITS = frozenset(string.digits)


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the ARITH language.

    Attributes:
        type (str): The canonical token type (e.g. 'ID', 'NUMBER', 'ASSIGNMENT_ADD').
        value (str): The raw source text of the token.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    __slots__ = ("type", "value", "line", "col")

    def __init__(self, type_: str, value: str, line: int = 0, col: int = 0):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "value": self.value, "line": self.line, "col": self.col}


class Lexer:
    """Lexical analyzer for the ARITH language.

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
        """Skips all whitespace and comments in the stream."""
        while not self.stream.end_of_file():
            if self.peek() in " \t\r\n":
                self.advance()
            elif self.peek() == "/" and self.peek(1) == "/":
                self.skip_comment()
            elif self.peek() == "/" and self.peek(1) == "*":
                self.skip_block_comment()
            else:
                break

    def skip_comment(self) -> None:
        """Advances through the stream until the end of a `//` comment line."""
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def skip_block_comment(self) -> None:
        """Advances past a `/* ... */` comment, which may span lines.

        Raises:
            SyntaxError: If the comment is never closed.
        """
        line, col = self.stream.line, self.stream.column
        self.advance()
        self.advance()
        while not self.stream.end_of_file():
            if self.peek() == "*" and self.peek(1) == "/":
                self.advance()
                self.advance()
                return
            self.advance()
        raise SyntaxError(f"Unterminated block comment at line {line}, col {col}")

    def match_operator(self) -> Token | None:
        """Attempts to match the longest valid operator from the current position."""
        line, col = self.stream.line, self.stream.column
        max_token = None
        candidate = ""

        for i in range(MAX_OPERATOR_LEN):
            ch = self.stream.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in operator_map:
                max_token = candidate

        if max_token:
            for _ in range(len(max_token)):
                self.advance()
            return Token(operator_map[max_token], max_token, line, col)

        return None

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token, or an `EOF` token once the source is exhausted.

        Raises:
            SyntaxError: On an unterminated block comment or a malformed number.
        """
        self.skip_whitespace()

        if self.stream.end_of_file():
            return Token("EOF", "EOF", self.stream.line, self.stream.column)

        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        # 1. Identifier or keyword
        if ch in IDENT_START:
            ident = ""
            while self.peek() in IDENT_CHARS:
                ident += self.advance()
            if ident in keyword_tokens:
                return Token(keyword_tokens[ident], ident, line, col)
            return Token("ID", ident, line, col)

        # 2. Number with optional fraction
        if ch in DIGITS:
            num = ""
            while self.peek() in DIGITS:
                num += self.advance()
            if self.peek() == "." and self.peek(1) in DIGITS:
                num += self.advance()
                while self.peek() in DIGITS:
                    num += self.advance()
                if self.peek() == "." and self.peek(1) in DIGITS:
                    raise SyntaxError(f"Invalid number format at line {line}, col {col}")
            return Token("NUMBER", num, line, col)

        # 3. Compound or symbolic operator
        token = self.match_operator()
        if token:
            return token

        # 4. Unknown character, left for the parser to reject
        return Token("ERROR", self.advance(), line, col)


def tokenize(source: str) -> list[Token]:
    """Lexes `source` completely and returns its tokens, without the trailing EOF."""
    lexer = Lexer(CharacterStream(source, 0, 1, 1))
    tokens: list[Token] = []
    while True:
        tok = lexer.next_token()
        if tok.type == "EOF":
            break
        tokens.append(tok)
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
