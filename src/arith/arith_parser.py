"""
ARITH Language Parser

Parses ARITH language source tokens into structured abstract syntax trees (ASTs).

The parser is two layers: a precedence-climbing expression parser under a
recursive-descent statement parser. It consumes the token list produced by
`arith.arith_lexer`, with whitespace and comments already removed, and never
backtracks: every rule either consumes a token and advances, or fails.

Supported Constructs
--------------------
- Expressions, lowest to highest precedence:
    * Assignment: `=`, `+=`, `-=`, `/=`, `*=`, `&=`, `^=`, `|=` (right-associative)
    * Logical: `||`, then `&&`
    * Bitwise: `|`, then `^`, then `&`
    * Equality: `==`, `!=`
    * Relational: `<`, `<=`, `>`, `>=`
    * Additive: `+`, `-`
    * Multiplicative: `*`, `/`
    * Unary: prefix `!` / `-`, postfix `++` / `--`
    * Parenthesized expressions, numbers and identifiers

- Statements:
    * `print x;`
    * `if (cond) stmt` with optional `else stmt` (binds to the nearest `if`)
    * `while (cond) stmt`
    * `for (init-stmt cond; step) stmt`
    * `{ stmt* }` blocks, the empty statement `;`
    * Comma-separated expression statements: `a = 1, b = 2;`

Parser Behavior
---------------
- Strict: the first grammar violation raises `ArithSyntaxError`, and no partial
  AST is returned.
- Nesting depth is bounded by the interpreter's recursion limit; deeper input
  raises `RecursionError` unchanged.

Entry Points
------------
- `Parser.parse_program()` / `Parser.parse()`: Parse a whole token stream.
- `Parser.parse_statement()`: Parse a single statement.
- `Parser.parse_expression()`: Parse a single expression at assignment level.
- `parse_source()`: Lex and parse source text in one call.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from arith.arith_ast import (
    BinaryOp,
    Block,
    Empty,
    Expression,
    ExpressionStatement,
    For,
    If,
    IfElse,
    Number,
    Print,
    Statement,
    UnaryOp,
    Variable,
    While,
)
from arith.arith_constants import (
    assignment_ops,
    postfix_ops,
    prefix_ops,
    statement_starters,
)
from arith.arith_lexer import Token, tokenize


class ArithSyntaxError(SyntaxError):
    """Raised at the first grammar violation.

    Attributes:
        reason (str): Human-readable description, without location.
        line (int | None): 1-based line of the offending token, or None when the
            token stream ran out mid-rule.
        expected (tuple[str, ...]): Token types that would have been accepted,
            empty when the failure is not a `require` mismatch.
    """

    def __init__(
        self, message: str, line: int | None = None, expected: tuple[str, ...] = ()
    ) -> None:
        where = f"line {line}" if line is not None else "end of input"
        super().__init__(f"{message} at {where}")
        self.reason = message
        self.line = line
        self.expected = expected


class Parser:
    """
    ARITH Parser Class

    Owns the token cursor for one parse. The token sequence is copied into a tuple,
    so the caller's list is never mutated; a trailing `EOF` token from the lexer is
    treated as the end of the stream.

    Attributes
    ----------
    tokens : tuple[Token, ...]
        The input token stream.
    position : int
        Index of the next unread token. Only ever increases.
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens: tuple[Token, ...] = tuple(tokens)
        self.position: int = 0

    # Cursor primitives

    def current(self) -> Token | None:
        if self.position < len(self.tokens):
            tok = self.tokens[self.position]
            if tok.type != "EOF":
                return tok
        return None

    def at_end(self) -> bool:
        return self.current() is None

    def error(self, message: str, expected: tuple[str, ...] = ()) -> ArithSyntaxError:
        """Builds an error located at the current token, or at end of input."""
        tok = self.current()
        return ArithSyntaxError(
            message, tok.line if tok is not None else None, expected=expected
        )

    def match(self, *types: str) -> Token | None:
        """Consume and return the current token if its type is in `types`."""
        tok = self.current()
        if tok is not None and tok.type in types:
            self.position += 1
            return tok
        return None

    def require(self, *types: str) -> Token:
        tok = self.match(*types)
        if tok is None:
            current = self.current()
            found = f", got {current.value!r}" if current is not None else ""
            raise self.error(f"Expected one of {types}{found}", expected=types)
        return tok

    # Expressions

    def parse_expression(self) -> Expression:
        """Parse one full expression, starting at the assignment level."""
        if self.at_end():
            raise self.error("Expected expression")
        return self.parse_assignment()

    def parse_assignment(self) -> Expression:
        left = self.parse_logical_or()
        op = self.match(*assignment_ops)
        if op is not None:
            # recursive right side: `a = b = 1` is `a = (b = 1)`
            return BinaryOp(op, left, self.parse_assignment())
        return left

    def _fold_left(
        self, operand: Callable[[], Expression], *ops: str
    ) -> Expression:
        """Parse `operand (op operand)*`, grouping to the left."""
        left = operand()
        while (op := self.match(*ops)) is not None:
            left = BinaryOp(op, left, operand())
        return left

    def parse_logical_or(self) -> Expression:
        return self._fold_left(self.parse_logical_and, "LOR")

    def parse_logical_and(self) -> Expression:
        return self._fold_left(self.parse_bitwise_or, "LAND")

    def parse_bitwise_or(self) -> Expression:
        return self._fold_left(self.parse_bitwise_xor, "OR")

    def parse_bitwise_xor(self) -> Expression:
        return self._fold_left(self.parse_bitwise_and, "XOR")

    def parse_bitwise_and(self) -> Expression:
        return self._fold_left(self.parse_equality, "AND")

    def parse_equality(self) -> Expression:
        return self._fold_left(self.parse_relational, "EQUAL", "NEQUAL")

    def parse_relational(self) -> Expression:
        return self._fold_left(
            self.parse_additive, "LESS", "LESS_EQUAL", "GREATER", "GREATER_EQUAL"
        )

    def parse_additive(self) -> Expression:
        return self._fold_left(self.parse_multiplicative, "ADD", "SUB")

    def parse_multiplicative(self) -> Expression:
        return self._fold_left(self.parse_unary, "MUL", "DIV")

    def parse_unary(self) -> Expression:
        """Parse prefix operators, one operand, and an optional postfix operator.

        The postfix operator wraps the operand first; prefixes are then applied
        from the closest one outwards, so `-x++` is `-(x++)` and `!-x` is `!(-x)`.
        """
        prefixes: list[Token] = []
        while (tok := self.match(*prefix_ops)) is not None:
            prefixes.append(tok)

        expr = self.parse_parens()

        postfix = self.match(*postfix_ops)
        if postfix is not None:
            expr = UnaryOp(postfix, expr)

        for tok in reversed(prefixes):
            expr = UnaryOp(tok, expr)
        return expr

    def parse_parens(self) -> Expression:
        if self.match("LPAR") is not None:
            expr = self.parse_assignment()
            self.require("RPAR")
            return expr
        return self.parse_primary()

    def parse_primary(self) -> Expression:
        num = self.match("NUMBER")
        if num is not None:
            return Number(num)
        ident = self.match("ID")
        if ident is not None:
            return Variable(ident)
        raise self.error("Expected number or identifier")

    # Statements

    def parse_statement(self) -> Statement:
        """Parse one statement starting at the cursor."""
        tok = self.match(*statement_starters)
        if tok is None:
            if self.match("SEMICOLON") is not None:
                return Empty()
            stmt = self.parse_expression_statement()
            self.require("SEMICOLON")
            return stmt

        if tok.type == "PRINT":
            return self.parse_print()
        if tok.type == "WHILE":
            return self.parse_while()
        if tok.type == "FOR":
            return self.parse_for()
        if tok.type == "IF":
            return self.parse_if()
        return self.parse_block()

    def parse_print(self) -> Print:
        target = Variable(self.require("ID"))
        self.require("SEMICOLON")
        return Print(target)

    def parse_condition(self) -> Expression:
        """Parse a parenthesized `( expr )` condition."""
        self.require("LPAR")
        condition = self.parse_expression()
        self.require("RPAR")
        return condition

    def parse_while(self) -> While:
        condition = self.parse_condition()
        body = self.parse_statement()
        return While(body, condition)

    def parse_for(self) -> For:
        # init is a whole statement and consumes its own `;`; step has none before `)`
        self.require("LPAR")
        init = self.parse_statement()
        condition = self.parse_expression()
        self.require("SEMICOLON")
        step = self.parse_expression_statement()
        self.require("RPAR")
        body = self.parse_statement()
        return For(body, init, condition, step)

    def parse_if(self) -> If | IfElse:
        condition = self.parse_condition()
        then_branch = self.parse_statement()
        if self.match("ELSE") is not None:
            return IfElse(condition, then_branch, self.parse_statement())
        return If(condition, then_branch)

    def parse_block(self) -> Block:
        """Parse statements up to the `}` closing an already consumed `{`."""
        statements: list[Statement] = []
        while self.match("RBRACE") is None:
            if self.at_end():
                raise self.error("Expected '}' to close block", expected=("RBRACE",))
            statements.append(self.parse_statement())
        return Block(tuple(statements))

    def parse_expression_statement(self) -> ExpressionStatement:
        expressions = [self.parse_expression()]
        while self.match("COMMA") is not None:
            expressions.append(self.parse_expression())
        return ExpressionStatement(tuple(expressions))

    # Program

    def parse_program(self) -> list[Statement]:
        """Parse statements until the token stream is exhausted."""
        statements: list[Statement] = []
        while not self.at_end():
            statements.append(self.parse_statement())
        return statements

    parse = parse_program


def parse_source(source: str) -> list[Statement]:
    """Lex and parse ARITH source text into its top-level statements."""
    return Parser(tokenize(source)).parse_program()


__all__ = ["ArithSyntaxError", "Parser", "parse_source"]
