"""
Renders ARITH AST nodes back into canonical ARITH source.

This module defines the `SourceEmitter` class, the inverse of the parser: given the
statement list returned by `Parser.parse_program()`, it produces source text that
parses back into a structurally identical tree.

Canonical Form:
    - Every nested operator node is wrapped in parentheses; the outermost expression
      of a statement, condition or for-clause is left bare.
    - Blocks are printed across lines, indented by four spaces per level.
    - Single statements under `if`/`else`/`while`/`for` stay on the header's line.

Behavior:
    - Emission is pure: the tree is only read.
    - `canonical_tokens()` re-lexes the emitted text to give the canonical token sequence.

Raises:
    - `TypeError`: If something other than an AST node is encountered.
    - `ValueError`: For an `IfElse` whose then-branch ends in an else-less `if`, which has
      no source spelling (the `else` would bind to the inner `if`).
"""

import textwrap

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
from arith.arith_lexer import Token, tokenize

INDENT = "    "


class SourceEmitter:
    """Emits ARITH source from AST nodes.

    Attributes:
        lines (list[str]): Accumulated top-level statements, one entry per statement.

    Methods:
        emit_program(statements): Renders a whole program and returns the text.
        emit_statement(node): Renders one statement (possibly spanning lines).
        emit_expr(node): Renders one expression.
        get_output(): Returns everything emitted so far.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def emit_program(self, statements: list[Statement]) -> str:
        for stmt in statements:
            self.lines.append(self.emit_statement(stmt))
        return self.get_output()

    # Statements

    def emit_statement(self, node: Statement) -> str:
        if isinstance(node, Print):
            return f"print {node.target.name};"
        if isinstance(node, Empty):
            return ";"
        if isinstance(node, ExpressionStatement):
            return self.emit_expr_list(node) + ";"
        if isinstance(node, Block):
            return self.emit_block(node)
        if isinstance(node, If):
            return f"if ({self.emit_expr(node.condition)}) {self.emit_statement(node.then_branch)}"
        if isinstance(node, IfElse):
            if ends_with_open_if(node.then_branch):
                raise ValueError(
                    "Cannot emit if/else whose then-branch ends in an if without else"
                )
            return (
                f"if ({self.emit_expr(node.condition)}) "
                f"{self.emit_statement(node.then_branch)}\n"
                f"else {self.emit_statement(node.else_branch)}"
            )
        if isinstance(node, While):
            return f"while ({self.emit_expr(node.condition)}) {self.emit_statement(node.body)}"
        if isinstance(node, For):
            # init carries its own `;`, step has none before `)`
            header = (
                f"for ({self.emit_statement(node.init)} "
                f"{self.emit_expr(node.condition)}; "
                f"{self.emit_expr_list(node.step)})"
            )
            return f"{header} {self.emit_statement(node.body)}"
        raise TypeError(f"Not a statement node: {node!r}")

    def emit_block(self, node: Block) -> str:
        if not node.statements:
            return "{ }"
        body = "\n".join(self.emit_statement(s) for s in node.statements)
        return "{\n" + textwrap.indent(body, INDENT) + "\n}"

    def emit_expr_list(self, node: ExpressionStatement) -> str:
        return ", ".join(self.emit_expr(e) for e in node.expressions)

    # Expressions

    def emit_expr(self, node: Expression) -> str:
        """Renders an expression with only its own outer parentheses dropped."""
        if isinstance(node, UnaryOp):
            operand = self.emit_operand(node.operand)
            return f"{operand}{node.op.value}" if node.postfix else f"{node.op.value}{operand}"
        if isinstance(node, BinaryOp):
            left = self.emit_operand(node.left)
            right = self.emit_operand(node.right)
            return f"{left} {node.op.value} {right}"
        if isinstance(node, (Number, Variable)):
            return node.token.value
        raise TypeError(f"Not an expression node: {node!r}")

    def emit_operand(self, node: Expression) -> str:
        if isinstance(node, (UnaryOp, BinaryOp)):
            return f"({self.emit_expr(node)})"
        return self.emit_expr(node)


def ends_with_open_if(node: Statement) -> bool:
    """True when a trailing `else` after `node` would attach to an `if` inside it."""
    if isinstance(node, If):
        return True
    if isinstance(node, IfElse):
        return ends_with_open_if(node.else_branch)
    if isinstance(node, (While, For)):
        return ends_with_open_if(node.body)
    return False


def emit_source(statements: list[Statement]) -> str:
    return SourceEmitter().emit_program(statements)


def canonical_tokens(statements: list[Statement]) -> list[Token]:
    """Returns the canonical token sequence of a program."""
    return tokenize(emit_source(statements))


__all__ = ["SourceEmitter", "canonical_tokens", "emit_source", "ends_with_open_if"]
