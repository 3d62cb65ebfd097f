"""
Defines the abstract syntax tree (AST) node families for the ARITH language.

Expression nodes:
    Number:    numeric literal, wraps its NUMBER token.
    Variable:  identifier operand, wraps its ID token.
    UnaryOp:   prefix `!` / `-` or postfix `++` / `--` applied to one operand.
    BinaryOp:  arithmetic, relational, equality, bitwise, logical and assignment operators.

Statement nodes:
    Print, If, IfElse, While, For, Block, ExpressionStatement, Empty.

All nodes are frozen dataclasses; child sequences are tuples. A node is created once by
the parser, owned by exactly one parent, and never mutated afterwards. `If` has no else
field at all; an `if` with an `else` is an `IfElse`.

Each node converts to a JSON-ready `NodeDict` via `to_dict()`, which is what the CLI
prints and what tests compare against.

Example:
    node = BinaryOp(Token("ADD", "+", 1, 3), Number(Token("NUMBER", "1", 1, 1)), ...)
"""

from dataclasses import dataclass
from typing import Any, TypedDict, Union

from arith.arith_constants import postfix_ops
from arith.arith_lexer import Token


class NodeDict(TypedDict, total=False):
    """
    TypedDict representation of an AST node used for serialization.

    Fields:
        kind (str): The node kind (e.g., "number", "binary", "if_else").
        value (str): Raw text of a leaf (number or identifier).
        op (str): Operator spelling for unary and binary nodes.
        postfix (bool): True for `++`/`--` unary nodes.
        line (int): Line of the leaf token or operator token.
        col (int): Column of the leaf token or operator token.
        operand, left, right, target, condition, then_branch, else_branch,
        body, init, step (NodeDict): Child nodes.
        statements, expressions (list[NodeDict]): Ordered child sequences.
    """

    kind: str
    value: str
    op: str
    postfix: bool
    line: int
    col: int
    operand: "NodeDict"
    left: "NodeDict"
    right: "NodeDict"
    target: "NodeDict"
    condition: "NodeDict"
    then_branch: "NodeDict"
    else_branch: "NodeDict"
    body: "NodeDict"
    init: "NodeDict"
    step: "NodeDict"
    statements: list["NodeDict"]
    expressions: list["NodeDict"]


# Expressions


@dataclass(frozen=True)
class Number:
    token: Token

    @property
    def value(self) -> str:
        return self.token.value

    @property
    def line(self) -> int:
        return self.token.line

    def to_dict(self) -> NodeDict:
        return {
            "kind": "number",
            "value": self.token.value,
            "line": self.token.line,
            "col": self.token.col,
        }


@dataclass(frozen=True)
class Variable:
    token: Token

    @property
    def name(self) -> str:
        return self.token.value

    @property
    def line(self) -> int:
        return self.token.line

    def to_dict(self) -> NodeDict:
        return {
            "kind": "variable",
            "value": self.token.value,
            "line": self.token.line,
            "col": self.token.col,
        }


@dataclass(frozen=True)
class UnaryOp:
    """One operator token applied to one operand; `postfix` tells `x++` from `-x`."""

    op: Token
    operand: "Expression"

    @property
    def postfix(self) -> bool:
        return self.op.type in postfix_ops

    @property
    def line(self) -> int:
        return self.op.line

    def to_dict(self) -> NodeDict:
        return {
            "kind": "unary",
            "op": self.op.value,
            "postfix": self.postfix,
            "line": self.op.line,
            "col": self.op.col,
            "operand": self.operand.to_dict(),
        }


@dataclass(frozen=True)
class BinaryOp:
    """Operator token with two operands. Assignments are binary nodes too."""

    op: Token
    left: "Expression"
    right: "Expression"

    @property
    def line(self) -> int:
        return self.op.line

    def to_dict(self) -> NodeDict:
        return {
            "kind": "binary",
            "op": self.op.value,
            "line": self.op.line,
            "col": self.op.col,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }


Expression = Union[Number, Variable, UnaryOp, BinaryOp]


# Statements


@dataclass(frozen=True)
class Print:
    target: Variable

    def to_dict(self) -> NodeDict:
        return {"kind": "print", "target": self.target.to_dict()}


@dataclass(frozen=True)
class If:
    condition: Expression
    then_branch: "Statement"

    def to_dict(self) -> NodeDict:
        return {
            "kind": "if",
            "condition": self.condition.to_dict(),
            "then_branch": self.then_branch.to_dict(),
        }


@dataclass(frozen=True)
class IfElse:
    condition: Expression
    then_branch: "Statement"
    else_branch: "Statement"

    def to_dict(self) -> NodeDict:
        return {
            "kind": "if_else",
            "condition": self.condition.to_dict(),
            "then_branch": self.then_branch.to_dict(),
            "else_branch": self.else_branch.to_dict(),
        }


@dataclass(frozen=True)
class While:
    body: "Statement"
    condition: Expression

    def to_dict(self) -> NodeDict:
        return {
            "kind": "while",
            "condition": self.condition.to_dict(),
            "body": self.body.to_dict(),
        }


@dataclass(frozen=True)
class For:
    """C-style loop. `init` is a whole statement, `step` an expression statement."""

    body: "Statement"
    init: "Statement"
    condition: Expression
    step: "ExpressionStatement"

    def to_dict(self) -> NodeDict:
        return {
            "kind": "for",
            "init": self.init.to_dict(),
            "condition": self.condition.to_dict(),
            "step": self.step.to_dict(),
            "body": self.body.to_dict(),
        }


@dataclass(frozen=True)
class Block:
    statements: tuple["Statement", ...] = ()

    def to_dict(self) -> NodeDict:
        return {"kind": "block", "statements": [s.to_dict() for s in self.statements]}


@dataclass(frozen=True)
class ExpressionStatement:
    expressions: tuple[Expression, ...]

    def to_dict(self) -> NodeDict:
        return {
            "kind": "expr_stmt",
            "expressions": [e.to_dict() for e in self.expressions],
        }


@dataclass(frozen=True)
class Empty:
    def to_dict(self) -> NodeDict:
        return {"kind": "empty"}


Statement = Union[Print, If, IfElse, While, For, Block, ExpressionStatement, Empty]


def program_to_dict(statements: list[Statement]) -> list[NodeDict]:
    """Serializes a parsed program (ordered top-level statements)."""
    return [stmt.to_dict() for stmt in statements]


def strip_positions(node: Any) -> Any:
    """Drops `line`/`col` from serialized nodes, leaving only the tree's shape."""
    if isinstance(node, list):
        return [strip_positions(n) for n in node]
    if isinstance(node, dict):
        return {k: strip_positions(v) for k, v in node.items() if k not in ("line", "col")}
    return node


__all__ = [
    "BinaryOp",
    "Block",
    "Empty",
    "Expression",
    "ExpressionStatement",
    "For",
    "If",
    "IfElse",
    "NodeDict",
    "Number",
    "Print",
    "Statement",
    "UnaryOp",
    "Variable",
    "While",
    "program_to_dict",
    "strip_positions",
]
