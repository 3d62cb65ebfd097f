import dataclasses

import hypothesis.strategies as st
import pytest
from hypothesis import given

from arith.arith_ast import (
    BinaryOp,
    Block,
    Empty,
    ExpressionStatement,
    For,
    If,
    IfElse,
    Number,
    Print,
    UnaryOp,
    Variable,
    While,
    program_to_dict,
    strip_positions,
)
from arith.arith_lexer import Token


def num(text: str, line: int = 1, col: int = 1) -> Number:
    return Number(Token("NUMBER", text, line, col))


def var(name: str, line: int = 1, col: int = 1) -> Variable:
    return Variable(Token("ID", name, line, col))


def test_number_properties() -> None:
    n = num("42", line=3, col=7)
    assert n.value == "42"
    assert n.line == 3
    assert n.to_dict() == {"kind": "number", "value": "42", "line": 3, "col": 7}


def test_variable_properties() -> None:
    v = var("x", line=2)
    assert v.name == "x"
    assert v.line == 2
    assert v.to_dict()["kind"] == "variable"


def test_unary_postfix_flag() -> None:
    inc = UnaryOp(Token("INC", "++", 1, 2), var("x"))
    neg = UnaryOp(Token("SUB", "-", 1, 1), var("x"))
    assert inc.postfix is True
    assert neg.postfix is False
    assert inc.to_dict()["op"] == "++"
    assert neg.to_dict()["operand"]["value"] == "x"


def test_binary_to_dict() -> None:
    node = BinaryOp(Token("ADD", "+", 1, 3), num("1"), num("2", col=5))
    d = node.to_dict()
    assert d["kind"] == "binary"
    assert d["op"] == "+"
    assert d["line"] == 1
    assert d["col"] == 3
    assert d["left"]["value"] == "1"
    assert d["right"]["col"] == 5


def test_nodes_are_frozen() -> None:
    node = Print(var("x"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.target = var("y")  # type: ignore[misc]


def test_structural_equality() -> None:
    a = BinaryOp(Token("MUL", "*", 1, 3), var("a"), num("2"))
    b = BinaryOp(Token("MUL", "*", 1, 3), var("a"), num("2"))
    assert a == b
    assert a != BinaryOp(Token("MUL", "*", 1, 3), var("b"), num("2"))


def test_if_has_no_else_field() -> None:
    fields = {f.name for f in dataclasses.fields(If)}
    assert fields == {"condition", "then_branch"}
    assert "else_branch" not in If(var("c"), Empty()).to_dict()


def test_statement_to_dict_kinds() -> None:
    stmts = [
        Print(var("x")),
        If(var("c"), Empty()),
        IfElse(var("c"), Empty(), Empty()),
        While(Empty(), var("c")),
        For(Empty(), Empty(), var("c"), ExpressionStatement((var("i"),))),
        Block(),
        ExpressionStatement((num("1"), num("2"))),
        Empty(),
    ]
    kinds = [d["kind"] for d in program_to_dict(stmts)]
    assert kinds == [
        "print",
        "if",
        "if_else",
        "while",
        "for",
        "block",
        "expr_stmt",
        "empty",
    ]


def test_block_defaults_to_empty_tuple() -> None:
    assert Block().statements == ()
    assert Block().to_dict() == {"kind": "block", "statements": []}


def test_for_to_dict_fields() -> None:
    node = For(
        Print(var("i")),
        ExpressionStatement((var("i"),)),
        var("c"),
        ExpressionStatement((var("s"),)),
    )
    d = node.to_dict()
    assert d["init"]["kind"] == "expr_stmt"
    assert d["step"]["expressions"][0]["value"] == "s"
    assert d["body"]["kind"] == "print"


def test_strip_positions_removes_line_and_col() -> None:
    d = program_to_dict([Print(var("x", line=9, col=4))])
    assert strip_positions(d) == [
        {"kind": "print", "target": {"kind": "variable", "value": "x"}}
    ]


@given(st.from_regex(r"[a-z]{1,8}", fullmatch=True), st.integers(1, 500))  # type: ignore[misc]
def test_positions_do_not_affect_shape(name: str, line: int) -> None:
    a = Print(var(name, line=1))
    b = Print(var(name, line=line))
    assert strip_positions(a.to_dict()) == strip_positions(b.to_dict())
