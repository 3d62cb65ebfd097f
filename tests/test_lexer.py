import pytest
from hypothesis import given
from hypothesis import strategies as st

from arith.arith_constants import operator_map
from arith.arith_lexer import CharacterStream, Lexer, Token, tokenize


def types_of(source: str) -> list[str]:
    return [tok.type for tok in tokenize(source)]


def test_single_char_tokens() -> None:
    code = "= + - * / ! < > & ^ | ( ) { } ; ,"
    expected = [
        "ASSIGNMENT",
        "ADD",
        "SUB",
        "MUL",
        "DIV",
        "NOT",
        "LESS",
        "GREATER",
        "AND",
        "XOR",
        "OR",
        "LPAR",
        "RPAR",
        "LBRACE",
        "RBRACE",
        "SEMICOLON",
        "COMMA",
    ]
    assert types_of(code) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("+=", "ASSIGNMENT_ADD"),
        ("-=", "ASSIGNMENT_SUB"),
        ("/=", "ASSIGNMENT_DIV"),
        ("*=", "ASSIGNMENT_MUL"),
        ("&=", "ASSIGNMENT_AND"),
        ("^=", "ASSIGNMENT_XOR"),
        ("|=", "ASSIGNMENT_OR"),
        ("||", "LOR"),
        ("&&", "LAND"),
        ("==", "EQUAL"),
        ("!=", "NEQUAL"),
        ("<=", "LESS_EQUAL"),
        (">=", "GREATER_EQUAL"),
        ("++", "INC"),
        ("--", "DEC"),
    ],
)  # type: ignore[misc]
def test_compound_operators(source: str, expected: str) -> None:
    assert types_of(source) == [expected]


def test_longest_match_splits_runs() -> None:
    # `+++` is `++` followed by `+`
    assert types_of("x+++y") == ["ID", "INC", "ADD", "ID"]


@pytest.mark.parametrize("word", ["print", "if", "else", "while", "for"])  # type: ignore[misc]
def test_keywords(word: str) -> None:
    tok = tokenize(word)[0]
    assert tok.type == word.upper()
    assert tok.value == word


def test_keywords_are_case_sensitive() -> None:
    assert types_of("Print WHILE") == ["ID", "ID"]


def test_keyword_prefix_is_identifier() -> None:
    tok = tokenize("printer")[0]
    assert tok.type == "ID"
    assert tok.value == "printer"


def test_number_token() -> None:
    tok = tokenize("123")[0]
    assert tok.type == "NUMBER"
    assert tok.value == "123"


def test_fraction_is_number() -> None:
    tok = tokenize("3.25")[0]
    assert tok.type == "NUMBER"
    assert tok.value == "3.25"


def test_double_fraction_raises() -> None:
    with pytest.raises(SyntaxError, match="Invalid number format"):
        tokenize("1.2.3")


def test_trailing_dot_is_error_token() -> None:
    tokens = tokenize("1.")
    assert tokens[0] == Token("NUMBER", "1", 1, 1)
    assert tokens[1].type == "ERROR"


def test_identifier_with_underscore_and_digits() -> None:
    tok = tokenize("_tmp42")[0]
    assert tok.type == "ID"
    assert tok.value == "_tmp42"


def test_line_and_column_tracking() -> None:
    tokens = tokenize("x = 1;\n  y = 2;")
    y = tokens[4]
    assert y.value == "y"
    assert y.line == 2
    assert y.col == 3


def test_line_comments_are_skipped() -> None:
    tokens = tokenize("// leading\nx; // trailing\n")
    assert [t.type for t in tokens] == ["ID", "SEMICOLON"]
    assert tokens[0].line == 2


def test_block_comments_are_skipped() -> None:
    tokens = tokenize("a /* one\ntwo */ b")
    assert [t.value for t in tokens] == ["a", "b"]
    assert tokens[1].line == 2


def test_unterminated_block_comment_raises() -> None:
    with pytest.raises(SyntaxError, match="Unterminated block comment"):
        tokenize("a /* never closed")


def test_division_is_not_a_comment() -> None:
    assert types_of("a / b /= c") == ["ID", "DIV", "ID", "ASSIGNMENT_DIV", "ID"]


def test_invalid_token_returns_error_token() -> None:
    tokens = tokenize("@")
    assert tokens == [Token("ERROR", "@", 1, 1)]


@pytest.mark.parametrize("source", ["\u00e9 = 1;", "\u00b2", "x\u00b2", "\u0663"])  # type: ignore[misc]
def test_non_ascii_letters_and_digits_are_error_tokens(source: str) -> None:
    tokens = tokenize(source)
    assert "ERROR" in [t.type for t in tokens]
    assert all(t.type not in ("NUMBER", "ID") or t.value.isascii() for t in tokens)


def test_superscript_digit_is_not_a_number() -> None:
    tokens = tokenize("x = \u00b2;")
    assert tokens[2] == Token("ERROR", "\u00b2", 1, 5)


@pytest.mark.parametrize("spelling", sorted(operator_map))  # type: ignore[misc]
def test_every_operator_spelling_is_one_token(spelling: str) -> None:
    assert types_of(spelling) == [operator_map[spelling]]


def test_token_eof() -> None:
    lexer = Lexer(CharacterStream(""))
    tok = lexer.next_token()
    assert tok.type == "EOF"


def test_eof_after_trailing_whitespace() -> None:
    lexer = Lexer(CharacterStream("x   \n"))
    assert lexer.next_token().type == "ID"
    assert lexer.next_token().type == "EOF"


def test_tokenize_omits_eof() -> None:
    assert all(t.type != "EOF" for t in tokenize("a = 1;"))


def test_character_stream_next_past_end() -> None:
    stream = CharacterStream("")
    with pytest.raises(EOFError):
        stream.next()


def test_character_stream_peek_out_of_bounds() -> None:
    stream = CharacterStream("ab")
    assert stream.peek(5) == ""
    assert stream.peek(-1) == ""
    assert stream.peek() == "a"


def test_token_repr_and_hash() -> None:
    tok = Token("ID", "x", 1, 1)
    assert repr(tok) == "Token(ID, x)"
    assert hash(tok) == hash(Token("ID", "x", 1, 1))
    assert tok != Token("ID", "x", 1, 2)
    assert tok != "x"


@given(st.from_regex(r"[A-Za-z_][A-Za-z0-9_]{0,10}", fullmatch=True))  # type: ignore[misc]
def test_identifiers_roundtrip(name: str) -> None:
    tokens = tokenize(name)
    assert len(tokens) == 1
    assert tokens[0].value == name
    assert tokens[0].type in ("ID", "PRINT", "IF", "ELSE", "WHILE", "FOR")


@given(st.integers(min_value=0, max_value=10**12))  # type: ignore[misc]
def test_integers_lex_as_single_number(n: int) -> None:
    assert tokenize(str(n)) == [Token("NUMBER", str(n), 1, 1)]
