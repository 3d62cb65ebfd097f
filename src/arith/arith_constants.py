"""
Token vocabulary for the ARITH language.

Exports:
    keyword_tokens: Reserved words, matched only as whole identifiers.
    operator_map: Operator and punctuation spellings, matched longest first.
    assignment_ops, prefix_ops, postfix_ops: Operator groups consumed by the parser.
    statement_starters: Token types that open a keyword statement or a block.
"""

keyword_tokens: dict[str, str] = {
    "print": "PRINT",
    "if": "IF",
    "else": "ELSE",
    "while": "WHILE",
    "for": "FOR",
}

operator_map: dict[str, str] = {
    # Assignment
    "=": "ASSIGNMENT",
    "+=": "ASSIGNMENT_ADD",
    "-=": "ASSIGNMENT_SUB",
    "/=": "ASSIGNMENT_DIV",
    "*=": "ASSIGNMENT_MUL",
    "&=": "ASSIGNMENT_AND",
    "^=": "ASSIGNMENT_XOR",
    "|=": "ASSIGNMENT_OR",
    # Logical
    "||": "LOR",
    "&&": "LAND",
    "!": "NOT",
    # Bitwise
    "|": "OR",
    "^": "XOR",
    "&": "AND",
    # Comparison
    "==": "EQUAL",
    "!=": "NEQUAL",
    "<": "LESS",
    "<=": "LESS_EQUAL",
    ">": "GREATER",
    ">=": "GREATER_EQUAL",
    # Arithmetic
    "+": "ADD",
    "-": "SUB",
    "*": "MUL",
    "/": "DIV",
    "++": "INC",
    "--": "DEC",
    # Punctuation
    "(": "LPAR",
    ")": "RPAR",
    "{": "LBRACE",
    "}": "RBRACE",
    ";": "SEMICOLON",
    ",": "COMMA",
}

assignment_ops: tuple[str, ...] = (
    "ASSIGNMENT",
    "ASSIGNMENT_ADD",
    "ASSIGNMENT_SUB",
    "ASSIGNMENT_DIV",
    "ASSIGNMENT_MUL",
    "ASSIGNMENT_AND",
    "ASSIGNMENT_XOR",
    "ASSIGNMENT_OR",
)

prefix_ops: tuple[str, ...] = ("NOT", "SUB")
postfix_ops: tuple[str, ...] = ("INC", "DEC")

statement_starters: tuple[str, ...] = ("PRINT", "IF", "WHILE", "FOR", "LBRACE")

__all__ = [
    "assignment_ops",
    "keyword_tokens",
    "operator_map",
    "postfix_ops",
    "prefix_ops",
    "statement_starters",
]
