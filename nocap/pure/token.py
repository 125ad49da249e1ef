"""Token kinds for the NoCap language.

Operators and delimiters are spelled out by their literal; keywords are looked up from identifiers, so word
operators (`is`, `aint`, `nah`, `and`, `or`) never reach the lexer as symbols.
"""

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # identifiers + literals
    IDENT = "IDENT"
    INT = "INT"
    FLOAT = "FLOAT"
    STRING = "STRING"

    # operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    ASTERISK = "*"
    SLASH = "/"
    MODULO = "%"

    LT = "<"
    GT = ">"
    LT_EQ = "<="
    GT_EQ = ">="

    # delimiters
    COMMA = ","
    SEMICOLON = ";"
    COLON = ":"

    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"

    # keywords
    EQ = "EQ"
    NOT_EQ = "NOT_EQ"
    BANG = "BANG"
    AND = "AND"
    OR = "OR"
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    NULL = "NULL"
    IF = "IF"
    ELSE_IF = "ELSE_IF"
    ELSE = "ELSE"
    RETURN = "RETURN"
    FOR = "FOR"
    WHILE = "WHILE"
    IN = "IN"
    CONTINUE = "CONTINUE"
    BREAK = "BREAK"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Token:
    type: TokenType
    literal: str


KEYWORDS = {
    "cook": TokenType.FUNCTION,
    "fr": TokenType.LET,
    "noCap": TokenType.TRUE,
    "cap": TokenType.FALSE,
    "ghosted": TokenType.NULL,
    "vibe": TokenType.IF,
    "unless": TokenType.ELSE_IF,
    "nvm": TokenType.ELSE,
    "yeet": TokenType.RETURN,
    "stalk": TokenType.FOR,
    "onRepeat": TokenType.WHILE,
    "in": TokenType.IN,
    "pass": TokenType.CONTINUE,
    "bounce": TokenType.BREAK,
    "is": TokenType.EQ,
    "aint": TokenType.NOT_EQ,
    "nah": TokenType.BANG,
    "and": TokenType.AND,
    "or": TokenType.OR,
}

# single characters that are complete tokens on their own
SYMBOLS = {
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "%": TokenType.MODULO,
    "<": TokenType.LT,
    ">": TokenType.GT,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ":": TokenType.COLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}

# symbols that become a two-character operator when followed by "="
COMPOUND = {
    "<": TokenType.LT_EQ,
    ">": TokenType.GT_EQ,
}


def lookup_ident(ident):
    """Returns the keyword TokenType for ident, or IDENT if ident is not reserved."""
    return KEYWORDS.get(ident, TokenType.IDENT)
