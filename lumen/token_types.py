"""
Token definitions for the Lumen programming language.
"""

from enum import Enum, auto


class TokenType(Enum):
    VARIABLE = auto()
    OPERATOR = auto()
    KEYWORD = auto()
    STRING_LITERAL = auto()
    INTEGRAL = auto()
    FLOATING_POINT = auto()
    DELIMITER = auto()
    EOF = auto()


# Reserved words; anything else that lexes as an identifier is a variable
KEYWORDS = ("fn", "true", "false", "if", "then", "else")

DELIMITERS = ",;()[]{}"

OPERATOR_CHARS = "=+-*/%&<>!"

DIGITS = "0123456789"

IDENTIFIER_START = "abcdefghijklmnopqrstuvwxyz_"

IDENTIFIER_SPECIAL = "?!-<>=_"

WHITESPACE = " \t\r\n"
