"""
Token class for representing lexical tokens.
"""

import math
import struct
from typing import Any

from .token_types import TokenType

I32_MIN = -2 ** 31
I32_MAX = 2 ** 31 - 1


def to_f32(value: float) -> float:
    """
    Narrow a Python float to the nearest 32-bit float.

    Raises OverflowError, from struct.pack, when the value is finite but
    outside the 32-bit range.
    """
    if math.isinf(value) or math.isnan(value):
        return value
    return struct.unpack("f", struct.pack("f", value))[0]


class Token:
    """
    A lexical token: a kind plus its payload.

    Two tokens are equal when kind and payload match; the recorded position
    is only used for display.
    """

    def __init__(self, token_type: TokenType, value: Any = None,
                 line: int = 0, column: int = 0):
        self.type = token_type
        self.value = value
        self.line = line
        self.column = column

    @classmethod
    def variable(cls, name: str) -> "Token":
        return cls(TokenType.VARIABLE, name)

    @classmethod
    def operator(cls, symbol: str) -> "Token":
        return cls(TokenType.OPERATOR, symbol)

    @classmethod
    def keyword(cls, word: str) -> "Token":
        return cls(TokenType.KEYWORD, word)

    @classmethod
    def delimiter(cls, char: str) -> "Token":
        return cls(TokenType.DELIMITER, char)

    @classmethod
    def eof(cls) -> "Token":
        return cls(TokenType.EOF)

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return self.type == other.type and self.value == other.value

    def __hash__(self):
        return hash((self.type, self.value))

    def __str__(self):
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"

    def __repr__(self):
        if self.type == TokenType.EOF:
            return "Token(EOF)"
        return f"Token({self.type.name}, {self.value!r})"

    def describe(self) -> str:
        """Human-readable description used in diagnostics."""
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.STRING_LITERAL:
            return f"string {self.value!r}"
        names = {
            TokenType.VARIABLE: "name",
            TokenType.OPERATOR: "operator",
            TokenType.KEYWORD: "keyword",
            TokenType.INTEGRAL: "integer",
            TokenType.FLOATING_POINT: "float",
            TokenType.DELIMITER: "delimiter",
        }
        return f"{names[self.type]} '{self.value}'"
