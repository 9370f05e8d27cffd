"""
Lexical analyzer for the Lumen programming language.

Tokens are produced on demand with a single token of lookahead. Line and
column are tracked for diagnostics: lines start at 1, columns at 0.
"""

from typing import Callable, List, Optional

from .errors import LexerError
from .token import I32_MAX, I32_MIN, Token, to_f32
from .token_types import (
    DELIMITERS,
    DIGITS,
    IDENTIFIER_SPECIAL,
    IDENTIFIER_START,
    KEYWORDS,
    OPERATOR_CHARS,
    WHITESPACE,
    TokenType,
)

_ASCII_LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


class Lexer:
    """
    Pull-based lexer over a fully materialized source string.

    get_token() consumes the buffered token first if there is one; peek()
    buffers the next token without consuming it, so repeated peeks return
    the same token and leave the cursor where the first peek put it.
    eof() stays false while a non-EOF token sits in the buffer.
    """

    def __init__(self, source_code: str, filename: Optional[str] = None):
        self.source = source_code
        self.filename = filename
        self.position = 0
        self.line = 1
        self.column = 0
        self.keywords = KEYWORDS
        self._peeked: Optional[Token] = None

    def eof(self) -> bool:
        """True once the cursor is at or past the end and nothing is buffered."""
        if self._peeked is not None and self._peeked.type != TokenType.EOF:
            return False
        return self.position >= len(self.source)

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        if self._peeked is None:
            self._peeked = self.read_token()
        return self._peeked

    def get_token(self) -> Token:
        """Return the next token and advance past it."""
        if self._peeked is not None:
            token = self._peeked
            self._peeked = None
            return token
        return self.read_token()

    def tokenize(self) -> List[Token]:
        """Drain the stream into a list terminated by a single EOF token."""
        tokens = []
        while True:
            token = self.get_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def error(self, message: str) -> LexerError:
        return LexerError(message, self.line, self.column, self.filename)

    # --- character level ---

    def current_char(self) -> Optional[str]:
        """Get current character or None if at end."""
        if self.position >= len(self.source):
            return None
        return self.source[self.position]

    def advance(self) -> Optional[str]:
        """Advance position and return the character passed over."""
        if self.position >= len(self.source):
            return None

        char = self.source[self.position]
        self.position += 1

        if char == '\n':
            self.line += 1
            self.column = 0
        else:
            self.column += 1

        return char

    def read_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume characters while predicate holds and return them."""
        start = self.position
        while self.current_char() is not None and predicate(self.current_char()):
            self.advance()
        return self.source[start:self.position]

    def skip_whitespace(self):
        self.read_while(lambda char: char in WHITESPACE)

    def skip_comment(self):
        """Discard a '#' comment up to and including the newline."""
        self.read_while(lambda char: char != '\n')
        self.advance()

    # --- token level ---

    def read_token(self) -> Token:
        """Read one token from the cursor, ignoring the peek buffer."""
        while True:
            self.skip_whitespace()
            char = self.current_char()
            if char != '#':
                break
            self.skip_comment()

        line, column = self.line, self.column

        if char is None:
            return Token(TokenType.EOF, None, line, column)

        if char == '"':
            token = self.read_string()
        elif char in DIGITS:
            token = self.read_number()
        elif char in IDENTIFIER_START:
            token = self.read_identifier()
        elif char in DELIMITERS:
            self.advance()
            token = Token.delimiter(char)
        elif char in OPERATOR_CHARS:
            token = Token.operator(self.read_while(lambda c: c in OPERATOR_CHARS))
        else:
            raise self.error(f"Error reading character '{char}'")

        token.line = line
        token.column = column
        return token

    def read_string(self) -> Token:
        """
        Read a double-quoted string literal.

        A backslash makes the next character literal and is itself dropped;
        no other escape processing happens, so "\\n" decodes to "n".
        """
        value = ""
        self.advance()  # opening quote

        while True:
            char = self.advance()
            if char is None:
                raise self.error("Unterminated string literal")
            if char == '"':
                break
            if char == '\\':
                char = self.advance()
                if char is None:
                    raise self.error("Unterminated string literal")
            value += char

        return Token(TokenType.STRING_LITERAL, value)

    def read_number(self) -> Token:
        """Read digits with at most one '.'; a second '.' ends the number."""
        digits = ""
        dotted = False

        while self.current_char() is not None:
            char = self.current_char()
            if char == '.':
                if dotted:
                    break
                dotted = True
            elif char not in DIGITS:
                break
            digits += char
            self.advance()

        if dotted:
            try:
                return Token(TokenType.FLOATING_POINT, to_f32(float(digits)))
            except (OverflowError, ValueError) as e:
                raise self.error(f"Error parsing float: {e}") from e

        value = int(digits)
        if not I32_MIN <= value <= I32_MAX:
            raise self.error(
                "Error parsing integer: number too large to fit in target type"
            )
        return Token(TokenType.INTEGRAL, value)

    def read_identifier(self) -> Token:
        """Read a name; reserved words come back as keywords."""
        name = self.read_while(
            lambda c: c in _ASCII_LETTERS or c in DIGITS or c in IDENTIFIER_SPECIAL
        )
        if name in self.keywords:
            return Token.keyword(name)
        return Token.variable(name)
