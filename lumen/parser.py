"""
Parser for the Lumen programming language.

Recursive descent for the structural constructs, precedence climbing for
binary operators. The parser pulls tokens from a Lexer and stops at the
first error.
"""

from typing import Callable, List, TypeVar

from .ast_nodes import (
    ASTNode,
    Binary,
    Boolean,
    Conditional,
    Float,
    Function,
    Integer,
    Invocation,
    Name,
    Sequence,
    StringLiteral,
)
from .errors import ParseError
from .lexer import Lexer
from .token import Token
from .token_types import TokenType

T = TypeVar("T")

# Higher binds tighter
PRECEDENCE = {
    "=": 1,
    "||": 2,
    "&&": 3,
    "<": 4,
    "<=": 4,
    ">": 4,
    ">=": 4,
    "==": 4,
    "!=": 4,
    "+": 5,
    "-": 5,
    "*": 6,
    "/": 6,
    "%": 6,
}

SEMICOLON = Token.delimiter(";")
COMMA = Token.delimiter(",")
LEFT_PAREN = Token.delimiter("(")
RIGHT_PAREN = Token.delimiter(")")
LEFT_BRACE = Token.delimiter("{")
RIGHT_BRACE = Token.delimiter("}")

IF = Token.keyword("if")
THEN = Token.keyword("then")
ELSE = Token.keyword("else")
FN = Token.keyword("fn")
TRUE = Token.keyword("true")
FALSE = Token.keyword("false")


class Parser:
    """
    Recursive descent parser for Lumen.

    The only state is the lexer's cursor and its one-token peek buffer.
    """

    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.filename = lexer.filename

    # --- token helpers ---

    def error(self, message: str) -> ParseError:
        return ParseError(message, self.lexer.line, self.lexer.column, self.filename)

    def peek(self) -> Token:
        return self.lexer.peek()

    def advance(self) -> Token:
        return self.lexer.get_token()

    def check(self, token: Token) -> bool:
        """Check if the next token equals token without consuming it."""
        return self.peek() == token

    def consume(self, expected: Token) -> Token:
        """Consume the next token, which must equal expected."""
        actual = self.advance()
        if actual != expected:
            raise self.error(f"Expected {expected.describe()} but found {actual.describe()}")
        return actual

    # --- entry point ---

    def parse_top_level(self) -> Sequence:
        """
        Parse a whole program: expressions separated by ';' up to end of input.

        The result is always a Sequence, even for zero or one expression.
        """
        exprs = []
        try:
            while self.peek().type != TokenType.EOF:
                exprs.append(self.parse_expression())
                if self.peek().type == TokenType.EOF:
                    break
                self.consume(SEMICOLON)
        except RecursionError:
            raise self.error("Expression nested too deeply") from None
        return Sequence(exprs)

    # --- expressions ---

    def parse_expression(self) -> ASTNode:
        lhs = self.parse_atom()
        return self.maybe_invocation(self.parse_binary(lhs, 0))

    def parse_atom(self) -> ASTNode:
        return self.maybe_invocation(self.parse_atom_helper())

    def maybe_invocation(self, node: ASTNode) -> ASTNode:
        """Treat node as a callee while the next token is '('."""
        while self.check(LEFT_PAREN):
            args = self.parse_delimited(LEFT_PAREN, COMMA, RIGHT_PAREN, self.parse_expression)
            node = Invocation(node, args)
        return node

    def precedence(self, token: Token) -> int:
        try:
            return PRECEDENCE[token.value]
        except KeyError:
            raise self.error(f"Unknown operator '{token.value}'") from None

    def parse_binary(self, lhs: ASTNode, min_precedence: int) -> ASTNode:
        """
        Precedence climbing.

        Operators binding no tighter than min_precedence are left for the
        caller, which makes equal-precedence chains left-associative.
        """
        while True:
            token = self.peek()
            if token.type != TokenType.OPERATOR:
                return lhs

            precedence = self.precedence(token)
            if precedence <= min_precedence:
                return lhs

            op = self.advance()
            rhs = self.parse_binary(self.parse_atom(), precedence)
            lhs = Binary(op, lhs, rhs)

    def parse_atom_helper(self) -> ASTNode:
        token = self.peek()

        if token == LEFT_PAREN:
            return self.parse_parenthesized()
        if token == LEFT_BRACE:
            return self.parse_sequence()

        if token.type == TokenType.KEYWORD:
            if token == IF:
                return self.parse_conditional()
            if token == FN:
                return self.parse_function()
            if token == TRUE or token == FALSE:
                self.advance()
                return Boolean(token == TRUE)
            raise self.error(f"Unexpected keyword '{token.value}'")

        token = self.advance()
        if token.type == TokenType.VARIABLE:
            return Name(token.value)
        if token.type == TokenType.INTEGRAL:
            return Integer(token.value)
        if token.type == TokenType.FLOATING_POINT:
            return Float(token.value)
        if token.type == TokenType.STRING_LITERAL:
            return StringLiteral(token.value)

        raise self.error(f"Unexpected {token.describe()}")

    def parse_parenthesized(self) -> ASTNode:
        self.consume(LEFT_PAREN)
        expr = self.parse_expression()
        self.consume(RIGHT_PAREN)
        return expr

    # --- structural constructs ---

    def parse_delimited(self, open_token: Token, separator: Token, close_token: Token,
                        element_parser: Callable[[], T]) -> List[T]:
        """
        Parse open, elements separated by separator, then close.

        A separator directly before close is rejected because the element
        parser is asked to start on close.
        """
        self.consume(open_token)
        elements = []
        first = True

        while not self.check(close_token):
            if first:
                first = False
            else:
                self.consume(separator)
            elements.append(element_parser())

        self.consume(close_token)
        return elements

    def parse_sequence(self) -> ASTNode:
        """
        Parse a brace block.

        Empty blocks are false, a single expression stands for itself and
        anything longer becomes a Sequence.
        """
        exprs = self.parse_delimited(LEFT_BRACE, SEMICOLON, RIGHT_BRACE, self.parse_expression)
        if not exprs:
            return Boolean(False)
        if len(exprs) == 1:
            return exprs[0]
        return Sequence(exprs)

    def parse_conditional(self) -> Conditional:
        self.consume(IF)
        cond = self.parse_expression()
        self.consume(THEN)
        if_body = self.parse_expression()

        else_body = None
        if self.check(ELSE):
            self.advance()
            else_body = self.parse_expression()

        return Conditional(cond, if_body, else_body)

    def parse_function(self) -> Function:
        self.consume(FN)

        name = None
        if self.peek().type == TokenType.VARIABLE:
            name = Name(self.advance().value)

        args = self.parse_delimited(LEFT_PAREN, COMMA, RIGHT_PAREN, self.parse_argument_name)
        body = self.parse_sequence()
        return Function(name, args, body)

    def parse_argument_name(self) -> Name:
        token = self.advance()
        if token.type != TokenType.VARIABLE:
            raise self.error(f"Expected argument name but found {token.describe()}")
        return Name(token.value)
