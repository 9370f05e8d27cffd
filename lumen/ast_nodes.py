"""
Abstract Syntax Tree (AST) definitions for the Lumen programming language.

Every construct in Lumen is an expression. Nodes are built by the parser,
own their children exclusively and compare by value.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

from .token import Token, to_f32

__all__ = [
    "ASTNode", "ASTVisitor",
    "Integer", "Float", "StringLiteral", "Boolean", "Name",
    "Function", "Invocation", "Conditional", "Binary", "Sequence",
]


class ASTNode(ABC):
    """Base class for all AST nodes."""

    fields: Tuple[str, ...] = ()

    @abstractmethod
    def accept(self, visitor: "ASTVisitor") -> Any:
        """Accept visitor for visitor pattern implementation."""
        pass

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self.fields)

    def __repr__(self):
        values = ", ".join(f"{getattr(self, name)!r}" for name in self.fields)
        return f"{self.__class__.__name__}({values})"


# Leaves

class Integer(ASTNode):
    fields = ("value",)

    def __init__(self, value: int):
        self.value = value

    def accept(self, visitor):
        return visitor.visit_integer(self)


class Float(ASTNode):
    """32-bit float literal; the value is narrowed on construction."""

    fields = ("value",)

    def __init__(self, value: float):
        self.value = to_f32(value)

    def accept(self, visitor):
        return visitor.visit_float(self)


class StringLiteral(ASTNode):
    fields = ("value",)

    def __init__(self, value: str):
        self.value = value

    def accept(self, visitor):
        return visitor.visit_string_literal(self)


class Boolean(ASTNode):
    fields = ("value",)

    def __init__(self, value: bool):
        self.value = value

    def accept(self, visitor):
        return visitor.visit_boolean(self)


class Name(ASTNode):
    fields = ("name",)

    def __init__(self, name: str):
        self.name = name

    def accept(self, visitor):
        return visitor.visit_name(self)


# Composites

class Function(ASTNode):
    """Function declaration; anonymous when name is None."""

    fields = ("name", "args", "body")

    def __init__(self, name: Optional[Name], args: List[Name], body: ASTNode):
        self.name = name
        self.args = list(args)
        self.body = body

    def accept(self, visitor):
        return visitor.visit_function(self)


class Invocation(ASTNode):
    fields = ("func", "args")

    def __init__(self, func: ASTNode, args: List[ASTNode]):
        self.func = func
        self.args = list(args)

    def accept(self, visitor):
        return visitor.visit_invocation(self)


class Conditional(ASTNode):
    """
    if/then/else expression.

    A missing else_body means the expression yields false when the
    condition does not hold.
    """

    fields = ("cond", "if_body", "else_body")

    def __init__(self, cond: ASTNode, if_body: ASTNode,
                 else_body: Optional[ASTNode] = None):
        self.cond = cond
        self.if_body = if_body
        self.else_body = else_body

    def accept(self, visitor):
        return visitor.visit_conditional(self)


class Binary(ASTNode):
    """Binary operation; op is the operator token itself."""

    fields = ("op", "lhs", "rhs")

    def __init__(self, op: Token, lhs: ASTNode, rhs: ASTNode):
        self.op = op
        self.lhs = lhs
        self.rhs = rhs

    def accept(self, visitor):
        return visitor.visit_binary(self)


class Sequence(ASTNode):
    fields = ("exprs",)

    def __init__(self, exprs: List[ASTNode]):
        self.exprs = list(exprs)

    def accept(self, visitor):
        return visitor.visit_sequence(self)


class ASTVisitor(ABC):
    """Base class for AST visitors."""

    @abstractmethod
    def visit_integer(self, node: Integer) -> Any:
        pass

    @abstractmethod
    def visit_float(self, node: Float) -> Any:
        pass

    @abstractmethod
    def visit_string_literal(self, node: StringLiteral) -> Any:
        pass

    @abstractmethod
    def visit_boolean(self, node: Boolean) -> Any:
        pass

    @abstractmethod
    def visit_name(self, node: Name) -> Any:
        pass

    @abstractmethod
    def visit_function(self, node: Function) -> Any:
        pass

    @abstractmethod
    def visit_invocation(self, node: Invocation) -> Any:
        pass

    @abstractmethod
    def visit_conditional(self, node: Conditional) -> Any:
        pass

    @abstractmethod
    def visit_binary(self, node: Binary) -> Any:
        pass

    @abstractmethod
    def visit_sequence(self, node: Sequence) -> Any:
        pass
