"""
JavaScript code generator for Lumen ASTs.

One pass over the tree; every node renders to a JavaScript expression.
Conditionals become ternaries, blocks become comma expressions and only
the value false is falsey.
"""

import json
import math
import struct

from .ast_nodes import (
    ASTNode,
    ASTVisitor,
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
from .errors import EmitError
from .token_types import TokenType


def format_f32(value: float) -> str:
    """Shortest decimal text that reads back as the same 32-bit float."""
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if math.isnan(value):
        return "NaN"
    if value == int(value) and abs(value) < 1e16:
        return str(int(value))

    packed = struct.pack("f", value)
    for digits in range(1, 10):
        text = f"{value:.{digits}g}"
        if struct.pack("f", float(text)) == packed:
            return text
    return repr(value)


class JavaScriptEmitter(ASTVisitor):
    """Renders an AST as JavaScript source text."""

    def emit(self, node: ASTNode) -> str:
        if not isinstance(node, ASTNode):
            raise EmitError(f"Cannot emit {type(node).__name__}")
        return node.accept(self)

    def emit_program(self, program: Sequence) -> str:
        """
        Render a top-level Sequence as one statement per expression.

        Top-level named functions come out as function declarations. A
        statement that would otherwise start with an anonymous or invoked
        function is parenthesized so it reads as an expression.
        """
        if not isinstance(program, Sequence):
            raise EmitError("Program must be a Sequence")
        try:
            return "".join(self.emit_statement(expr) for expr in program.exprs)
        except RecursionError:
            raise EmitError("Expression nested too deeply") from None

    def emit_statement(self, node: ASTNode) -> str:
        text = self.emit(node)
        if isinstance(node, Function) and node.name is not None:
            return f"{text};\n"

        callee = node
        while isinstance(callee, Invocation):
            callee = callee.func
        if isinstance(callee, Function):
            return f"({text});\n"
        return f"{text};\n"

    def emit_list(self, nodes, separator: str = ",") -> str:
        return separator.join(self.emit(node) for node in nodes)

    def visit_integer(self, node: Integer) -> str:
        return str(node.value)

    def visit_float(self, node: Float) -> str:
        return format_f32(node.value)

    def visit_string_literal(self, node: StringLiteral) -> str:
        return json.dumps(node.value, ensure_ascii=False)

    def visit_boolean(self, node: Boolean) -> str:
        return "true" if node.value else "false"

    def visit_name(self, node: Name) -> str:
        return node.name

    def visit_function(self, node: Function) -> str:
        name = ""
        if node.name is not None:
            if not isinstance(node.name, Name):
                raise EmitError("Function name must be a name")
            name = node.name.name
        args = self.emit_list(node.args)
        return f"function {name}({args}) {{ return ({self.emit(node.body)}) }}"

    def visit_invocation(self, node: Invocation) -> str:
        return f"{self.emit(node.func)}({self.emit_list(node.args)})"

    def visit_conditional(self, node: Conditional) -> str:
        else_body = node.else_body if node.else_body is not None else Boolean(False)
        return (f"({self.emit(node.cond)} !== false ? "
                f"{self.emit(node.if_body)} : {self.emit(else_body)})")

    def visit_binary(self, node: Binary) -> str:
        if getattr(node.op, "type", None) != TokenType.OPERATOR:
            raise EmitError("Malformed binary node")
        return f"({self.emit(node.lhs)} {node.op.value} {self.emit(node.rhs)})"

    def visit_sequence(self, node: Sequence) -> str:
        if not node.exprs:
            return "false"
        return f"({self.emit_list(node.exprs, ', ')})"


def emit(node: ASTNode) -> str:
    """Render a single node as a JavaScript expression."""
    try:
        return JavaScriptEmitter().emit(node)
    except RecursionError:
        raise EmitError("Expression nested too deeply") from None


def emit_program(program: Sequence) -> str:
    """Render a parsed program as JavaScript statements."""
    return JavaScriptEmitter().emit_program(program)
