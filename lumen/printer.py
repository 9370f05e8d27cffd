"""
Pretty printer for Lumen ASTs, used for debugging output.
"""

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
from .errors import LumenError


class ASTPrinter(ASTVisitor):
    """Prints an AST as an indented tree, one node per line."""

    def __init__(self, indent_size: int = 2):
        self.indent_size = indent_size
        self.current_indent = 0

    def print(self, node: ASTNode) -> str:
        try:
            return node.accept(self)
        except RecursionError:
            self.current_indent = 0
            raise LumenError("Expression nested too deeply") from None

    def _indent(self) -> str:
        return ' ' * (self.current_indent * self.indent_size)

    def _print_with_indent(self, text: str) -> str:
        return f"{self._indent()}{text}"

    def _print_children(self, label: str, *children) -> str:
        lines = [self._print_with_indent(label)]
        self.current_indent += 1
        for child in children:
            lines.append(child.accept(self))
        self.current_indent -= 1
        return "\n".join(lines)

    def visit_integer(self, node: Integer) -> str:
        return self._print_with_indent(f"Integer {node.value}")

    def visit_float(self, node: Float) -> str:
        return self._print_with_indent(f"Float {node.value}")

    def visit_string_literal(self, node: StringLiteral) -> str:
        return self._print_with_indent(f"String {node.value!r}")

    def visit_boolean(self, node: Boolean) -> str:
        return self._print_with_indent("Boolean true" if node.value else "Boolean false")

    def visit_name(self, node: Name) -> str:
        return self._print_with_indent(f"Name {node.name}")

    def visit_function(self, node: Function) -> str:
        name = node.name.name if node.name is not None else "<anonymous>"
        params = ", ".join(arg.name for arg in node.args)
        return self._print_children(f"Function {name}({params})", node.body)

    def visit_invocation(self, node: Invocation) -> str:
        return self._print_children("Invocation", node.func, *node.args)

    def visit_conditional(self, node: Conditional) -> str:
        children = [node.cond, node.if_body]
        if node.else_body is not None:
            children.append(node.else_body)
        return self._print_children("Conditional", *children)

    def visit_binary(self, node: Binary) -> str:
        return self._print_children(f"Binary {node.op.value}", node.lhs, node.rhs)

    def visit_sequence(self, node: Sequence) -> str:
        return self._print_children("Sequence", *node.exprs)
