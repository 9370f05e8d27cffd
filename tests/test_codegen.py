#!/usr/bin/env python3
"""
Tests for JavaScript emission, the compile driver and the command line.
"""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

import lumen
import lumen_cli
from lumen.ast_nodes import (
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
from lumen.emitter import emit, emit_program, format_f32
from lumen.errors import EmitError, ParseError
from lumen.printer import ASTPrinter
from lumen.token import Token


class TestEmitter(unittest.TestCase):
    """Test cases for the JavaScript emitter."""

    def test_literals(self):
        self.assertEqual(emit(Integer(42)), "42")
        self.assertEqual(emit(Integer(-7)), "-7")
        self.assertEqual(emit(Boolean(True)), "true")
        self.assertEqual(emit(Boolean(False)), "false")
        self.assertEqual(emit(Name("empty?")), "empty?")

    def test_floats(self):
        self.assertEqual(emit(Float(3.1)), "3.1")
        self.assertEqual(emit(Float(2.0)), "2")
        self.assertEqual(emit(Float(0.5)), "0.5")
        self.assertEqual(emit(Float(float("inf"))), "Infinity")

    def test_format_f32_round_trips(self):
        for text in ["0.1", "1.25", "123.456", "3.14159"]:
            self.assertEqual(float(format_f32(Float(float(text)).value)), float(text))

    def test_string_literals_are_escaped(self):
        self.assertEqual(emit(StringLiteral("text")), '"text"')
        self.assertEqual(emit(StringLiteral('say "hi"')), '"say \\"hi\\""')
        self.assertEqual(emit(StringLiteral("a\\b")), '"a\\\\b"')

    def test_function(self):
        node = Function(Name("add"), [Name("a"), Name("b")],
                        Binary(Token.operator("+"), Name("a"), Name("b")))

        self.assertEqual(emit(node), "function add(a,b) { return ((a + b)) }")

    def test_anonymous_function(self):
        node = Function(None, [Name("x")], Name("x"))

        self.assertEqual(emit(node), "function (x) { return (x) }")

    def test_function_name_must_be_a_name(self):
        with self.assertRaises(EmitError):
            emit(Function(Integer(1), [], Name("x")))

    def test_invocation(self):
        node = Invocation(Name("f"), [Integer(1), Name("b")])

        self.assertEqual(emit(node), "f(1,b)")
        self.assertEqual(emit(Invocation(node, [])), "f(1,b)()")

    def test_conditional(self):
        self.assertEqual(emit(Conditional(Name("x"), Name("y"), Name("z"))),
                         "(x !== false ? y : z)")

    def test_conditional_without_else_yields_false(self):
        self.assertEqual(emit(Conditional(Name("x"), Name("y"))),
                         "(x !== false ? y : false)")

    def test_binary(self):
        node = Binary(Token.operator("*"),
                      Binary(Token.operator("+"), Name("b"), Name("c")), Name("d"))

        self.assertEqual(emit(node), "((b + c) * d)")

    def test_malformed_binary(self):
        with self.assertRaises(EmitError) as cm:
            emit(Binary(Token.delimiter(";"), Name("a"), Name("b")))
        self.assertIn("Malformed binary node", cm.exception.message)

    def test_sequence(self):
        self.assertEqual(emit(Sequence([Name("a"), Name("b")])), "(a, b)")
        self.assertEqual(emit(Sequence([])), "false")

    def test_not_a_node(self):
        with self.assertRaises(EmitError):
            emit("a")

    def test_program(self):
        program = Sequence([Name("a"), Invocation(Name("f"), [Name("a")])])

        self.assertEqual(emit_program(program), "a;\nf(a);\n")
        self.assertEqual(emit_program(Sequence([])), "")

    def test_program_must_be_sequence(self):
        with self.assertRaises(EmitError):
            emit_program(Name("a"))

    def test_program_named_function_is_a_declaration(self):
        self.assertEqual(emit_program(lumen.parse("fn f(x) { x }")),
                         "function f(x) { return (x) };\n")

    def test_program_anonymous_function_is_parenthesized(self):
        self.assertEqual(emit_program(lumen.parse("fn (x) { x }")),
                         "(function (x) { return (x) });\n")

    def test_program_invoked_function_is_parenthesized(self):
        self.assertEqual(emit_program(lumen.parse("fn (x) { x }(1)")),
                         "(function (x) { return (x) }(1));\n")
        self.assertEqual(emit_program(lumen.parse("fn f(x) { x + 1 }(1)(2)")),
                         "(function f(x) { return ((x + 1)) }(1)(2));\n")

    def test_function_as_operand_is_not_wrapped(self):
        self.assertEqual(emit_program(lumen.parse("g = fn (x) { x }")),
                         "(g = function (x) { return (x) });\n")


class TestPrinter(unittest.TestCase):
    """Test cases for the AST printer."""

    def test_print_tree(self):
        program = lumen.parse("f(1); if a then b")

        self.assertEqual(ASTPrinter().print(program), "\n".join([
            "Sequence",
            "  Invocation",
            "    Name f",
            "    Integer 1",
            "  Conditional",
            "    Name a",
            "    Name b",
        ]))

    def test_print_function(self):
        program = lumen.parse("fn (x, y) { x + y }")

        self.assertEqual(ASTPrinter().print(program), "\n".join([
            "Sequence",
            "  Function <anonymous>(x, y)",
            "    Binary +",
            "      Name x",
            "      Name y",
        ]))


class TestCompiler(unittest.TestCase):
    """Test cases for the compile driver."""

    def test_compile_source(self):
        source = """
        # pick the second argument when the first holds
        fn choose(a, b) {
            if a then b else a;
            b
        };
        result = choose(true, 2.5)
        """

        self.assertEqual(lumen.compile_source(source), (
            "function choose(a,b) { return (((a !== false ? b : a), b)) };\n"
            "(result = choose(true,2.5));\n"
        ))

    def test_compile_precedence(self):
        self.assertEqual(lumen.compile_source("a = (b + c) * d"),
                         "(a = ((b + c) * d));\n")

    def test_compile_errors_propagate(self):
        with self.assertRaises(ParseError):
            lumen.compile_source("if x")

    def test_long_operator_chain(self):
        source = " + ".join(["1"] * 3000)

        self.assertEqual(len(lumen.parse(source).exprs), 1)
        try:
            javascript = lumen.compile_source(source)
        except lumen.LumenError as e:
            self.assertIn("nested too deeply", e.message)
        else:
            self.assertTrue(javascript.endswith(" + 1);\n"))
            self.assertEqual(javascript.count("1"), 3000)

    def test_deep_tree_emit_is_an_emit_error(self):
        node = Integer(1)
        for _ in range(5000):
            node = Binary(Token.operator("+"), node, Integer(1))

        with self.assertRaises(EmitError):
            emit(node)
        with self.assertRaises(EmitError):
            emit_program(Sequence([node]))

    def test_tokenize(self):
        tokens = lumen.tokenize("f(1)")

        self.assertEqual(len(tokens), 5)
        self.assertEqual(tokens[-1], Token.eof())

    def test_compile_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            source_path = os.path.join(tmp, "main.lm")
            output_path = os.path.join(tmp, "main.js")
            with open(source_path, "w", encoding="utf-8") as f:
                f.write('print("hi")')

            javascript = lumen.compile_file(source_path, output_path)

            self.assertEqual(javascript, 'print("hi");\n')
            with open(output_path, encoding="utf-8") as f:
                self.assertEqual(f.read(), javascript)

    def test_compile_missing_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                lumen.compile_file(os.path.join(tmp, "missing.lm"), None)


class TestCommandLine(unittest.TestCase):
    """Test cases for the lumen command."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def write_source(self, name: str, source: str) -> str:
        path = os.path.join(self.tmp, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(source)
        return path

    def run_cli(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = lumen_cli.main(list(argv))
        return status, out.getvalue(), err.getvalue()

    def test_build(self):
        source_path = self.write_source("ok.lm", "x = 1 + 2 * 3")
        output_path = os.path.join(self.tmp, "ok.js")

        status, _, err = self.run_cli("build", source_path, "-o", output_path)

        self.assertEqual(status, 0)
        self.assertEqual(err, "")
        with open(output_path, encoding="utf-8") as f:
            self.assertEqual(f.read(), "(x = (1 + (2 * 3)));\n")

    def test_build_debug_output(self):
        source_path = self.write_source("ok.lm", "f(1)")
        output_path = os.path.join(self.tmp, "ok.js")

        status, out, _ = self.run_cli("build", source_path, "-o", output_path, "--debug")

        self.assertEqual(status, 0)
        self.assertIn("Tokens:", out)
        self.assertIn("Invocation", out)

    def test_build_reports_parse_errors(self):
        source_path = self.write_source("bad.lm", "if x")
        output_path = os.path.join(self.tmp, "bad.js")

        status, _, err = self.run_cli("build", source_path, "-o", output_path)

        self.assertEqual(status, 1)
        self.assertIn("ParseError", err)
        self.assertIn("'then'", err)
        self.assertFalse(os.path.exists(output_path))

    def test_build_missing_file(self):
        status, _, err = self.run_cli("build", os.path.join(self.tmp, "nope.lm"))

        self.assertEqual(status, 1)
        self.assertIn("not found", err)

    def test_check(self):
        source_path = self.write_source("ok.lm", "fn f(x) { x }")

        status, out, _ = self.run_cli("check", source_path)

        self.assertEqual(status, 0)
        self.assertIn("Syntax OK", out)

    def test_check_reports_lexer_errors(self):
        source_path = self.write_source("bad.lm", "a; @")

        status, _, err = self.run_cli("check", source_path)

        self.assertEqual(status, 1)
        self.assertIn("LexerError", err)

    def test_ast(self):
        source_path = self.write_source("ok.lm", "a; b")

        status, out, _ = self.run_cli("ast", source_path)

        self.assertEqual(status, 0)
        self.assertEqual(out, "Sequence\n  Name a\n  Name b\n")

    def test_tokens(self):
        source_path = self.write_source("ok.lm", "a")

        status, out, _ = self.run_cli("tokens", source_path)

        self.assertEqual(status, 0)
        self.assertIn("VARIABLE", out)
        self.assertIn("EOF", out)

    def test_command(self):
        status, out, _ = self.run_cli("-c", "f(1, 2)")

        self.assertEqual(status, 0)
        self.assertEqual(out, "f(1,2);\n")

    def test_command_long_chain_exits_cleanly(self):
        source = " + ".join(["1"] * 3000)

        status, out, err = self.run_cli("-c", source)

        if status == 0:
            self.assertEqual(out.count("1"), 3000)
        else:
            self.assertEqual(status, 1)
            self.assertIn("nested too deeply", err)

    def test_command_error(self):
        status, _, err = self.run_cli("-c", "(a")

        self.assertEqual(status, 1)
        self.assertIn("<command>", err)


if __name__ == '__main__':
    unittest.main()
