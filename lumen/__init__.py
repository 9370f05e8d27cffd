"""
Lumen Programming Language
A small expression-oriented language that compiles to JavaScript.

Version: 0.1.0
"""

__version__ = "0.1.0"

from .lexer import Lexer
from .parser import Parser
from .emitter import JavaScriptEmitter, emit, emit_program
from .printer import ASTPrinter
from .compiler import compile_file, compile_source, parse, tokenize
from .errors import LumenError, LexerError, ParseError, EmitError, ErrorReporter
from .token_types import TokenType
from .token import Token
from .ast_nodes import *

__all__ = [
    "Lexer",
    "Parser",
    "JavaScriptEmitter",
    "ASTPrinter",
    "LumenError",
    "LexerError",
    "ParseError",
    "EmitError",
    "ErrorReporter",
    "TokenType",
    "Token",
    "emit",
    "emit_program",
    "tokenize",
    "parse",
    "compile_source",
    "compile_file",
]
