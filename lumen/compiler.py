"""
Compilation driver: source text in, JavaScript text out.
"""

import logging
from typing import List, Optional

from .ast_nodes import Sequence
from .emitter import emit_program
from .lexer import Lexer
from .parser import Parser
from .token import Token

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "out.js"


def tokenize(source_code: str, filename: Optional[str] = None) -> List[Token]:
    """Lex source_code completely; the last token is EOF."""
    tokens = Lexer(source_code, filename).tokenize()
    logger.debug("lexed %d tokens from %s", len(tokens), filename or "<string>")
    return tokens


def parse(source_code: str, filename: Optional[str] = None) -> Sequence:
    """Parse source_code into a top-level Sequence."""
    program = Parser(Lexer(source_code, filename)).parse_top_level()
    logger.debug("parsed %d top-level expressions from %s",
                 len(program.exprs), filename or "<string>")
    return program


def compile_source(source_code: str, filename: Optional[str] = None) -> str:
    """
    Compile Lumen source to JavaScript.

    Raises LexerError, ParseError or EmitError on the first failure.
    """
    return emit_program(parse(source_code, filename))


def compile_file(path: str, output_path: Optional[str] = DEFAULT_OUTPUT) -> str:
    """
    Compile the file at path and write the JavaScript to output_path.

    Pass output_path=None to skip writing. Returns the generated text.
    """
    with open(path, "r", encoding="utf-8") as f:
        source_code = f.read()

    javascript = compile_source(source_code, path)

    if output_path is not None:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(javascript)
        logger.debug("wrote %d characters to %s", len(javascript), output_path)

    return javascript
