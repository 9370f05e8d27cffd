"""
Error handling for the Lumen compiler.

Every failure raised by the lexer, parser and emitter derives from
LumenError. Compilation is fail-fast: the first error aborts the run.
"""

import sys
from typing import List, Optional


class LumenError(Exception):
    """Base class for all Lumen compiler errors."""

    def __init__(self, message: str, line: Optional[int] = None,
                 column: Optional[int] = None, filename: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.filename = filename

    def __str__(self):
        location = []
        if self.filename:
            location.append(f"File \"{self.filename}\"")
        if self.line is not None:
            location.append(f"line {self.line}")
        if self.column is not None:
            location.append(f"column {self.column}")

        if location:
            return f"{self.__class__.__name__}: {', '.join(location)}\n  {self.message}"
        return f"{self.__class__.__name__}: {self.message}"


class LexerError(LumenError):
    """Error during lexical analysis."""
    pass


class ParseError(LumenError):
    """Error during parsing."""
    pass


class EmitError(LumenError):
    """Error while rendering an AST as JavaScript."""
    pass


class ErrorReporter:
    """Collects errors for the command line and prints them to stderr."""

    def __init__(self, stream=None):
        self.errors: List[LumenError] = []
        self.stream = stream

    def report(self, error: LumenError) -> LumenError:
        """Record an error raised elsewhere."""
        self.errors.append(error)
        return error

    def error(self, message: str, filename: Optional[str] = None) -> LumenError:
        """Record a location-less error, e.g. an I/O failure."""
        return self.report(LumenError(message, filename=filename))

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def clear(self):
        self.errors.clear()

    def print_errors(self):
        """Print all errors to stderr."""
        stream = self.stream or sys.stderr
        for error in self.errors:
            print(str(error), file=stream)
