#!/usr/bin/env python3
"""
Lumen Programming Language Command Line Interface
Compiles Lumen source to JavaScript and provides a REPL.
"""

import argparse
import logging
import sys
from typing import List, Optional

import lumen
from lumen.compiler import DEFAULT_OUTPUT

LOG = logging.getLogger("lumen")


def read_source(file_path: str, reporter: lumen.ErrorReporter) -> Optional[str]:
    """Read a source file, recording I/O failures in reporter."""
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        reporter.error(f"File '{file_path}' not found.")
    except OSError as e:
        reporter.error(f"Error reading file '{file_path}': {e}")
    return None


def print_debug(source_code: str, file_path: str):
    """Print the token stream and AST of source_code."""
    print("Tokens:")
    for token in lumen.tokenize(source_code, file_path):
        if token.type != lumen.TokenType.EOF:
            print(f"  {token}")
    print()
    print("AST:")
    print(lumen.ASTPrinter().print(lumen.parse(source_code, file_path)))
    print()


def build_file(file_path: str, output_path: str, debug: bool,
               reporter: lumen.ErrorReporter) -> bool:
    """Compile a Lumen file to JavaScript."""
    source_code = read_source(file_path, reporter)
    if source_code is None:
        return False

    try:
        if debug:
            print_debug(source_code, file_path)
        javascript = lumen.compile_source(source_code, file_path)
    except lumen.LumenError as e:
        reporter.report(e)
        return False

    try:
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(javascript)
    except OSError as e:
        reporter.error(f"Error writing file '{output_path}': {e}")
        return False

    LOG.info("Compiled %s -> %s", file_path, output_path)
    return True


def check_syntax(file_path: str, reporter: lumen.ErrorReporter) -> bool:
    """Check syntax of a Lumen file without emitting code."""
    source_code = read_source(file_path, reporter)
    if source_code is None:
        return False

    try:
        lumen.parse(source_code, file_path)
    except lumen.LumenError as e:
        reporter.report(e)
        return False

    print(f"Syntax OK: {file_path}")
    return True


def dump_ast(file_path: str, reporter: lumen.ErrorReporter) -> bool:
    source_code = read_source(file_path, reporter)
    if source_code is None:
        return False

    try:
        program = lumen.parse(source_code, file_path)
    except lumen.LumenError as e:
        reporter.report(e)
        return False

    print(lumen.ASTPrinter().print(program))
    return True


def dump_tokens(file_path: str, reporter: lumen.ErrorReporter) -> bool:
    source_code = read_source(file_path, reporter)
    if source_code is None:
        return False

    try:
        tokens = lumen.tokenize(source_code, file_path)
    except lumen.LumenError as e:
        reporter.report(e)
        return False

    for token in tokens:
        print(token)
    return True


def compile_command(source_code: str, reporter: lumen.ErrorReporter) -> bool:
    """Compile a source string and print the JavaScript."""
    try:
        print(lumen.compile_source(source_code, "<command>"), end="")
    except lumen.LumenError as e:
        reporter.report(e)
        return False
    return True


def print_help():
    """Print REPL help."""
    print("""
Lumen REPL Help:
- Type any Lumen expression to see the JavaScript it compiles to
- Separate several expressions with ';'
- Use 'exit' or 'quit' to leave the REPL
- Press Ctrl+C or Ctrl+D to exit

Example usage:
  lumen> x = 1 + 2 * 3
  (x = (1 + (2 * 3)));

  lumen> fn double(n) { n * 2 }
  function double(n) { return ((n * 2)) };
""")


def repl():
    """Run the Lumen REPL (Read-Compile-Print Loop)."""
    print("Lumen Programming Language REPL")
    print(f"Version {lumen.__version__}")
    print("Type 'exit' or 'quit' to leave, 'help' for help.\n")

    reporter = lumen.ErrorReporter()

    while True:
        try:
            line = input("lumen> ")
        except KeyboardInterrupt:
            print("\nKeyboardInterrupt")
            break
        except EOFError:
            print("\nGoodbye!")
            break

        if line.strip().lower() in ['exit', 'quit']:
            print("Goodbye!")
            break

        if line.strip().lower() == 'help':
            print_help()
            continue

        if line.strip() == '':
            continue

        if not compile_command(line, reporter):
            reporter.print_errors()
            reporter.clear()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the Lumen CLI."""
    parser = argparse.ArgumentParser(
        prog="lumen",
        description="Lumen Programming Language",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                         # Start REPL
  %(prog)s build script.lm         # Compile to out.js
  %(prog)s build script.lm -o a.js # Compile to a.js
  %(prog)s check script.lm         # Check syntax
  %(prog)s -c "f(1, 2)"            # Compile code directly
        """
    )

    parser.add_argument('-c', '--command', help='Compile a single source string')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose logging')
    parser.add_argument('--version', action='version',
                        version=f'Lumen {lumen.__version__}')

    subparsers = parser.add_subparsers(dest='subcommand', help='Commands')

    build_parser = subparsers.add_parser('build', help='Compile a Lumen file to JavaScript')
    build_parser.add_argument('file', help='Lumen source file to compile')
    build_parser.add_argument('-o', '--output', default=DEFAULT_OUTPUT,
                              help=f'Output file (default: {DEFAULT_OUTPUT})')
    build_parser.add_argument('--debug', action='store_true',
                              help='Print tokens and AST while compiling')

    check_parser = subparsers.add_parser('check', help='Check syntax of a Lumen file')
    check_parser.add_argument('file', help='Lumen source file to check')

    ast_parser = subparsers.add_parser('ast', help='Print the syntax tree of a Lumen file')
    ast_parser.add_argument('file', help='Lumen source file')

    tokens_parser = subparsers.add_parser('tokens', help='Print the tokens of a Lumen file')
    tokens_parser.add_argument('file', help='Lumen source file')

    subparsers.add_parser('repl', help='Start interactive REPL')

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    if args.verbose:
        LOG.debug("Verbose mode enabled")

    reporter = lumen.ErrorReporter()

    if args.command is not None:
        success = compile_command(args.command, reporter)
    elif args.subcommand == 'build':
        success = build_file(args.file, args.output, args.debug, reporter)
    elif args.subcommand == 'check':
        success = check_syntax(args.file, reporter)
    elif args.subcommand == 'ast':
        success = dump_ast(args.file, reporter)
    elif args.subcommand == 'tokens':
        success = dump_tokens(args.file, reporter)
    else:
        repl()
        return 0

    if reporter.has_errors():
        reporter.print_errors()
    return 0 if success else 1


if __name__ == '__main__':
    sys.exit(main())
