"""
Reader front end.

Coordinates lexing and parsing of whole source units and provides the
command-line interface.
"""

import sys
from typing import List, Optional, Tuple

from .errors import ReaderError
from .lexer import Lexer, Token
from .parser import Parser
from .parser.ast_nodes import Expr
from .printer import to_source


def load_source(path: str) -> Tuple[str, str]:
    """Read a source unit. Returns (source, filename); '-' is standard input."""
    if path == '-':
        return sys.stdin.read(), '<stdin>'
    with open(path, 'r', encoding='utf-8') as f:
        return f.read(), path


class Reader:
    """Reads source units into lists of expressions."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def log(self, message: str):
        """Print log message if verbose mode is enabled."""
        if self.verbose:
            print(f"[lispsyntax] {message}", file=sys.stderr)

    def read_string(self, source: str, filename: str = "<input>") -> List[Expr]:
        """Parse source text into its top-level expressions."""
        self.log(f"Parsing {filename} ({len(source)} characters)...")
        exprs = Parser.from_source(source, filename).parse_file()
        self.log(f"Read {len(exprs)} top-level expressions from {filename}")
        return exprs

    def read_file(self, path: str) -> List[Expr]:
        """Read and parse a UTF-8 source file."""
        self.log(f"Reading {path}...")
        source, filename = load_source(path)
        return self.read_string(source, filename)

    def read_tokens(self, source: str, filename: str = "<input>",
                    include_trivia: bool = False) -> List[Token]:
        """Tokenize source text without parsing it."""
        tokens = Lexer(source, filename).tokenize(include_trivia)
        self.log(f"Scanned {len(tokens)} tokens from {filename}")
        return tokens


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line interface for the reader."""
    import argparse

    parser = argparse.ArgumentParser(
        description='Read Scheme-style source text and print the parsed expressions'
    )
    parser.add_argument('input', help="Input source file ('-' for standard input)")
    parser.add_argument('--tokens', action='store_true',
                        help='Print tokens instead of expressions')
    parser.add_argument('--trivia', action='store_true',
                        help='With --tokens, also print whitespace and comment tokens')
    parser.add_argument('--verbose', action='store_true',
                        help='Verbose output')

    args = parser.parse_args(argv)

    reader = Reader(verbose=args.verbose)

    try:
        if args.tokens:
            source, filename = load_source(args.input)
            for token in reader.read_tokens(source, filename, args.trivia):
                print(f"{token.line}:{token.column}\t{token.kind.name}\t{token.text!r}")
        else:
            for expr in reader.read_file(args.input):
                print(to_source(expr))
    except FileNotFoundError:
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        return 1
    except ReaderError as e:
        print(f"Syntax error: {e}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1

    return 0
