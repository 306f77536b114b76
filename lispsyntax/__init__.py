"""
lispsyntax - Reads Scheme-style source text into s-expression trees.

This package provides the lexer, the recursive-descent parser and the
immutable expression values they produce, ready for a macro expander or
evaluator to consume.
"""

__version__ = "0.1.0"
__author__ = "lispsyntax contributors"

from .errors import ReaderError, LexicalError, ParseError
from .lexer import Lexer, Token, TokenKind, tokenize
from .parser import Parser, parse
from .parser.ast_nodes import (
    Expr, ExprKind, Number, Boolean, Symbol, Nil, NIL, Cons, EllipsisMarker,
    NonExhaustiveMatch, make_list, iter_list, list_tail, is_proper_list,
)
from .printer import to_source
from .reader import Reader
