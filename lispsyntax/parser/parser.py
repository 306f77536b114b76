"""
Parser - Builds expression trees from the token stream.

LL(1) recursive descent driven by the lexer's one-token lookahead:

    File     = (Trivia | Expr)*
    Expr     = Number | Boolean | Symbol
             | ("'" | "`" | "," | ",@") Expr
             | ("(" | "[") Comp
    Comp     = Closer | Expr+ CompTail Closer
    CompTail = <empty> | "." Expr | Ellipsis
    Trivia   = Whitespace | LineComment | Unknown

Parentheses and brackets both build lists, but a list must be closed with
the same kind of bracket it was opened with.
"""

from typing import List

from ..errors import LexicalError, ParseError
from ..lexer import Lexer, Token, TokenKind
from .ast_nodes import *


# Reader punctuation expands to a two-element list headed by these symbols
READER_MACROS = {
    TokenKind.QUOTE: 'quote',
    TokenKind.BACKTICK: 'quasiquote',
    TokenKind.COMMA: 'unquote',
    TokenKind.COMMA_AT: 'unquote-splicing',
}

CLOSERS = {
    TokenKind.LPAREN: TokenKind.RPAREN,
    TokenKind.LBRACKET: TokenKind.RBRACKET,
}

CLOSER_TEXT = {
    TokenKind.RPAREN: ')',
    TokenKind.RBRACKET: ']',
}

# Tokens that stop the element loop of a list
COMP_ENDERS = (
    TokenKind.RPAREN,
    TokenKind.RBRACKET,
    TokenKind.DOT,
    TokenKind.ELLIPSIS,
    TokenKind.EOF,
)

TRIVIA = (TokenKind.WHITESPACE, TokenKind.LINE_COMMENT, TokenKind.UNKNOWN)


def describe(token: Token) -> str:
    if token.kind == TokenKind.EOF:
        return "end of input"
    return f'"{token.text}"'


def ellipsis_count(text: str) -> int:
    """Repeat count written after the dots: '..3' -> 3, '...' -> 0."""
    digits = text.lstrip('.')
    return int(digits) if digits.isdigit() else 0


class Parser:
    """Parses tokens into a list of top-level expressions."""

    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.filename = lexer.filename

    @classmethod
    def from_source(cls, source: str, filename: str = "<input>") -> 'Parser':
        return cls(Lexer(source, filename))

    def error(self, expected: str, token: Token):
        """Raise a parse error at token's location."""
        raise ParseError(expected, describe(token), self.filename, token.line, token.column)

    def expect(self, kind: TokenKind, expected: str) -> Token:
        """Consume token of expected kind or raise error."""
        token = self.lexer.peek()
        if token.kind != kind:
            self.error(expected, token)
        return self.lexer.pop()

    def skip_trivia(self):
        """Skip whitespace and comments. Unknown tokens are fatal."""
        while self.lexer.peek().kind in TRIVIA:
            token = self.lexer.pop()
            if token.kind == TokenKind.UNKNOWN:
                raise LexicalError(token.text, self.filename, token.line, token.column)

    def parse_file(self) -> List[Expr]:
        """Parse every top-level expression up to the end of input."""
        exprs = []
        self.skip_trivia()
        while self.lexer.peek().kind != TokenKind.EOF:
            exprs.append(self.parse_expr())
            self.skip_trivia()
        return exprs

    def parse_expr(self) -> Expr:
        """Parse a single expression."""
        self.skip_trivia()
        token = self.lexer.pop()

        if token.kind == TokenKind.NUMBER:
            return Number(float(token.text))
        elif token.kind == TokenKind.BOOLEAN:
            return Boolean(token.text == '#t')
        elif token.kind == TokenKind.SYMBOL:
            return Symbol(token.text)
        elif token.kind in READER_MACROS:
            # 'x becomes (quote x), `x becomes (quasiquote x), and so on
            inner = self.parse_expr()
            return make_list([Symbol(READER_MACROS[token.kind]), inner])
        elif token.kind in CLOSERS:
            return self.parse_comp(token.kind)

        self.error("an expression", token)

    def parse_comp(self, open_kind: TokenKind) -> Expr:
        """Parse the rest of a list whose opener has been consumed."""
        if open_kind not in CLOSERS:
            raise ValueError(f"{open_kind.name} does not open a list")
        close_kind = CLOSERS[open_kind]

        self.skip_trivia()
        if self.lexer.peek().kind == close_kind:
            self.lexer.pop()
            return NIL

        items = []
        tail = NIL
        while self.lexer.peek().kind not in COMP_ENDERS:
            items.append(self.parse_expr())
            self.skip_trivia()

        token = self.lexer.peek()
        if token.kind in (TokenKind.DOT, TokenKind.ELLIPSIS):
            # A dot or ellipsis needs at least one element before it
            if not items:
                self.error("an expression", token)
            self.lexer.pop()
            if token.kind == TokenKind.DOT:
                tail = self.parse_expr()
            else:
                tail = EllipsisMarker(ellipsis_count(token.text))

        self.skip_trivia()
        self.expect(close_kind, f'"{CLOSER_TEXT[close_kind]}"')
        return make_list(items, tail)


def parse(source: str, filename: str = "<input>") -> List[Expr]:
    """Convenience function to parse source text into expressions."""
    parser = Parser.from_source(source, filename)
    return parser.parse_file()
