"""
Lexer - Tokenizes Scheme-style source text into tokens.

Handles:
- Parentheses and square brackets
- Reader punctuation: ' ` , ,@
- Dots and ellipses: . ... ..N
- Numbers (decimal, optionally negative and fractional)
- Booleans #t and #f
- Symbols
- Whitespace, ; line comments and unknown characters (as trivia tokens)

Tokens are produced on demand. The lexer keeps a single token of lookahead
so the parser can peek before it commits.
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Callable, List, Optional


class TokenKind(Enum):
    """Token kinds."""
    # Delimiters
    LPAREN = auto()        # (
    RPAREN = auto()        # )
    LBRACKET = auto()      # [
    RBRACKET = auto()      # ]

    # Punctuation
    DOT = auto()           # .
    ELLIPSIS = auto()      # ... or ..N (N is a repeat count)
    QUOTE = auto()         # '
    BACKTICK = auto()      # `
    COMMA = auto()         # ,
    COMMA_AT = auto()      # ,@

    # Atoms
    NUMBER = auto()        # 42, -1.5, .5, 4.
    BOOLEAN = auto()       # #t, #f
    SYMBOL = auto()        # identifier

    # Trivia
    WHITESPACE = auto()
    LINE_COMMENT = auto()  # ; to end of line
    UNKNOWN = auto()       # anything the lexer does not recognise

    # End of input
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A single token: its kind and the exact source text it covers.

    The position is informational and does not take part in comparisons.
    """
    kind: TokenKind
    text: str
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    def __repr__(self):
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"


DIGITS = '0123456789'
SYMBOL_PUNCTUATION = '!$%^&*-_=+:<>/?'
WHITESPACE_CHARS = ' \t\r\n'
LINE_TERMINATORS = '\r\n'

SINGLE_CHAR_TOKENS = {
    '(': TokenKind.LPAREN,
    ')': TokenKind.RPAREN,
    '[': TokenKind.LBRACKET,
    ']': TokenKind.RBRACKET,
    "'": TokenKind.QUOTE,
    '`': TokenKind.BACKTICK,
}


def is_digit(ch: Optional[str]) -> bool:
    return ch is not None and ch in DIGITS


def starts_symbol(ch: Optional[str]) -> bool:
    """Check if character can start a symbol (ASCII letters only)."""
    if ch is None:
        return False
    return ('a' <= ch <= 'z') or ('A' <= ch <= 'Z') or ch in SYMBOL_PUNCTUATION


def continues_symbol(ch: Optional[str]) -> bool:
    return starts_symbol(ch) or is_digit(ch)


def is_whitespace(ch: Optional[str]) -> bool:
    return ch is not None and ch in WHITESPACE_CHARS


def is_unknown_char(ch: Optional[str]) -> bool:
    """Unknown runs stop at delimiters, whitespace and comment starts."""
    return ch is not None and ch not in '()[];' and ch not in WHITESPACE_CHARS


class Lexer:
    """Tokenizes source text on demand."""

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.buffer: Optional[Token] = None

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        if self.buffer is None:
            self.buffer = self.scan()
        return self.buffer

    def pop(self) -> Token:
        """Consume and return the next token."""
        if self.buffer is not None:
            token = self.buffer
            self.buffer = None
            return token
        return self.scan()

    def tokenize(self, include_trivia: bool = True) -> List[Token]:
        """Drain the remaining tokens, excluding the final EOF.

        With include_trivia=False whitespace and comments are dropped.
        Unknown tokens are always kept.
        """
        tokens = []
        while self.peek().kind != TokenKind.EOF:
            token = self.pop()
            if include_trivia or token.kind not in (TokenKind.WHITESPACE, TokenKind.LINE_COMMENT):
                tokens.append(token)
        return tokens

    def peek_char(self, offset: int = 0) -> Optional[str]:
        """Peek at character at current position + offset."""
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return None

        ch = self.source[self.pos]
        self.pos += 1

        if ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return ch

    def skip_while(self, test: Callable[[Optional[str]], bool]):
        while self.peek_char() is not None and test(self.peek_char()):
            self.advance()

    def scan(self) -> Token:
        """Scan one token starting at the cursor."""
        line = self.line
        col = self.column
        start = self.pos

        ch = self.advance()
        if ch is None:
            return Token(TokenKind.EOF, '', line, col)

        if ch in SINGLE_CHAR_TOKENS:
            kind = SINGLE_CHAR_TOKENS[ch]

        # ,@ is unquote-splicing, a lone , is unquote
        elif ch == ',':
            if self.peek_char() == '@':
                self.advance()
                kind = TokenKind.COMMA_AT
            else:
                kind = TokenKind.COMMA

        # Number (checked before symbols since - is also a symbol character)
        elif self.starts_number(ch):
            self.read_number(ch)
            kind = TokenKind.NUMBER

        elif ch == '.':
            kind = self.read_dots()

        # Boolean; any other # sequence is unknown
        elif ch == '#':
            if self.peek_char() in ('t', 'f'):
                self.advance()
                kind = TokenKind.BOOLEAN
            else:
                self.skip_while(is_unknown_char)
                kind = TokenKind.UNKNOWN

        elif starts_symbol(ch):
            self.skip_while(continues_symbol)
            kind = TokenKind.SYMBOL

        elif is_whitespace(ch):
            self.skip_while(is_whitespace)
            kind = TokenKind.WHITESPACE

        elif ch == ';':
            self.skip_while(lambda c: c not in LINE_TERMINATORS)
            kind = TokenKind.LINE_COMMENT

        else:
            self.skip_while(is_unknown_char)
            kind = TokenKind.UNKNOWN

        return Token(kind, self.source[start:self.pos], line, col)

    def starts_number(self, ch: str) -> bool:
        """Check if the already consumed character ch begins a number."""
        if is_digit(ch):
            return True
        next_ch = self.peek_char()
        if ch == '-':
            return is_digit(next_ch) or (next_ch == '.' and is_digit(self.peek_char(1)))
        if ch == '.':
            return is_digit(next_ch)
        return False

    def read_number(self, first: str):
        """Read the rest of a number whose first character was already consumed.

        A number holds at most one decimal point, so "1.2.3" is read as
        "1.2" and leaves ".3" to start the next number.
        """
        self.skip_while(is_digit)
        if first != '.' and self.peek_char() == '.':
            self.advance()
            self.skip_while(is_digit)

    def read_dots(self) -> TokenKind:
        """Read what follows a '.' that does not start a number."""
        if self.peek_char() == '.':
            if self.peek_char(1) == '.':
                # ...
                self.advance()
                self.advance()
                return TokenKind.ELLIPSIS
            if is_digit(self.peek_char(1)):
                # ..N
                self.advance()
                self.skip_while(is_digit)
                return TokenKind.ELLIPSIS
        return TokenKind.DOT


def tokenize(source: str, filename: str = "<input>", include_trivia: bool = True) -> List[Token]:
    """Convenience function to tokenize source text."""
    lexer = Lexer(source, filename)
    return lexer.tokenize(include_trivia)
