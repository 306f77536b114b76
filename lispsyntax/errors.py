"""
Errors raised while reading source text.

There is no recovery: the first error aborts the whole read and no partial
result is returned.
"""


class ReaderError(SyntaxError):
    """Base class for reader errors, formatted as filename:line:column: message."""

    def __init__(self, message: str, filename: str = "<input>", line: int = 0, column: int = 0):
        super().__init__(f"{filename}:{line}:{column}: {message}")
        self.reason = message
        self.filename = filename
        self.line = line
        self.column = column

    def __str__(self):
        return self.args[0]


class LexicalError(ReaderError):
    """Unknown characters were reached where trivia was being skipped."""

    def __init__(self, token_text: str, filename: str = "<input>", line: int = 0, column: int = 0):
        super().__init__(f'unknown token: "{token_text}"', filename, line, column)
        self.token_text = token_text


class ParseError(ReaderError):
    """A token other than the one the grammar requires was found."""

    def __init__(self, expected: str, found: str, filename: str = "<input>",
                 line: int = 0, column: int = 0):
        super().__init__(f"expected {expected}, found {found}", filename, line, column)
        self.expected = expected
        self.found = found
