"""
Test configuration.

Makes the lispsyntax package importable when the tests are run from a
source checkout without installing it.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from lispsyntax.lexer import Lexer


def token_pairs(source, include_trivia=False):
    """Tokenize source into (kind, text) pairs."""
    return [(t.kind, t.text) for t in Lexer(source).tokenize(include_trivia)]


@pytest.fixture
def source_file(tmp_path):
    """Write source text to a temporary .scm file and return its path."""
    def write(text, name="input.scm"):
        path = tmp_path / name
        path.write_text(text, encoding='utf-8')
        return path
    return write
