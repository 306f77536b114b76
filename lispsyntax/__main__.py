"""CLI: python -m lispsyntax <file> [--tokens] [--trivia] [--verbose]"""

import sys

from .reader import main

if __name__ == '__main__':
    sys.exit(main())
