"""
Printer - Writes expression trees back out as source text.

Reading the printed text gives back an equal tree, as long as every number
is finite. Reader punctuation is not restored: 'x prints as (quote x).
"""

import math
from decimal import Decimal

from .parser.ast_nodes import Expr, Nil, EllipsisMarker, iter_list, list_tail


def format_number(value: float) -> str:
    """Print whole numbers without a fractional part (42, not 42.0)."""
    if value.is_integer():
        # int() drops the sign of -0.0
        sign = '-' if math.copysign(1.0, value) < 0 and value == 0 else ''
        return sign + str(int(value))
    text = repr(value)
    if 'e' in text:
        # No exponent syntax in the lexer
        text = format(Decimal(text), 'f')
    return text


def format_ellipsis(count: int) -> str:
    return '...' if count == 0 else f'..{count}'


def format_list(expr: Expr) -> str:
    parts = [to_source(item) for item in iter_list(expr)]
    tail = list_tail(expr)
    if isinstance(tail, EllipsisMarker):
        parts.append(format_ellipsis(tail.count))
    elif not isinstance(tail, Nil):
        parts.append('.')
        parts.append(to_source(tail))
    return '(' + ' '.join(parts) + ')'


def to_source(expr: Expr) -> str:
    """Render an expression as source text."""
    return expr.match(
        number=format_number,
        boolean=lambda value: '#t' if value else '#f',
        symbol=lambda name: name,
        nil=lambda: '()',
        cons=lambda car, cdr: format_list(expr),
        ellipsis=format_ellipsis,
    )
