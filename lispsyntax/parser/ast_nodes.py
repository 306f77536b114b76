"""
Expression node definitions.

Parsed source is a tree of immutable expression values. Lists are chains
of Cons cells: a chain ending in Nil is a proper list, a chain ending in
any other value is a dotted list, and a chain ending in an EllipsisMarker
is a repetition pattern for a downstream macro system.
"""

from dataclasses import dataclass, fields
from enum import Enum, auto
from typing import Any, Callable, Iterable, Iterator

__all__ = [
    'ExprKind', 'Expr', 'Number', 'Boolean', 'Symbol', 'Nil', 'NIL', 'Cons',
    'EllipsisMarker', 'NonExhaustiveMatch',
    'make_list', 'iter_list', 'list_tail', 'is_proper_list',
]


class ExprKind(Enum):
    """Expression variants."""
    NUMBER = auto()
    BOOLEAN = auto()
    SYMBOL = auto()
    NIL = auto()
    CONS = auto()
    ELLIPSIS = auto()


# Handler keyword accepted by Expr.match for each variant
MATCH_NAMES = {kind: kind.name.lower() for kind in ExprKind}


class NonExhaustiveMatch(TypeError):
    """Expr.match found no handler for a variant and no '_' fallback."""
    pass


@dataclass(frozen=True)
class Expr:
    """Base class for all expression nodes. Only the variants are instantiated."""
    kind = None

    def __new__(cls, *args, **kwargs):
        if cls.kind is None:
            raise TypeError(f"{cls.__name__} cannot be instantiated; use one of its variants")
        return super().__new__(cls)

    def match(self, **handlers: Callable[..., Any]) -> Any:
        """Dispatch on the variant.

        Handlers are keyword arguments named after the variants (number,
        boolean, symbol, nil, cons, ellipsis) and receive the node's fields
        positionally. '_' is the fallback and takes no arguments; without
        it every variant that can occur must have a handler.

            expr.match(symbol=lambda name: name, _=lambda: None)
        """
        unknown = set(handlers) - set(MATCH_NAMES.values()) - {'_'}
        if unknown:
            raise TypeError(f"unknown match handlers: {', '.join(sorted(unknown))}")

        name = MATCH_NAMES[self.kind]
        if name in handlers:
            return handlers[name](*self.payload())
        if '_' in handlers:
            return handlers['_']()
        raise NonExhaustiveMatch(f"no handler for {name} in match")

    def payload(self) -> tuple:
        """Field values in declaration order (not recursive)."""
        return tuple(getattr(self, f.name) for f in fields(self))

    def __str__(self):
        from ..printer import to_source
        return to_source(self)


@dataclass(frozen=True)
class Number(Expr):
    """Number literal. Always a float."""
    value: float
    kind = ExprKind.NUMBER

    def __repr__(self):
        return f"Number({self.value!r})"


@dataclass(frozen=True)
class Boolean(Expr):
    """Boolean literal (#t or #f)."""
    value: bool
    kind = ExprKind.BOOLEAN

    def __repr__(self):
        return f"Boolean({self.value!r})"


@dataclass(frozen=True)
class Symbol(Expr):
    """Symbol. Names are case-sensitive."""
    name: str
    kind = ExprKind.SYMBOL

    def __repr__(self):
        return f"Symbol({self.name!r})"


@dataclass(frozen=True)
class Nil(Expr):
    """The empty list. There is only one instance, NIL."""
    kind = ExprKind.NIL
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "Nil"


NIL = Nil()


@dataclass(frozen=True, eq=False)
class Cons(Expr):
    """Pair of two expressions; the building block of lists.

    Equality, hashing and repr walk the cdr chain in a loop, so long
    lists do not hit the recursion limit.
    """
    car: Expr
    cdr: Expr
    kind = ExprKind.CONS

    def __eq__(self, other):
        if not isinstance(other, Cons):
            return NotImplemented
        left, right = self, other
        while isinstance(left, Cons) and isinstance(right, Cons):
            if left is right:
                return True
            if left.car != right.car:
                return False
            left, right = left.cdr, right.cdr
        return left == right

    def __hash__(self):
        return hash((ExprKind.CONS, tuple(iter_list(self)), list_tail(self)))

    def __repr__(self):
        cars = [repr(car) for car in iter_list(self)]
        opening = ''.join(f"Cons({car}, " for car in cars)
        return f"{opening}{list_tail(self)!r}{')' * len(cars)}"


@dataclass(frozen=True)
class EllipsisMarker(Expr):
    """Repetition marker: zero or more repeats of the preceding shape.

    Only ever the tail of a Cons chain. count is the repeat hint written
    after the dots (..3), or 0 for a plain "...".
    """
    count: int = 0
    kind = ExprKind.ELLIPSIS

    def __repr__(self):
        return f"Ellipsis({self.count})"


def make_list(items: Iterable[Expr], tail: Expr = NIL) -> Expr:
    """Build a right-nested Cons chain of items ending in tail."""
    result = tail
    for item in reversed(list(items)):
        result = Cons(item, result)
    return result


def iter_list(expr: Expr) -> Iterator[Expr]:
    """Yield the elements of a Cons chain, not including its tail."""
    while isinstance(expr, Cons):
        yield expr.car
        expr = expr.cdr


def list_tail(expr: Expr) -> Expr:
    """Return the value ending a Cons chain (expr itself if not a Cons)."""
    while isinstance(expr, Cons):
        expr = expr.cdr
    return expr


def is_proper_list(expr: Expr) -> bool:
    return isinstance(list_tail(expr), Nil)
