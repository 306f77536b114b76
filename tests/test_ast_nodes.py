"""Tests for expression nodes and list helpers."""

import dataclasses

import pytest

from lispsyntax import parse
from lispsyntax.parser.ast_nodes import (
    NIL, Boolean, Cons, EllipsisMarker, Expr, ExprKind, Nil, NonExhaustiveMatch,
    Number, Symbol, is_proper_list, iter_list, list_tail, make_list,
)

a, b, c = Symbol('a'), Symbol('b'), Symbol('c')

ALL_HANDLERS = dict(
    number=lambda value: ('number', value),
    boolean=lambda value: ('boolean', value),
    symbol=lambda name: ('symbol', name),
    nil=lambda: ('nil',),
    cons=lambda car, cdr: ('cons', car, cdr),
    ellipsis=lambda count: ('ellipsis', count),
)


class TestMatch:
    """Tests for Expr.match."""

    @pytest.mark.parametrize("expr,expected", [
        (Number(1.5), ('number', 1.5)),
        (Boolean(False), ('boolean', False)),
        (Symbol('x'), ('symbol', 'x')),
        (NIL, ('nil',)),
        (Cons(a, b), ('cons', a, b)),
        (EllipsisMarker(2), ('ellipsis', 2)),
    ])
    def test_dispatch(self, expr, expected):
        assert expr.match(**ALL_HANDLERS) == expected

    def test_fallback(self):
        assert Number(1.0).match(symbol=lambda name: name, _=lambda: 'other') == 'other'

    def test_non_exhaustive(self):
        with pytest.raises(NonExhaustiveMatch):
            NIL.match(symbol=lambda name: name)

    def test_non_exhaustive_is_type_error(self):
        with pytest.raises(TypeError):
            Cons(a, NIL).match(nil=lambda: None)

    def test_unknown_handler_name(self):
        with pytest.raises(TypeError, match="numbr"):
            Number(1.0).match(numbr=lambda value: value, _=lambda: None)


class TestValues:
    """Tests for node identity, equality and immutability."""

    def test_nil_is_singleton(self):
        assert Nil() is NIL
        assert Nil() == NIL

    def test_kinds(self):
        assert [e.kind for e in (Number(0.0), Boolean(True), a, NIL, Cons(a, b), EllipsisMarker())] == [
            ExprKind.NUMBER, ExprKind.BOOLEAN, ExprKind.SYMBOL,
            ExprKind.NIL, ExprKind.CONS, ExprKind.ELLIPSIS,
        ]

    def test_equality_by_value(self):
        assert Cons(Symbol('a'), Number(1.0)) == Cons(a, Number(1.0))
        assert hash(Symbol('a')) == hash(a)

    def test_variants_never_equal_each_other(self):
        assert Number(1.0) != Boolean(True)
        assert Number(0.0) != EllipsisMarker(0)

    def test_frozen(self):
        cell = Cons(a, b)
        with pytest.raises(dataclasses.FrozenInstanceError):
            cell.car = c

    def test_repr(self):
        assert repr(Cons(Number(1.0), Cons(a, EllipsisMarker(0)))) == \
            "Cons(Number(1.0), Cons(Symbol('a'), Ellipsis(0)))"
        assert repr(Boolean(True)) == "Boolean(True)"
        assert repr(NIL) == "Nil"

    def test_str_prints_source(self):
        assert str(make_list([a, Number(2.0)], b)) == "(a 2 . b)"


class TestListHelpers:
    """Tests for make_list, iter_list, list_tail and is_proper_list."""

    def test_make_list(self):
        assert make_list([a, b, c]) == Cons(a, Cons(b, Cons(c, NIL)))
        assert make_list([]) is NIL

    def test_make_list_with_tail(self):
        assert make_list([a, b], c) == Cons(a, Cons(b, c))
        assert make_list([], c) == c

    def test_make_list_accepts_iterators(self):
        assert make_list(iter([a, b])) == make_list([a, b])

    def test_iter_list(self):
        assert list(iter_list(make_list([a, b], EllipsisMarker(1)))) == [a, b]
        assert list(iter_list(NIL)) == []
        assert list(iter_list(a)) == []

    def test_list_tail(self):
        assert list_tail(make_list([a, b])) is NIL
        assert list_tail(make_list([a], c)) == c
        assert list_tail(b) == b

    def test_is_proper_list(self):
        assert is_proper_list(make_list([a, b]))
        assert is_proper_list(NIL)
        assert not is_proper_list(Cons(a, b))
        assert not is_proper_list(Cons(a, EllipsisMarker(0)))


class TestLongLists:
    """Long cdr chains must not hit the recursion limit."""

    SOURCE = "(" + " x" * 5000 + ")"

    def test_equality(self):
        assert parse(self.SOURCE) == parse(self.SOURCE)
        assert parse(self.SOURCE) != parse("(" + " x" * 4999 + " y)")
        assert parse(self.SOURCE) != parse("(" + " x" * 5000 + " . x)")

    def test_hash(self):
        first, second = parse(self.SOURCE)[0], parse(self.SOURCE)[0]
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_repr(self):
        text = repr(parse(self.SOURCE)[0])
        assert text.startswith("Cons(Symbol('x'), Cons(Symbol('x'), ")
        assert text.endswith("Nil" + ")" * 5000)
        assert text.count("Cons(") == 5000


def test_base_class_cannot_be_instantiated():
    with pytest.raises(TypeError, match="variants"):
        Expr()
