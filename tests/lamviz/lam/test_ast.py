import dataclasses
from functools import reduce

import pytest

from lamviz.lam.ast import (
    Abstraction,
    Application,
    Variable,
    abstraction,
    application,
    cata,
    children,
    match_expr,
    strip_metadata,
    variable,
)

x, y = Variable("x"), Variable("y")
term = Application(Abstraction("x", x), y)


def _kind(expr) -> str:
    return match_expr(expr, lambda _: "abs", lambda _: "app", lambda _: "var")


def test_match_dispatches_on_constructor() -> None:
    assert _kind(Abstraction("x", x)) == "abs"
    assert _kind(term) == "app"
    assert _kind(x) == "var"


def test_match_is_shallow() -> None:
    assert match_expr(term, lambda a: a, lambda app: app.func, lambda v: v) == Abstraction("x", x)


def test_match_rejects_non_expressions() -> None:
    with pytest.raises(TypeError, match="Unexpected expression"):
        _kind("x")


def test_cata_folds_bottom_up() -> None:
    rendered = cata(
        term,
        lambda binder, body: f"(\\{binder}.{body})",
        lambda func, arg: f"[{func} {arg}]",
        lambda name: name,
    )
    assert rendered == "[(\\x.x) y]"


def test_cata_with_constructors_rebuilds_tree() -> None:
    rebuilt = cata(term, lambda b, body: Abstraction(b, body), Application, Variable)
    assert rebuilt == term


def test_metadata_is_ignored_by_equality() -> None:
    assert Variable("x", metadata=3) == x
    assert Abstraction("x", x, metadata="m") == Abstraction("x", x)


def test_nodes_are_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        x.name = "z"  # type: ignore[misc]


def test_curried_constructors() -> None:
    assert variable("x") == x
    assert abstraction("x")(x) == Abstraction("x", x)
    assert application(Abstraction("x", x))(y) == term


def test_strip_metadata_clears_every_node() -> None:
    annotated = Application(Variable("f", metadata=1), Variable("a", metadata=2), metadata=3)
    stripped = strip_metadata(annotated)
    assert stripped == annotated
    assert stripped.metadata is None
    assert stripped.func.metadata is None
    assert stripped.arg.metadata is None


def test_children_in_order() -> None:
    assert children(term) == (Abstraction("x", x), y)
    assert children(Abstraction("x", y)) == (y,)
    assert children(x) == ()


def test_equality_compares_whole_shape() -> None:
    assert Application(x, y) != Application(y, x)
    assert Abstraction("x", x) != Abstraction("y", x)
    assert Abstraction("x", x) != Application(x, x)
    assert hash(Variable("x", metadata=1)) == hash(x)
    assert len({term, Application(Abstraction("x", x), y)}) == 1


def test_repr_shows_structure() -> None:
    assert repr(term) == "Application(Abstraction('x', Variable('x')), Variable('y'))"


def test_deep_trees_do_not_exhaust_the_stack() -> None:
    chain = reduce(Application, [x] * 2000)
    assert chain == reduce(Application, [x] * 2000)
    assert chain != reduce(Application, [x] * 1999)
    assert hash(chain) == hash(strip_metadata(chain))
    assert repr(chain).startswith("Application(Application(")
    assert cata(chain, lambda _, body: body, lambda f, a: f + a, lambda _: 1) == 2000
