from functools import reduce

import pytest

from lamviz.lam.ast import Application, Expression, Variable, children, match_expr
from lamviz.lam.examples import S
from lamviz.lam.size import SizeMetadata, size_expression, size_of
from lamviz.parsing.grammar import parse_expression

SAMPLES = [
    "x",
    "λx.x",
    "a b c",
    "(λx.x)(λy.y)",
    "λf.(λx.f (x x)) (λx.f (x x))",
    "a (b (c d)) (λx.λy.y x)",
]


def _all_metadata(expr: Expression) -> list:
    return [expr.metadata] + match_expr(
        expr,
        lambda abs_: _all_metadata(abs_.body),
        lambda app: _all_metadata(app.func) + _all_metadata(app.arg),
        lambda _: [],
    )


def _applications(expr: Expression) -> list[Application]:
    return match_expr(
        expr,
        lambda abs_: _applications(abs_.body),
        lambda app: [app, *_applications(app.func), *_applications(app.arg)],
        lambda _: [],
    )


def test_leaf_size() -> None:
    assert size_expression(Variable("x")).metadata == SizeMetadata(1, 1, 0.0)


def test_abstraction_size() -> None:
    assert size_of(size_expression(parse_expression("λx.x"))) == SizeMetadata(1, 2, 0.0)


def test_application_size() -> None:
    sized = size_expression(parse_expression("a b c"))
    assert size_of(sized) == SizeMetadata(3, 3, 1.25)
    assert isinstance(sized, Application)
    assert size_of(sized.func) == SizeMetadata(2, 2, 0.5)


def test_identity_pair_end_to_end() -> None:
    meta = size_of(size_expression(parse_expression("(λx.x)(λy.y)")))
    assert (meta.width, meta.height) == (2, 3)
    assert meta.root == 0.5


def test_combinator_s() -> None:
    meta = size_of(size_expression(S))
    assert (meta.width, meta.height) == (4, 6)


def test_sizing_does_not_touch_input() -> None:
    expr = parse_expression("(λx.x) y")
    sized = size_expression(expr)
    assert sized == expr
    assert all(m is None for m in _all_metadata(expr))
    assert all(isinstance(m, SizeMetadata) for m in _all_metadata(sized))


@pytest.mark.parametrize("src", SAMPLES)
def test_size_invariants(src: str) -> None:
    sized = size_expression(parse_expression(src))
    for meta in _all_metadata(sized):
        assert meta.width >= 1
        assert meta.height >= 1
    for app in _applications(sized):
        assert size_of(app).width == size_of(app.func).width + size_of(app.arg).width


@pytest.mark.parametrize("src", SAMPLES)
def test_resizing_is_idempotent(src: str) -> None:
    once = size_expression(parse_expression(src))
    twice = size_expression(once)
    assert _all_metadata(twice) == _all_metadata(once)


def test_size_of_unsized_expression() -> None:
    with pytest.raises(ValueError, match="not been sized"):
        size_of(Variable("x"))


def test_long_application_chain() -> None:
    chain = reduce(Application, [Variable("x")] * 2000)
    meta = size_of(size_expression(chain))
    assert (meta.width, meta.height) == (2000, 2000)


def test_parsed_juxtaposition_sizes() -> None:
    sized = size_expression(parse_expression(" ".join(["x"] * 400)))
    assert size_of(sized).width == 400
    assert size_of(sized).height == 400
    node = sized
    while children(node):
        node = children(node)[0]
    assert size_of(node) == SizeMetadata(1, 1, 0.0)
