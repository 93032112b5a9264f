from functools import reduce

from lamviz.lam.analysis import (
    bound_variables,
    depth,
    free_variables,
    is_closed,
    leaf_count,
    node_count,
)
from lamviz.lam.ast import Abstraction, Application, Variable
from lamviz.lam.examples import S, Y
from lamviz.lam.size import size_expression, size_of
from lamviz.parsing.grammar import parse_expression


def test_free_and_bound_variables() -> None:
    expr = parse_expression("λx.x y (λz.w)")
    assert free_variables(expr) == {"y", "w"}
    assert bound_variables(expr) == {"x", "z"}


def test_shadowed_binder_is_not_free() -> None:
    assert free_variables(parse_expression("λx.λx.x")) == frozenset()


def test_closed_terms() -> None:
    assert is_closed(S)
    assert is_closed(Y)
    assert not is_closed(parse_expression("λx.y"))


def test_counts() -> None:
    expr = parse_expression("(λx.x) y")
    assert node_count(expr) == 4
    assert leaf_count(expr) == 2
    assert depth(expr) == 3


def test_depth_and_leaves_agree_with_size() -> None:
    for expr in (S, Y, parse_expression("a (b c) d")):
        meta = size_of(size_expression(expr))
        assert depth(expr) == meta.height
        assert leaf_count(expr) == meta.width


def test_long_application_chain() -> None:
    chain = reduce(Application, [Variable("x")] * 2000)
    assert depth(chain) == 2000
    assert leaf_count(chain) == 2000
    assert node_count(chain) == 3999
    assert free_variables(chain) == {"x"}


def test_deep_abstraction_nest() -> None:
    expr = Variable("x")
    for _ in range(2000):
        expr = Abstraction("x", expr)
    assert depth(expr) == 2001
    assert is_closed(expr)
