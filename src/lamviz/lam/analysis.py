"""Structural queries over lambda expressions, each a single fold."""

from __future__ import annotations

from lamviz.lam.ast import Expression, cata


def free_variables(expr: Expression) -> frozenset[str]:
    return cata(
        expr,
        lambda binder, body: body - {binder},
        lambda func, arg: func | arg,
        lambda name: frozenset({name}),
    )


def bound_variables(expr: Expression) -> frozenset[str]:
    """Names introduced by some binder in ``expr``, used or not."""
    return cata(
        expr,
        lambda binder, body: body | {binder},
        lambda func, arg: func | arg,
        lambda _: frozenset(),
    )


def is_closed(expr: Expression) -> bool:
    return not free_variables(expr)


def depth(expr: Expression) -> int:
    return cata(
        expr,
        lambda _, body: 1 + body,
        lambda func, arg: 1 + max(func, arg),
        lambda _: 1,
    )


def leaf_count(expr: Expression) -> int:
    return cata(expr, lambda _, body: body, lambda func, arg: func + arg, lambda _: 1)


def node_count(expr: Expression) -> int:
    return cata(
        expr,
        lambda _, body: 1 + body,
        lambda func, arg: 1 + func + arg,
        lambda _: 1,
    )
