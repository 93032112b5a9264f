"""Lambda-calculus expression tree with case dispatch and structural folds.

Traversals walk the tree with an explicit stack, so trees as deep as the
parser can build (long application chains nest to the left) never hit the
interpreter's recursion limit.  That covers ``cata``, equality, hashing and
``repr``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

M = TypeVar("M")
R = TypeVar("R")


@dataclass(frozen=True)
class Expression(Generic[M]):
    """Base class for lambda expressions.

    Every node has a ``metadata`` slot (``None`` unless annotated).  Metadata
    is ignored by equality, so an annotated tree equals the tree it came from.
    """

    metadata: M | None = field(default=None, compare=False, kw_only=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expression):
            return NotImplemented
        return _shape(self) == _shape(other)

    def __hash__(self) -> int:
        return hash(tuple(_shape(self)))

    def __repr__(self) -> str:
        return cata(
            self,
            lambda binder, body: f"Abstraction({binder!r}, {body})",
            lambda func, arg: f"Application({func}, {arg})",
            lambda name: f"Variable({name!r})",
        )


@dataclass(frozen=True, eq=False, repr=False)
class Variable(Expression[M]):
    name: str


@dataclass(frozen=True, eq=False, repr=False)
class Abstraction(Expression[M]):
    binder: str
    body: Expression[M]


@dataclass(frozen=True, eq=False, repr=False)
class Application(Expression[M]):
    func: Expression[M]
    arg: Expression[M]


# Curried constructors for applicative parsing.


def variable(name: str) -> Variable[None]:
    return Variable(name)


def abstraction(binder: str) -> Callable[[Expression[None]], Abstraction[None]]:
    return lambda body: Abstraction(binder, body)


def application(
    func: Expression[None],
) -> Callable[[Expression[None]], Application[None]]:
    return lambda arg: Application(func, arg)


def match_expr(
    expr: Expression[M],
    on_abstraction: Callable[[Abstraction[M]], R],
    on_application: Callable[[Application[M]], R],
    on_variable: Callable[[Variable[M]], R],
) -> R:
    """Dispatch on the top-level constructor of ``expr``."""
    match expr:
        case Abstraction():
            return on_abstraction(expr)
        case Application():
            return on_application(expr)
        case Variable():
            return on_variable(expr)
        case _:
            raise TypeError(f"Unexpected expression in match_expr:\n  expr = {expr!r}")


def children(expr: Expression[M]) -> tuple[Expression[M], ...]:
    """Immediate subexpressions of ``expr``, left to right."""
    return match_expr(
        expr,
        lambda abs_: (abs_.body,),
        lambda app: (app.func, app.arg),
        lambda _: (),
    )


def _shape(expr: Expression[Any]) -> list[tuple[str, ...]]:
    # pre-order constructor tags; arities are fixed, so this determines the tree
    shape: list[tuple[str, ...]] = []
    stack = [expr]
    while stack:
        node = stack.pop()
        shape.append(
            match_expr(
                node,
                lambda abs_: ("abs", abs_.binder),
                lambda _: ("app",),
                lambda var: ("var", var.name),
            )
        )
        stack.extend(reversed(children(node)))
    return shape


def cata(
    expr: Expression[M],
    case_abstraction: Callable[[str, R], R],
    case_application: Callable[[R, R], R],
    case_variable: Callable[[str], R],
) -> R:
    """Fold ``expr`` bottom-up, replacing each constructor by a combining function.

    Children are folded before their parent: ``case_abstraction`` receives the
    binder and the folded body, ``case_application`` the folded function and
    argument, ``case_variable`` the name.  Function sides are folded before
    argument sides.
    """
    folded: list[R] = []

    def on_application(_: Application[M]) -> R:
        arg = folded.pop()
        return case_application(folded.pop(), arg)

    stack: list[tuple[Expression[M], bool]] = [(expr, False)]
    while stack:
        node, ready = stack.pop()
        if not ready:
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(children(node)))
            continue
        folded.append(
            match_expr(
                node,
                lambda abs_: case_abstraction(abs_.binder, folded.pop()),
                on_application,
                lambda var: case_variable(var.name),
            )
        )
    return folded.pop()


def strip_metadata(expr: Expression[M]) -> Expression[None]:
    """Return a copy of ``expr`` with every metadata slot cleared."""
    return cata(expr, lambda b, body: Abstraction(b, body), Application, Variable)
