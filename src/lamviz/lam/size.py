"""Layout metadata for expression trees.

Each node of a sized tree records how many leaves it spans (``width``), how
many levels it occupies (``height``) and a horizontal centre for its own
vertex (``root``), measured in leaf columns from the left edge of the subtree.
Renderers read these values to place nodes before running their own layout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lamviz.lam.ast import Abstraction, Application, Expression, Variable, cata

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SizeMetadata:
    width: int
    height: int
    root: float


SizedExpression = Expression[SizeMetadata]

LEAF_SIZE = SizeMetadata(width=1, height=1, root=0.0)


def size_of(expr: SizedExpression) -> SizeMetadata:
    if expr.metadata is None:
        raise ValueError(f"Expression has not been sized:\n  expr = {expr!r}")
    return expr.metadata


def _size(expr: Expression) -> SizedExpression:
    def on_abstraction(binder: str, body: SizedExpression) -> SizedExpression:
        inner = size_of(body)
        return Abstraction(
            binder,
            body,
            metadata=SizeMetadata(inner.width, 1 + inner.height, inner.root),
        )

    def on_application(func: SizedExpression, arg: SizedExpression) -> SizedExpression:
        f, a = size_of(func), size_of(arg)
        return Application(
            func,
            arg,
            metadata=SizeMetadata(
                width=f.width + a.width,
                height=1 + max(f.height, a.height),
                root=(f.root + f.width + a.root) / 2,
            ),
        )

    def on_variable(name: str) -> SizedExpression:
        return Variable(name, metadata=LEAF_SIZE)

    return cata(expr, on_abstraction, on_application, on_variable)


def size_expression(expr: Expression) -> SizedExpression:
    """Return a copy of ``expr`` with :class:`SizeMetadata` on every node.

    The input is left untouched and any metadata it already carries is
    ignored, so sizing a sized tree gives the same values again.
    """
    sized = _size(expr)
    logger.debug("sized expression: %s", size_of(sized))
    return sized
