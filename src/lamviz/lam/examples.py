"""Standard combinators as ready-made expressions."""

from __future__ import annotations

from lamviz.lam.ast import Abstraction, Application, Expression, Variable

x, y, z, f = Variable("x"), Variable("y"), Variable("z"), Variable("f")

I: Expression = Abstraction("x", x)

K: Expression = Abstraction("x", Abstraction("y", x))

S: Expression = Abstraction(
    "x",
    Abstraction(
        "y",
        Abstraction("z", Application(Application(x, z), Application(y, z))),
    ),
)

_self_apply: Expression = Abstraction("x", Application(f, Application(x, x)))

Y: Expression = Abstraction("f", Application(_self_apply, _self_apply))

__all__ = ["I", "K", "S", "Y"]
