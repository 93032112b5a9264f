"""Pretty-printing for lambda expressions."""

from __future__ import annotations

from lamviz.lam.ast import Expression, cata

ATOM_PREC = 2
APP_PREC = 1
LAM_PREC = 0

LAMBDA = "λ"


def _paren(text: str, needs: bool) -> str:
    return f"({text})" if needs else text


def _render(expr: Expression) -> tuple[str, int]:
    def on_abstraction(binder: str, body: tuple[str, int]) -> tuple[str, int]:
        return f"{LAMBDA}{binder}.{body[0]}", LAM_PREC

    def on_application(func: tuple[str, int], arg: tuple[str, int]) -> tuple[str, int]:
        func_text, func_prec = func
        arg_text, arg_prec = arg
        # abstraction bodies run to the right edge; application nests left
        left = _paren(func_text, func_prec == LAM_PREC)
        right = _paren(arg_text, arg_prec < ATOM_PREC)
        return f"{left} {right}", APP_PREC

    return cata(expr, on_abstraction, on_application, lambda name: (name, ATOM_PREC))


def pretty(expr: Expression) -> str:
    """Render ``expr`` as source text that parses back to the same tree."""
    return _render(expr)[0]
