"""Lambda-calculus parsing and layout annotation for tree renderers."""

from lamviz.lam.ast import (
    Abstraction,
    Application,
    Expression,
    Variable,
    cata,
    match_expr,
    strip_metadata,
)
from lamviz.lam.graph import GraphData, to_graph
from lamviz.lam.pretty import pretty
from lamviz.lam.size import SizeMetadata, size_expression
from lamviz.parsing import ParseError, parse_expression

__all__ = [
    "Abstraction",
    "Application",
    "Expression",
    "GraphData",
    "ParseError",
    "SizeMetadata",
    "Variable",
    "cata",
    "match_expr",
    "parse_expression",
    "pretty",
    "size_expression",
    "strip_metadata",
    "to_graph",
]
