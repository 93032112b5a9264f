"""Parsing facade: combinator engine, tokenizer and expression grammar."""

from lamviz.parsing.combinators import (
    Failure,
    Parser,
    ParserFailure,
    Stream,
    Success,
    run_parser,
)
from lamviz.parsing.errors import ParseError
from lamviz.parsing.grammar import parse_expression, parse_tokens
from lamviz.parsing.tokens import Token, significant_tokens, tokenize

__all__ = [
    "Failure",
    "ParseError",
    "Parser",
    "ParserFailure",
    "Stream",
    "Success",
    "Token",
    "parse_expression",
    "parse_tokens",
    "run_parser",
    "significant_tokens",
    "tokenize",
]
