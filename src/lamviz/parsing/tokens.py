"""Tokenizer for lambda-calculus source text, built from the combinators."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import ClassVar, Iterable

from lamviz.common.span import Span
from lamviz.parsing.combinators import (
    Parser,
    alt,
    char,
    char_range,
    complete,
    fmap,
    many,
    many1,
    measure,
    one_of,
    run_parser,
    satisfy,
    seq,
    seqr,
    success,
)

LAMBDA_SYMBOLS = ("λ", "\\")
WHITESPACE_CHARS = " \n\t\r\v\f"


@dataclass(frozen=True)
class Token:
    """Base class for all tokens.  Spans do not take part in equality."""

    kind: ClassVar[str] = "token"

    span: Span = field(default=Span(0, 0), compare=False, kw_only=True)

    def __str__(self) -> str:
        return self.kind


@dataclass(frozen=True)
class IdentToken(Token):
    kind: ClassVar[str] = "identifier"

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class LambdaToken(Token):
    kind: ClassVar[str] = "lambda"

    def __str__(self) -> str:
        return "λ"


@dataclass(frozen=True)
class DotToken(Token):
    kind: ClassVar[str] = "dot"

    def __str__(self) -> str:
        return "."


@dataclass(frozen=True)
class LParenToken(Token):
    kind: ClassVar[str] = "lparen"

    def __str__(self) -> str:
        return "("


@dataclass(frozen=True)
class RParenToken(Token):
    kind: ClassVar[str] = "rparen"

    def __str__(self) -> str:
        return ")"


@dataclass(frozen=True)
class WhitespaceToken(Token):
    kind: ClassVar[str] = "whitespace"

    text: str

    def __str__(self) -> str:
        return repr(self.text)


def _concat(chars: list[str]) -> str:
    return "".join(chars)


_identifier_head = alt(char_range("a", "z"), char("_"))
_identifier_tail = many(
    alt(char_range("a", "z"), char("_"), char_range("A", "Z"), char_range("0", "9"))
)
identifier: Parser[str, str] = seq(
    fmap(lambda head: lambda tail: head + _concat(tail), _identifier_head),
    _identifier_tail,
)
whitespace: Parser[str, str] = fmap(_concat, many1(one_of(WHITESPACE_CHARS)))

token: Parser[Token, str] = alt(
    fmap(IdentToken, identifier),
    seqr(alt(*(char(c) for c in LAMBDA_SYMBOLS)), success(LambdaToken())),
    seqr(char("."), success(DotToken())),
    seqr(char("("), success(LParenToken())),
    seqr(char(")"), success(RParenToken())),
    fmap(WhitespaceToken, whitespace),
)

tokens: Parser[list[tuple[Token, int]], str] = complete(many(measure(token)))


def tokenize(source: str) -> list[Token]:
    """Split ``source`` into tokens, whitespace included, each with its span.

    Raises :class:`~lamviz.parsing.combinators.ParserFailure` at the first
    character no token starts with.
    """
    located: list[Token] = []
    offset = 0
    for tok, length in run_parser(tokens, source):
        located.append(replace(tok, span=Span(offset, offset + length)))
        offset += length
    return located


def significant_tokens(toks: Iterable[Token]) -> list[Token]:
    return [t for t in toks if not isinstance(t, WhitespaceToken)]


def is_token(cls: type[Token]) -> Parser[Token, Token]:
    return satisfy(lambda t: isinstance(t, cls))
