"""Grammar for lambda-calculus expressions over the token stream.

    expression  ::= application | term
    application ::= term term*                  ; juxtaposition, left-associative
    term        ::= "(" expression ")" | abstraction | variable
    abstraction ::= "λ" identifier "." expression
    variable    ::= identifier

An abstraction's body is a full ``expression``, so it extends as far right as
the enclosing parentheses (or the input) allow: ``λx.x y`` is ``λx.(x y)``.

``term`` and ``expression`` are memoised, so each runs at most once per token
position and malformed input is rejected in time linear in its length.
Nesting depth (parentheses and binders) is bounded by the recursion limit;
deeper input is rejected with a :class:`ParseError`.
"""

from __future__ import annotations

import logging
from typing import Sequence

from lamviz.common.span import Span
from lamviz.lam.ast import (
    Expression,
    abstraction as mk_abstraction,
    application as mk_application,
    variable as mk_variable,
)
from lamviz.parsing.combinators import (
    Failure,
    Parser,
    ParserFailure,
    alt,
    chainl1,
    complete,
    fmap,
    lazy,
    memo,
    run_parser,
    seq,
    seql,
    seqr,
    success,
)
from lamviz.parsing.errors import ParseError
from lamviz.parsing.tokens import (
    DotToken,
    IdentToken,
    LambdaToken,
    LParenToken,
    RParenToken,
    Token,
    is_token,
    significant_tokens,
    tokenize,
)

logger: logging.Logger = logging.getLogger(__name__)

identifier_token = is_token(IdentToken)
lambda_token = is_token(LambdaToken)
dot_token = is_token(DotToken)
lparen_token = is_token(LParenToken)
rparen_token = is_token(RParenToken)

binder_token: Parser[str, Token] = fmap(
    lambda t: t.name, seql(seqr(lambda_token, identifier_token), dot_token)
)

expression: Parser[Expression, Token] = memo(lazy(lambda: alt(application, term)))

variable: Parser[Expression, Token] = fmap(
    mk_variable, fmap(lambda t: t.name, identifier_token)
)

abstraction: Parser[Expression, Token] = seq(
    fmap(mk_abstraction, binder_token), expression
)

parens: Parser[Expression, Token] = seqr(lparen_token, seql(expression, rparen_token))

term: Parser[Expression, Token] = memo(alt(parens, abstraction, variable))

application: Parser[Expression, Token] = chainl1(term, success(mk_application))

top_expression: Parser[Expression, Token] = complete(expression)


def _error_span(source: str, remaining: Sequence[Token]) -> Span:
    if not remaining:
        return Span.point(len(source))
    return remaining[0].span


def _tokenize(source: str) -> list[Token]:
    try:
        return tokenize(source)
    except ParserFailure as exc:
        remaining = exc.failure.remaining
        offset = len(source) - len(remaining)
        span = Span(offset, offset + 1)
        logger.debug("tokenize failed at %s", span)
        raise ParseError(
            f"Unexpected character {remaining[0]!r}",
            span,
            source,
            stage="tokenize",
            detail=exc.failure.message,
        ) from exc


def _grammar_error(source: str, failure: Failure) -> ParseError:
    span = _error_span(source, failure.remaining)
    if failure.message.startswith("COMPLETE:"):
        message, stage = "Unexpected trailing input", "complete"
    elif not failure.remaining:
        message, stage = "Unexpected end of input", "grammar"
    else:
        message, stage = "Unexpected token", "grammar"
    return ParseError(message, span, source, stage=stage, detail=failure.message)


def parse_tokens(toks: Sequence[Token], source: str = "") -> Expression:
    """Parse an already tokenized (whitespace-free) token sequence."""
    try:
        return run_parser(top_expression, toks)
    except ParserFailure as exc:
        error = _grammar_error(source, exc.failure)
        logger.debug("parse failed (%s) at %s", error.stage, error.span)
        raise error from exc
    except RecursionError as exc:
        logger.debug("parse exceeded the recursion limit on %d tokens", len(toks))
        raise ParseError(
            "Expression nested too deeply",
            Span(0, len(source)),
            source,
            stage="grammar",
        ) from exc


def parse_expression(source: str) -> Expression:
    """Parse ``source`` into an :class:`~lamviz.lam.ast.Expression`.

    Raises :class:`ParseError` unless the whole text is one well-formed
    expression.
    """
    logger.debug("parsing %r", source)
    toks = significant_tokens(_tokenize(source))
    logger.debug("%d significant tokens", len(toks))
    return parse_tokens(toks, source)
