"""Generic parser combinators over sequences of any element type.

A parser is a plain callable taking the input that remains to be processed and
returning either a :class:`Success` (a value plus the unconsumed input) or a
:class:`Failure` (a diagnostic plus the input at the point of failure).  Parsers
never raise and never mutate their input; combining two parsers produces a new
parser.  Only :func:`run_parser` turns a failure into an exception.

The same combinators serve the character-level tokenizer (``U = str``) and the
token-level grammar (``U = Token``).
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass
from functools import reduce
from typing import (
    Any,
    Callable,
    Generic,
    Iterator,
    Protocol,
    Sequence,
    TypeVar,
    Union,
    overload,
)

T = TypeVar("T")
A = TypeVar("A")
B = TypeVar("B")
U = TypeVar("U")

PREVIEW_LIMIT = 16
NESTED_MESSAGE_LINES = 12


@dataclass(frozen=True)
class Success(Generic[T, U]):
    value: T
    remaining: Sequence[U]


@dataclass(frozen=True)
class Failure:
    message: str
    remaining: Sequence[Any]


Result = Union[Success[T, U], Failure]


class Parser(Protocol[T, U]):
    def __call__(self, input: Sequence[U], /) -> Result[T, U]: ...


@dataclass(frozen=True, eq=False)
class Stream(Sequence[U]):
    """The suffix of ``data`` starting at ``offset``.

    Advancing is O(1), so consuming an input one element at a time does not
    copy the rest of it.  Compares equal to any sequence with the same items.
    """

    data: Sequence[U]
    offset: int = 0

    @staticmethod
    def of(input: Sequence[U]) -> Stream[U]:
        return input if isinstance(input, Stream) else Stream(input)

    def advance(self, count: int = 1) -> Stream[U]:
        return Stream(self.data, min(self.offset + count, len(self.data)))

    @overload
    def __getitem__(self, i: int, /) -> U: ...
    @overload
    def __getitem__(self, s: slice, /) -> Sequence[U]: ...
    def __getitem__(self, key: int | slice) -> U | Sequence[U]:
        if isinstance(key, slice):
            return self.data[self.offset :][key]
        if key < 0:
            key += len(self)
        if not 0 <= key < len(self):
            raise IndexError(key)
        return self.data[self.offset + key]

    def __len__(self) -> int:
        return len(self.data) - self.offset

    def __iter__(self) -> Iterator[U]:
        for i in range(self.offset, len(self.data)):
            yield self.data[i]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sequence):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    __hash__ = None  # type: ignore[assignment]


class ParserFailure(ValueError):
    """Raised by :func:`run_parser` when the parser does not accept its input."""

    def __init__(self, failure: Failure) -> None:
        super().__init__(failure.message)
        self.failure = failure


def _preview(remaining: Sequence[Any]) -> str:
    head = remaining[:PREVIEW_LIMIT]
    if isinstance(head, str):
        text = repr(head)
    else:
        text = " ".join(str(item) for item in head)
    return text + (" ..." if len(remaining) > PREVIEW_LIMIT else "")


def _nest(header: str, *messages: str) -> str:
    # each nested message keeps its first lines only, so diagnostics of deeply
    # nested rules stay proportional to the nesting depth
    lines = [header]
    for message in messages:
        first, *rest = message.split("\n", NESTED_MESSAGE_LINES)
        if rest and "\n" in rest[-1]:
            rest[-1] = "..."
        lines.append(f"  - {first}")
        lines.extend(f"    {line}" for line in rest)
    return "\n".join(lines)


def _furthest(failures: Sequence[Failure]) -> Sequence[Any]:
    return min((f.remaining for f in failures), key=len)


_memo_table: ContextVar[dict[tuple[int, int], Any] | None] = ContextVar(
    "_memo_table", default=None
)


def _rest(input: Sequence[U]) -> Sequence[U]:
    if isinstance(input, Stream):
        return input.advance()
    return input[1:]


def run_parser(parser: Parser[T, U], input: Sequence[U]) -> T:
    """Run ``parser`` over ``input`` and return its value, raising on failure.

    The input is wrapped in a :class:`Stream`, and :func:`memo` tables live for
    the duration of this call.
    """
    token = _memo_table.set({})
    try:
        result = parser(Stream.of(input))
    finally:
        _memo_table.reset(token)
    if isinstance(result, Failure):
        raise ParserFailure(result)
    return result.value


# --- Fundamental combinators -------------------------------------------------


def success(value: T) -> Parser[T, Any]:
    def parse(input: Sequence[Any]) -> Result[T, Any]:
        return Success(value, input)

    return parse


def failure(message: str) -> Parser[Any, Any]:
    def parse(input: Sequence[Any]) -> Result[Any, Any]:
        return Failure(f"FAILURE: {message}", input)

    return parse


def satisfy(predicate: Callable[[U], bool]) -> Parser[U, U]:
    """Accept the first element of the input when ``predicate`` holds on it."""

    def parse(input: Sequence[U]) -> Result[U, U]:
        if not input:
            return Failure("SATISFY: Unexpected end of input", input)
        first = input[0]
        if not predicate(first):
            return Failure(
                _nest("SATISFY: Failed to satisfy condition at", _preview(input)),
                input,
            )
        return Success(first, _rest(input))

    return parse


def seq(pf: Parser[Callable[[A], B], U], pa: Parser[A, U]) -> Parser[B, U]:
    """Applicative sequencing: run ``pf`` then ``pa`` and apply one to the other."""

    def parse(input: Sequence[U]) -> Result[B, U]:
        f = pf(input)
        if isinstance(f, Failure):
            return Failure(
                _nest("SEQ: Failed to parse function", f.message), f.remaining
            )
        a = pa(f.remaining)
        if isinstance(a, Failure):
            return Failure(
                _nest("SEQ: Failed to parse argument", a.message), a.remaining
            )
        return Success(f.value(a.value), a.remaining)

    return parse


def alt(*parsers: Parser[T, U]) -> Parser[T, U]:
    """Ordered choice; every alternative is tried against the original input.

    On total failure the message lists every branch, and the failure is placed
    at the furthest point any branch reached.
    """

    def parse(input: Sequence[U]) -> Result[T, U]:
        failures: list[Failure] = []
        for parser in parsers:
            result = parser(input)
            if isinstance(result, Success):
                return result
            failures.append(result)
        if not failures:
            return Failure("ALT: No alternatives given", input)
        return Failure(
            _nest("ALT: All alternatives failed", *(f.message for f in failures)),
            _furthest(failures),
        )

    return parse


def complete(parser: Parser[T, U]) -> Parser[T, U]:
    """Accept only when ``parser`` succeeds and leaves no input behind."""

    def parse(input: Sequence[U]) -> Result[T, U]:
        result = parser(input)
        if isinstance(result, Failure):
            return result
        if len(result.remaining) > 0:
            return Failure(
                _nest(
                    "COMPLETE: Parser did not consume entire input",
                    f"Remaining: {_preview(result.remaining)}",
                ),
                result.remaining,
            )
        return result

    return parse


def lazy(thunk: Callable[[], Parser[T, U]]) -> Parser[T, U]:
    """Defer building a parser until it runs, for self-referential rules."""

    def parse(input: Sequence[U]) -> Result[T, U]:
        return thunk()(input)

    return parse


# --- Derived combinators -----------------------------------------------------


def fmap(fn: Callable[[A], B], parser: Parser[A, U]) -> Parser[B, U]:
    return seq(success(fn), parser)


def seql(pa: Parser[A, U], pb: Parser[Any, U]) -> Parser[A, U]:
    return seq(fmap(lambda a: lambda _: a, pa), pb)


def seqr(pa: Parser[Any, U], pb: Parser[B, U]) -> Parser[B, U]:
    return seq(fmap(lambda _: lambda b: b, pa), pb)


def many(parser: Parser[T, U]) -> Parser[list[T], U]:
    """Zero or more repetitions of ``parser``.

    Runs as a loop rather than as ``alt(many1(p), success([]))`` so long inputs
    do not exhaust the interpreter stack.  Stops when ``parser`` fails or
    succeeds without consuming anything.
    """

    def parse(input: Sequence[U]) -> Result[list[T], U]:
        values: list[T] = []
        remaining = input
        while True:
            result = parser(remaining)
            if isinstance(result, Failure):
                return Success(values, remaining)
            values.append(result.value)
            if len(result.remaining) == len(remaining):
                return Success(values, result.remaining)
            remaining = result.remaining

    return parse


def many1(parser: Parser[T, U]) -> Parser[list[T], U]:
    return lazy(lambda: seq(fmap(_cons, parser), many(parser)))


def chainl1(
    parser: Parser[T, U], op: Parser[Callable[[T], Callable[[T], T]], U]
) -> Parser[T, U]:
    """One or more ``parser`` separated by ``op``, folded to the left.

    ``E -> E op T | T`` written iteratively, so ``a op b op c`` yields
    ``op(op(a)(b))(c)``.
    """

    def fold(first: T) -> Callable[[list[Any]], T]:
        return lambda rest: reduce(lambda acc, pair: pair[0](acc)(pair[1]), rest, first)

    step = seq(fmap(lambda f: lambda b: (f, b), op), parser)
    return seq(fmap(fold, parser), many(step))


def memo(parser: Parser[T, U]) -> Parser[T, U]:
    """Run ``parser`` at most once per input position during :func:`run_parser`.

    Every input seen during one run is a suffix of the same sequence, so the
    remaining length identifies the position.  Outside :func:`run_parser` the
    parser runs unmemoised.
    """

    def parse(input: Sequence[U]) -> Result[T, U]:
        table = _memo_table.get()
        if table is None:
            return parser(input)
        key = (id(parse), len(input))
        if key not in table:
            table[key] = parser(input)
        return table[key]

    return parse


def measure(parser: Parser[T, U]) -> Parser[tuple[T, int], U]:
    """Pair the value of ``parser`` with the number of elements it consumed."""

    def parse(input: Sequence[U]) -> Result[tuple[T, int], U]:
        result = parser(input)
        if isinstance(result, Failure):
            return result
        consumed = len(input) - len(result.remaining)
        return Success((result.value, consumed), result.remaining)

    return parse


# --- Character parsers -------------------------------------------------------


def char(c: str) -> Parser[str, str]:
    return satisfy(lambda x: x == c)


def char_range(lo: str, hi: str) -> Parser[str, str]:
    return satisfy(lambda c: lo <= c <= hi)


def one_of(chars: str) -> Parser[str, str]:
    return satisfy(lambda c: c in chars)


def _cons(x: T) -> Callable[[list[T]], list[T]]:
    return lambda xs: [x, *xs]
