"""Parse error type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from lamviz.common.span import Span

Stage = Literal["tokenize", "grammar", "complete"]


@dataclass
class ParseError(Exception):
    message: str
    span: Span
    source: str | None = None
    stage: Stage = "grammar"
    detail: str = ""

    def __str__(self) -> str:
        if self.source is None:
            return f"{self.message} @ {self.span.start}:{self.span.end}"
        snippet = self.span.extract(self.source)
        return f"{self.message} @ {self.span.start}:{self.span.end}: {snippet!r}"
