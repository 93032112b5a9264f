"""Source span type shared across layers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Span:
    start: int
    end: int

    @staticmethod
    def point(offset: int) -> Span:
        return Span(offset, offset)

    def extract(self, source: str) -> str:
        return source[self.start : self.end]
