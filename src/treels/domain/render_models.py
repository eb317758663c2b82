from __future__ import annotations

"""
Rendered Output Models.

A rendered listing is a list of lines, each made of text spans tagged with an
abstract style class. Translating style classes into terminal escape
sequences is left to the console layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class Style(Enum):
    """Style class of a span of output text."""

    PLAIN = "plain"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class Span:
    text: str
    style: Style = Style.PLAIN


@dataclass(frozen=True)
class Line:
    """One output line. An empty line has no spans."""
    spans: Tuple[Span, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, *spans: Span) -> "Line":
        return cls(spans=tuple(spans))

    @classmethod
    def text(cls, text: str, style: Style = Style.PLAIN) -> "Line":
        return cls(spans=(Span(text, style),))

    def plain(self) -> str:
        """Return the line text without style information."""
        return "".join(span.text for span in self.spans)
