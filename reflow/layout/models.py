"""
Positioned text data models for line reconstruction.

Fragments are what a page-rendering engine hands back for a page:
a piece of text and the baseline origin it was drawn at.
"""

import math
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Sequence


@dataclass(frozen=True)
class PositionedFragment:
    """One piece of extracted text at its baseline origin.

    ``y`` grows upward (larger ``y`` is higher on the page) and ``x``
    grows to the right.
    """

    text: str
    x: float = 0.0
    y: float = 0.0


@dataclass
class Line:
    """Fragment texts that share an inferred baseline, left to right."""

    y: float
    parts: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.parts).strip()

    def append(self, text: str) -> None:
        """Add *text* to the end of the line, inferring a word gap."""
        if not text:
            return
        prev = self.parts[-1] if self.parts else ""
        needs_space = (
            prev
            and not prev[-1].isspace()
            and not text[0].isspace()
        )
        self.parts.append(" " + text if needs_space else text)


def _coordinate(value: Any) -> float:
    """Convert *value* to a finite float, or 0.0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def coerce_fragment(item: Any) -> PositionedFragment:
    """
    Build a :class:`PositionedFragment` from whatever the caller holds.

    Accepted shapes:

    - a ``PositionedFragment`` (returned unchanged)
    - a mapping with ``text`` (or pdf.js ``str``) and ``x``/``y``, or a
      6-element ``transform`` matrix whose elements 4 and 5 are x and y
    - a ``(text, x, y)`` sequence

    Anything missing or malformed falls back to ``""`` / ``0.0``.
    """
    if isinstance(item, PositionedFragment):
        return item

    if isinstance(item, Mapping):
        text = item.get("text", item.get("str"))
        x = item.get("x")
        y = item.get("y")
        transform = item.get("transform")
        if isinstance(transform, Sequence) and len(transform) >= 6:
            x = transform[4]
            y = transform[5]
    elif isinstance(item, Sequence) and not isinstance(item, (str, bytes)):
        text = item[0] if len(item) > 0 else ""
        x = item[1] if len(item) > 1 else 0.0
        y = item[2] if len(item) > 2 else 0.0
    else:
        return PositionedFragment(text="")

    return PositionedFragment(
        text=text if isinstance(text, str) else "",
        x=_coordinate(x),
        y=_coordinate(y),
    )
