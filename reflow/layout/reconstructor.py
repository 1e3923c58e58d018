"""
Line and paragraph reconstruction from positioned fragments.

Assumes a single-column, left-to-right page: fragments are sorted
top-to-bottom then left-to-right, grouped into lines by baseline
proximity, and lines are separated by a line or paragraph break
depending on the vertical gap between them.
"""

import logging
import re
from typing import Any, Iterable, List, Optional

from .models import Line, PositionedFragment, coerce_fragment

logger = logging.getLogger(__name__)

# Maximum baseline delta for two fragments to share a line.
LINE_THRESHOLD = 4

# Baseline delta between lines above which a paragraph break is emitted.
PARAGRAPH_THRESHOLD = 12

LINE_BREAK = "\n"
PARAGRAPH_BREAK = "\n\n"

# "recon-\nstruct" → "reconstruct"
_RE_HYPHEN_LINEBREAK = re.compile(r"(?<=\w)-\n(?=\w)")
_RE_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_RE_SENTENCE_BREAK = re.compile(r"([.!?])\s+(?=[A-Z])")


def _reading_order_key(fragment: PositionedFragment):
    """Top of the page first, then left to right."""
    return (-fragment.y, fragment.x)


def group_lines(fragments: Optional[Iterable[Any]]) -> List[Line]:
    """
    Group fragments into lines in reading order.

    A fragment opens a new line when its baseline is more than
    ``LINE_THRESHOLD`` away from the current line's baseline (the
    baseline of the line's first fragment).  Fragments within a line
    keep the order of the sort and are not re-sorted.

    Args:
        fragments: ``PositionedFragment`` objects or anything
                   :func:`coerce_fragment` accepts.

    Returns:
        Lines ordered top to bottom.
    """
    if fragments is None:
        return []

    ordered = sorted(
        (coerce_fragment(f) for f in fragments), key=_reading_order_key
    )

    lines: List[Line] = []
    for frag in ordered:
        current = lines[-1] if lines else None
        if current is None or abs(current.y - frag.y) > LINE_THRESHOLD:
            lines.append(Line(y=frag.y, parts=[frag.text]))
        else:
            current.append(frag.text)

    return lines


def assemble_lines(lines: List[Line]) -> str:
    """Join line texts with line or paragraph breaks by vertical gap."""
    if not lines:
        return ""

    chunks = [lines[0].text]
    for prev, line in zip(lines, lines[1:]):
        gap = abs(prev.y - line.y)
        chunks.append(PARAGRAPH_BREAK if gap > PARAGRAPH_THRESHOLD else LINE_BREAK)
        chunks.append(line.text)

    return "".join(chunks)


def reconstruct_lines(fragments: Optional[Iterable[Any]]) -> str:
    """
    Rebuild paragraph-structured text for one page.

    Steps:
    1. Group fragments into lines (:func:`group_lines`)
    2. Join lines with line / paragraph breaks (:func:`assemble_lines`)
    3. Rejoin words hyphenated across a line break
    4. Collapse 3+ newlines to a paragraph break
    5. Start a new paragraph after each sentence end

    Returns:
        The page text, or ``""`` when there are no fragments.
    """
    lines = group_lines(fragments)
    if not lines:
        return ""

    text = assemble_lines(lines)
    text = _RE_HYPHEN_LINEBREAK.sub("", text)
    text = _RE_EXCESS_NEWLINES.sub(PARAGRAPH_BREAK, text)
    text = _RE_SENTENCE_BREAK.sub(r"\1" + PARAGRAPH_BREAK, text)

    logger.debug("Reconstructed %d lines (%d chars)", len(lines), len(text))
    return text.strip()
