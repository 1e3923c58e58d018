"""Line and paragraph reconstruction from positioned page fragments."""

from .models import Line, PositionedFragment, coerce_fragment
from .reconstructor import (
    LINE_THRESHOLD,
    PARAGRAPH_THRESHOLD,
    assemble_lines,
    group_lines,
    reconstruct_lines,
)

__all__ = [
    "PositionedFragment",
    "Line",
    "coerce_fragment",
    "LINE_THRESHOLD",
    "PARAGRAPH_THRESHOLD",
    "group_lines",
    "assemble_lines",
    "reconstruct_lines",
]
