"""
Reflow: paragraph text from positioned PDF glyph output.

Line reconstruction from positioned fragments, heuristic normalisation
of extraction artefacts, and plain-text / PDF output.
"""

from .layout import PositionedFragment, reconstruct_lines
from .pipeline import (
    ExtractionConfig,
    ExtractionPipeline,
    ExtractionResult,
    PageExtractionResult,
    join_pages,
)
from .text import NormalizerConfig, TextNormalizer, normalize

__version__ = "0.1.0"

__all__ = [
    "PositionedFragment",
    "reconstruct_lines",
    "TextNormalizer",
    "NormalizerConfig",
    "normalize",
    "ExtractionConfig",
    "ExtractionPipeline",
    "ExtractionResult",
    "PageExtractionResult",
    "join_pages",
]
