"""Heuristic normalisation of reconstructed page text."""

from .normalizer import TextNormalizer, normalize
from .rules import (
    DEFAULT_CONFIG,
    JOB_TITLES,
    SECTION_HEADERS,
    NormalizerConfig,
)

__all__ = [
    "TextNormalizer",
    "NormalizerConfig",
    "DEFAULT_CONFIG",
    "SECTION_HEADERS",
    "JOB_TITLES",
    "normalize",
]
