"""Plain-text and PDF output for reflowed text."""

from .writers import TextStats, default_output_name, save_pdf, save_text, wrap_text

__all__ = [
    "TextStats",
    "default_output_name",
    "save_text",
    "save_pdf",
    "wrap_text",
]
