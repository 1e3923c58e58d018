"""
Output writers for reflowed text: plain text and a re-encoded PDF.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

import fitz

logger = logging.getLogger(__name__)

PDF_FONT = "helv"
PDF_LINE_SPACING = 1.25


@dataclass
class TextStats:
    """Word and character counts for a block of text."""

    words: int = 0
    chars: int = 0

    @classmethod
    def from_text(cls, text: str) -> "TextStats":
        if not text:
            return cls()
        return cls(words=len(text.split()), chars=len(text))


def default_output_name(input_path: str, kind: str = "text") -> str:
    """
    Derive an output file name next to *input_path*.

    ``kind`` is ``"text"`` (``<stem>_text.txt``) or ``"pdf"``
    (``<stem>_document.pdf``).
    """
    src = Path(input_path)
    suffix = "_document.pdf" if kind == "pdf" else "_text.txt"
    return str(src.with_name(src.stem + suffix))


def save_text(text: str, output_path: str) -> None:
    """Write *text* as UTF-8 plain text."""
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    logger.info("Saved text to %s", out)


def wrap_text(text: str, max_width: float, font_size: float) -> List[str]:
    """
    Greedy word wrap measured with the PDF font metrics.

    Source line breaks are kept; a single word wider than *max_width*
    gets a line of its own.
    """
    wrapped: List[str] = []
    for source_line in text.split("\n"):
        words = source_line.split()
        if not words:
            wrapped.append("")
            continue

        current = words[0]
        for word in words[1:]:
            candidate = f"{current} {word}"
            width = fitz.get_text_length(
                candidate, fontname=PDF_FONT, fontsize=font_size
            )
            if width <= max_width:
                current = candidate
            else:
                wrapped.append(current)
                current = word
        wrapped.append(current)

    return wrapped


def save_pdf(
    text: str,
    output_path: str,
    font_size: float = 12.0,
    margin: float = 42.5,
) -> int:
    """
    Re-encode *text* into a new A4 PDF.

    Args:
        text:        Text to write; line breaks are preserved.
        output_path: Destination ``.pdf`` file.
        font_size:   Font size in points.
        margin:      Page margin in points on every side (42.5pt ≈ 15mm).

    Returns:
        Number of pages written.
    """
    width, height = fitz.paper_size("a4")
    line_height = font_size * PDF_LINE_SPACING
    lines_per_page = max(1, int((height - 2 * margin) // line_height))
    lines = wrap_text(text or "", width - 2 * margin, font_size)

    doc = fitz.open()
    try:
        for start in range(0, max(len(lines), 1), lines_per_page):
            page = doc.new_page(width=width, height=height)
            y = margin + font_size
            for line in lines[start : start + lines_per_page]:
                if line:
                    page.insert_text(
                        (margin, y), line, fontname=PDF_FONT, fontsize=font_size
                    )
                y += line_height

        out = Path(output_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        doc.save(str(out))
        page_count = doc.page_count
    finally:
        doc.close()

    logger.info("Saved %d-page PDF to %s", page_count, output_path)
    return page_count
