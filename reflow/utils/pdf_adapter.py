"""
PyMuPDF adapter for the reflow pipeline.

Turns PDF pages into the positioned fragments the line reconstructor
consumes.  PyMuPDF reports baselines with y growing downward, so every
fragment's y is flipped against the page height: larger y means higher
on the page.
"""

import logging
from typing import Dict, List, Tuple

import fitz

from reflow.layout.models import PositionedFragment

logger = logging.getLogger(__name__)

GRANULARITIES = ("span", "word", "char")

_TEXT_FLAGS = fitz.TEXT_PRESERVE_WHITESPACE | fitz.TEXT_PRESERVE_LIGATURES


def open_pdf(pdf_path: str) -> fitz.Document:
    """
    Open a PDF document.

    Args:
        pdf_path: Path to the PDF file.

    Returns:
        A fitz.Document instance.

    Raises:
        RuntimeError: If fitz cannot open the file.
    """
    try:
        doc = fitz.open(pdf_path)
    except Exception as e:
        raise RuntimeError(f"Failed to open PDF '{pdf_path}': {e}") from e
    return doc


def _check_page_index(doc: fitz.Document, page_index: int) -> None:
    if page_index < 0 or page_index >= doc.page_count:
        raise IndexError(
            f"Page index {page_index} out of range "
            f"(document has {doc.page_count} pages)"
        )


# ---------------------------------------------------------------------------
# Fragment extraction
# ---------------------------------------------------------------------------


def _char_origin(char_data: dict, span_data: dict) -> Tuple[float, float]:
    origin = char_data.get("origin") or span_data.get("origin")
    if origin:
        return origin[0], origin[1]
    bbox = char_data.get("bbox") or span_data.get("bbox") or (0, 0, 0, 0)
    return bbox[0], bbox[3]


def _span_words(chars: List[dict]) -> List[List[dict]]:
    """Split a span's characters into whitespace-separated runs."""
    words: List[List[dict]] = []
    current: List[dict] = []
    for char_data in chars:
        if char_data.get("c", "").isspace():
            if current:
                words.append(current)
                current = []
            continue
        current.append(char_data)
    if current:
        words.append(current)
    return words


def page_fragments(
    page: fitz.Page, granularity: str = "span"
) -> List[PositionedFragment]:
    """
    Extract positioned fragments from a page.

    Args:
        page:        An open fitz page.
        granularity: ``"span"`` for runs of same-styled text (what most
                     rendering engines report), ``"word"`` for
                     whitespace-separated words, or ``"char"`` for single
                     glyphs.

    Returns:
        Fragments in content-stream order (not reading order).

    Raises:
        ValueError: On an unknown granularity.
    """
    if granularity not in GRANULARITIES:
        raise ValueError(
            f"Unknown granularity '{granularity}' "
            f"(expected one of {', '.join(GRANULARITIES)})"
        )

    height = page.rect.height
    text_dict = page.get_text("rawdict", flags=_TEXT_FLAGS)
    fragments: List[PositionedFragment] = []

    def add(chars: List[dict], span_data: dict) -> None:
        text = "".join(c.get("c", "") for c in chars)
        if not text:
            return
        x, y = _char_origin(chars[0], span_data)
        fragments.append(PositionedFragment(text=text, x=x, y=height - y))

    for block_data in text_dict.get("blocks", []):
        # Skip image blocks
        if block_data.get("type") != 0:
            continue
        for line_data in block_data.get("lines", []):
            for span_data in line_data.get("spans", []):
                chars = span_data.get("chars", [])
                if not chars:
                    continue
                if granularity == "span":
                    add(chars, span_data)
                elif granularity == "word":
                    for word in _span_words(chars):
                        add(word, span_data)
                else:
                    for char_data in chars:
                        add([char_data], span_data)

    logger.debug(
        "Page %d: %d %s fragments", page.number, len(fragments), granularity
    )
    return fragments


def extract_page_fragments(
    pdf_path: str, page_index: int, granularity: str = "span"
) -> List[PositionedFragment]:
    """
    Extract fragments for a single page.

    Args:
        pdf_path:    Path to the PDF file.
        page_index:  0-based page number.
        granularity: See :func:`page_fragments`.

    Returns:
        Fragments for the page (empty for image-only pages).
    """
    doc = open_pdf(pdf_path)
    try:
        _check_page_index(doc, page_index)
        return page_fragments(doc.load_page(page_index), granularity)
    finally:
        doc.close()


def extract_all_pages(
    pdf_path: str, granularity: str = "span"
) -> Dict[int, List[PositionedFragment]]:
    """Extract fragments for every page, keyed by 0-based page index."""
    doc = open_pdf(pdf_path)
    try:
        return {
            idx: page_fragments(doc.load_page(idx), granularity)
            for idx in range(doc.page_count)
        }
    finally:
        doc.close()


def get_page_count(pdf_path: str) -> int:
    """Return the total number of pages in the PDF."""
    doc = open_pdf(pdf_path)
    try:
        return doc.page_count
    finally:
        doc.close()


class PDFAdapter:
    """
    Stateful adapter that keeps the document open across multiple
    page operations.  Preferred over the standalone functions when
    processing an entire document sequentially.
    """

    def __init__(self, pdf_path: str):
        self.pdf_path = pdf_path
        self.doc = open_pdf(pdf_path)
        self.page_count = self.doc.page_count

    def fragments(
        self, page_index: int, granularity: str = "span"
    ) -> List[PositionedFragment]:
        """Return the positioned fragments of *page_index*."""
        _check_page_index(self.doc, page_index)
        return page_fragments(self.doc.load_page(page_index), granularity)

    def close(self):
        if self.doc:
            self.doc.close()
            self.doc = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def __repr__(self):
        return f"PDFAdapter('{self.pdf_path}', pages={self.page_count})"
