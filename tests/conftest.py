"""
Shared fixtures: small PDFs built in memory with PyMuPDF.
"""

from pathlib import Path
from typing import List, Sequence, Tuple

import fitz
import pytest

# (x, baseline_y_from_top, text)
Placement = Tuple[float, float, str]

PAGE_HEIGHT = 842


@pytest.fixture
def make_pdf(tmp_path: Path):
    """Return a factory writing one page per list of text placements."""

    def _make(pages: Sequence[List[Placement]], name: str = "sample.pdf") -> str:
        doc = fitz.open()
        for placements in pages:
            page = doc.new_page(width=595, height=PAGE_HEIGHT)
            for x, y, text in placements:
                page.insert_text((x, y), text, fontsize=11)
        path = tmp_path / name
        doc.save(str(path))
        doc.close()
        return str(path)

    return _make
