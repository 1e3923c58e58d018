"""
Reflow pipeline orchestrator: PDF → fragments → lines → clean text.

Coordinates the per-page workflow:

1. **Fragment extraction** — read each page's positioned text runs
   through PyMuPDF.
2. **Line reconstruction** — group fragments into lines and lines into
   paragraphs by baseline geometry.
3. **Normalisation** — repair hyphenation, letter spacing, bullets and
   run-together sentences with the heuristic rule chain.
4. **Assembly** — join page texts in page order.

Usage::

    from reflow.pipeline import ExtractionConfig, ExtractionPipeline

    pipeline = ExtractionPipeline(ExtractionConfig(page_range=(0, 4)))
    result = pipeline.extract("input.pdf")
    print(result.text)
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from tqdm import tqdm

from reflow.export.writers import TextStats
from reflow.layout.reconstructor import group_lines, reconstruct_lines
from reflow.text.normalizer import TextNormalizer
from reflow.text.rules import DEFAULT_CONFIG, NormalizerConfig
from reflow.utils.pdf_adapter import GRANULARITIES, PDFAdapter

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n"


# ------------------------------------------------------------------
# Configuration
# ------------------------------------------------------------------


@dataclass
class ExtractionConfig:
    """
    All tuneable parameters for the reflow pipeline.

    Attributes:
        granularity:  Fragment granularity passed to the PDF adapter
                      (``"span"``, ``"word"`` or ``"char"``).
        page_range:   ``(start, end)`` 0-based inclusive, or ``None`` for all.
        normalize:    Run the text normalizer; ``False`` keeps the
                      reconstructed text as is.
        page_markers: Separate pages with ``--- Page N ---`` lines
                      instead of a blank line.
        normalizer:   Vocabularies and switches for the normalizer.
        disable_tqdm: Suppress progress bars.
    """

    granularity: str = "span"
    page_range: Optional[Tuple[int, int]] = None
    normalize: bool = True
    page_markers: bool = False
    normalizer: NormalizerConfig = field(default_factory=lambda: DEFAULT_CONFIG)
    disable_tqdm: bool = False


# ------------------------------------------------------------------
# Result
# ------------------------------------------------------------------


@dataclass
class PageExtractionResult:
    """Text and counters for a single page."""

    page_index: int
    text: str = ""
    fragment_count: int = 0
    line_count: int = 0


@dataclass
class ExtractionResult:
    """
    Summary returned after extraction completes.

    Carries the joined document text plus per-page results and timing
    so the caller can report or log the run.
    """

    text: str = ""
    pages: List[PageExtractionResult] = field(default_factory=list)
    total_pages: int = 0
    pages_processed: int = 0
    failed_pages: List[int] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def stats(self) -> TextStats:
        return TextStats.from_text(self.text)

    def summary(self) -> str:
        """Format a human-readable summary of the extraction run."""
        stats = self.stats
        failed = ", ".join(str(i + 1) for i in self.failed_pages) or "none"
        return (
            f"{'=' * 60}\n"
            f"EXTRACTION COMPLETE\n"
            f"{'=' * 60}\n"
            f"  Pages:        {self.pages_processed} / {self.total_pages}\n"
            f"  Failed pages: {failed}\n"
            f"  Words:        {stats.words}\n"
            f"  Characters:   {stats.chars}\n"
            f"  Wall time:    {self.elapsed_seconds:.2f}s\n"
            f"{'=' * 60}"
        )


# ------------------------------------------------------------------
# Page assembly
# ------------------------------------------------------------------


def join_pages(page_texts: Dict[int, str], page_markers: bool = False) -> str:
    """
    Join per-page texts in page order.

    Pages may finish in any order; *page_texts* buffers them by 0-based
    index.  Empty pages are left out.

    Args:
        page_texts:   0-based page index → page text.
        page_markers: Put a ``--- Page N ---`` line (1-based) before every
                      page after the first.
    """
    chunks: List[str] = []
    for idx in sorted(page_texts):
        text = page_texts[idx]
        if not text:
            continue
        if chunks and page_markers:
            chunks.append(f"{PAGE_SEPARATOR}--- Page {idx + 1} ---{PAGE_SEPARATOR}")
        elif chunks:
            chunks.append(PAGE_SEPARATOR)
        chunks.append(text)
    return "".join(chunks)


# ------------------------------------------------------------------
# Pipeline
# ------------------------------------------------------------------


class ExtractionPipeline:
    """
    End-to-end PDF text reflow.

    The two core stages hold no state between calls, so a single
    pipeline can process any number of pages or documents.
    """

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()
        if self.config.granularity not in GRANULARITIES:
            raise ValueError(
                f"Unknown granularity '{self.config.granularity}' "
                f"(expected one of {', '.join(GRANULARITIES)})"
            )
        self.normalizer = TextNormalizer(self.config.normalizer)

    def process_fragments(self, fragments: Iterable[Any]) -> str:
        """
        Run line reconstruction and normalisation on one page's fragments.

        Args:
            fragments: ``PositionedFragment`` objects, ``{text, x, y}``
                       mappings or ``(text, x, y)`` tuples.

        Returns:
            The page's final text.
        """
        text = reconstruct_lines(fragments)
        if not self.config.normalize:
            return text
        return self.normalizer.normalize(text)

    def extract(self, pdf_path: str) -> ExtractionResult:
        """
        Extract reflowed text from every page in the configured range.

        A page that fails to extract is logged and skipped; the run
        continues with the next page.

        Args:
            pdf_path: Path to the input PDF.

        Returns:
            :class:`ExtractionResult` with the joined text and metrics.
        """
        t0 = time.perf_counter()
        cfg = self.config
        result = ExtractionResult()
        page_texts: Dict[int, str] = {}

        with PDFAdapter(pdf_path) as pdf:
            result.total_pages = pdf.page_count
            start = cfg.page_range[0] if cfg.page_range else 0
            end = cfg.page_range[1] if cfg.page_range else pdf.page_count - 1
            end = min(end, pdf.page_count - 1)
            page_indices = range(start, end + 1)

            pbar = tqdm(
                page_indices,
                desc="Extracting text",
                unit="page",
                disable=cfg.disable_tqdm,
            )
            for idx in pbar:
                pbar.set_postfix(page=f"{idx + 1}/{pdf.page_count}")
                page_result = self._process_page(pdf, idx)
                if page_result is None:
                    result.failed_pages.append(idx)
                    continue
                result.pages.append(page_result)
                page_texts[idx] = page_result.text

        result.pages_processed = len(result.pages)
        result.text = join_pages(page_texts, page_markers=cfg.page_markers)
        result.elapsed_seconds = time.perf_counter() - t0

        logger.info(
            "Extraction complete: %d pages, %d chars in %.2fs",
            result.pages_processed,
            len(result.text),
            result.elapsed_seconds,
        )
        return result

    def _process_page(
        self, pdf: PDFAdapter, page_index: int
    ) -> Optional[PageExtractionResult]:
        """Extract and reflow one page, or ``None`` if extraction failed."""
        try:
            fragments = pdf.fragments(page_index, self.config.granularity)
        except Exception as e:
            logger.warning("Failed to extract page %d: %s", page_index + 1, e)
            return None

        if not fragments:
            logger.debug("Page %d: no extractable text", page_index + 1)
            return PageExtractionResult(page_index=page_index)

        text = self.process_fragments(fragments)
        line_count = len(group_lines(fragments))
        logger.debug(
            "Page %d: %d fragments, %d chars",
            page_index + 1,
            len(fragments),
            len(text),
        )
        return PageExtractionResult(
            page_index=page_index,
            text=text,
            fragment_count=len(fragments),
            line_count=line_count,
        )
