#!/usr/bin/env python3
"""
Reflow PDF text — CLI entry point.

Extracts paragraph-structured plain text from a PDF's text layer and
repairs common extraction artefacts (hyphenation, letter-spaced
headings, bullet glyphs, run-together sentences).

Usage::

    python extract_text.py input.pdf                  # text to stdout
    python extract_text.py input.pdf out.txt --pages 1-3
    python extract_text.py resume.pdf resume_clean.pdf --pdf --page-markers
    python extract_text.py input.pdf --raw -v 2

Verbosity levels::

    -v 0   Quiet — warnings and errors only.
    -v 1   Normal — run summary and progress bar (default).
    -v 2   Debug — per-page and per-rule detail.
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from reflow.export.writers import default_output_name, save_pdf, save_text
from reflow.pipeline import ExtractionConfig, ExtractionPipeline
from reflow.text.rules import DEFAULT_CONFIG
from reflow.utils.pdf_adapter import GRANULARITIES

logger = logging.getLogger("reflow")

# Mapping from --verbose integer to logging level
_VERBOSITY_MAP = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


# ------------------------------------------------------------------
# Argument parsing
# ------------------------------------------------------------------


def _parse_page_range(value: str):
    """
    Parse a 1-based page range string (e.g. ``"3-10"``) into a
    0-based ``(start, end)`` tuple.

    Raises:
        argparse.ArgumentTypeError: On malformed input.
    """
    parts = value.split("-")
    try:
        start = int(parts[0])
        end = int(parts[1]) if len(parts) > 1 else start
    except (ValueError, IndexError):
        raise argparse.ArgumentTypeError(
            f"Invalid page range '{value}'. Use N or N-M (1-based)."
        )
    if start < 1 or end < start:
        raise argparse.ArgumentTypeError(
            f"Invalid page range '{value}'. Start must be >= 1 and end >= start."
        )
    return (start - 1, end - 1)


def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser with all pipeline options."""
    p = argparse.ArgumentParser(
        description="Extract clean, paragraph-structured text from a PDF.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  python extract_text.py paper.pdf\n"
            "  python extract_text.py paper.pdf paper.txt --pages 1-3\n"
            "  python extract_text.py resume.pdf --pdf --page-markers\n"
            "  python extract_text.py paper.pdf --raw -v 2\n"
        ),
    )

    # -- Positional --------------------------------------------------------
    p.add_argument("input", help="Path to the input PDF file")
    p.add_argument(
        "output",
        nargs="?",
        default=None,
        help="Output file (.txt or .pdf). Text goes to stdout when omitted "
        "and --pdf is not given.",
    )

    # -- Pages -------------------------------------------------------------
    p.add_argument(
        "--pages",
        type=_parse_page_range,
        default=None,
        metavar="N-M",
        help="Page range, 1-based inclusive (e.g. 1-10). Default: all.",
    )
    p.add_argument(
        "--granularity",
        choices=GRANULARITIES,
        default="span",
        help="Fragment granularity read from the PDF (default: span)",
    )

    # -- Normalisation -----------------------------------------------------
    text = p.add_argument_group("normalisation")
    text.add_argument(
        "--raw",
        action="store_true",
        help="Skip normalisation; output reconstructed lines only",
    )
    text.add_argument(
        "--join-wrapped-lines",
        action="store_true",
        help="Join lines broken mid-sentence between lowercase letters",
    )
    text.add_argument(
        "--job-title-breaks",
        action="store_true",
        help="Start a paragraph at lines that open with a job title",
    )

    # -- Output ------------------------------------------------------------
    output = p.add_argument_group("output")
    output.add_argument(
        "--pdf",
        action="store_true",
        help="Write the text as a new PDF instead of plain text",
    )
    output.add_argument(
        "--page-markers",
        action="store_true",
        help='Separate pages with "--- Page N ---" lines',
    )

    # -- Debug / output control --------------------------------------------
    debug = p.add_argument_group("debug & output")
    debug.add_argument(
        "-v",
        "--verbose",
        type=int,
        choices=[0, 1, 2],
        default=1,
        help="Verbosity: 0=quiet, 1=normal (default), 2=debug",
    )
    debug.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars",
    )

    return p


# ------------------------------------------------------------------
# Logging setup
# ------------------------------------------------------------------


def _configure_logging(verbosity: int) -> None:
    """
    Set up the root ``reflow`` logger on stderr, so stdout stays free
    for the extracted text.
    """
    level = _VERBOSITY_MAP.get(verbosity, logging.INFO)

    if level <= logging.DEBUG:
        fmt = "%(asctime)s %(name)s %(levelname)s: %(message)s"
        datefmt = "%H:%M:%S"
    elif level <= logging.INFO:
        fmt = "%(message)s"
        datefmt = None
    else:
        fmt = "%(levelname)s: %(message)s"
        datefmt = None

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger("reflow")
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # Suppress noisy third-party loggers regardless of verbosity
    for name in ("fitz", "pymupdf"):
        logging.getLogger(name).setLevel(logging.WARNING)


# ------------------------------------------------------------------
# Output path resolution
# ------------------------------------------------------------------


def _resolve_output_path(args: argparse.Namespace) -> Optional[str]:
    """
    Determine the output file path from CLI arguments.

    Returns ``None`` when the text should go to stdout.
    """
    if args.output:
        path = args.output
    elif args.pdf:
        return default_output_name(args.input, kind="pdf")
    else:
        return None

    if args.pdf and not path.lower().endswith(".pdf"):
        path = str(Path(path).with_suffix(".pdf"))

    return path


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, configure logging, and run the pipeline."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Logging must be configured before any logger calls
    _configure_logging(args.verbose)

    # Validate input file
    input_path = Path(args.input)
    if not input_path.exists():
        parser.error(f"Input file not found: {input_path}")
    if input_path.suffix.lower() != ".pdf":
        parser.error(f"Input must be a PDF file: {input_path}")

    output_path = _resolve_output_path(args)
    if output_path and Path(output_path).resolve() == input_path.resolve():
        parser.error("Output path must differ from the input file.")

    config = ExtractionConfig(
        granularity=args.granularity,
        page_range=args.pages,
        normalize=not args.raw,
        page_markers=args.page_markers,
        normalizer=dataclasses.replace(
            DEFAULT_CONFIG,
            join_wrapped_lines=args.join_wrapped_lines,
            break_before_job_titles=args.job_title_breaks,
        ),
        disable_tqdm=args.no_progress or args.verbose == 0,
    )

    # Log run header
    logger.info("Reflow PDF text")
    logger.info("  Input:  %s", input_path)
    logger.info("  Output: %s", output_path or "<stdout>")
    if config.page_range:
        s, e = config.page_range
        logger.info("  Pages:  %d–%d", s + 1, e + 1)

    try:
        result = ExtractionPipeline(config).extract(str(input_path))
    except RuntimeError as e:
        logger.error("%s", e)
        return 1

    logger.info("\n%s", result.summary())

    if not result.text:
        logger.warning("No text was extracted")
        return 1

    if output_path is None:
        sys.stdout.write(result.text + "\n")
    elif args.pdf or output_path.lower().endswith(".pdf"):
        save_pdf(result.text, output_path)
    else:
        save_text(result.text, output_path)

    return 0


if __name__ == "__main__":
    sys.exit(main())
