"""
Heuristic repair of text reconstructed from PDF pages.

The normalizer is an ordered list of pure ``str -> str`` steps.  Later
steps see the output of earlier ones, so the order matters: symbols go
first (their removal can expose spaced-out letters and sentence ends),
paragraph rules run on whitespace-normalised text, and a final pass
trims the result.
"""

import logging
import re
from typing import Callable, Iterable, List, Optional, Tuple

from .rules import DEFAULT_CONFIG, NormalizerConfig

logger = logging.getLogger(__name__)

Step = Callable[[str], str]

PARAGRAPH_BREAK = "\n\n"

# -----------------------------------------------------------------
# Fixed patterns
# -----------------------------------------------------------------

# "-  item" at the start of a line; a hyphen glued to a word is kept
_RE_HYPHEN_BULLET = re.compile(r"^[ \t]*-[ \t]+", re.MULTILINE)

# "manage-\n ment" → "management"
_RE_HYPHEN_LINEBREAK = re.compile(r"(\w)-[ \t]*\n\s*(\w)")

_RE_HORIZONTAL_SPACE = re.compile(r"[^\S\n]+")
_RE_SPACE_AROUND_NEWLINE = re.compile(r" *\n *")
_RE_WRAPPED_LINE = re.compile(r"(?<=[a-z])\n(?=[a-z])")
_RE_SENTENCE_BREAK = re.compile(r"([.!?])\s+(?=[A-Z])")
_RE_EXCESS_NEWLINES = re.compile(r"\n{3,}")

_LETTER = r"[^\W\d_]"
_DATE = r"\d{1,2}/\d{4}|\d{4}"
_DASHES = "-–—"


# -----------------------------------------------------------------
# Pattern builders
# -----------------------------------------------------------------


def _char_class(ranges: Iterable[Tuple[int, int]], extra: str = "") -> str:
    """Build a regex character class body from code-point ranges."""
    parts = []
    for start, end in ranges:
        if start == end:
            parts.append(re.escape(chr(start)))
        else:
            parts.append(f"{re.escape(chr(start))}-{re.escape(chr(end))}")
    parts.extend(re.escape(c) for c in extra)
    return "".join(parts)


def _alternation(words: Iterable[str]) -> str:
    """Regex alternation with longer entries tried first."""
    ordered = sorted({w for w in words if w}, key=lambda w: (-len(w), w))
    return "|".join(re.escape(w) for w in ordered)


def _compile_symbols(config: NormalizerConfig) -> Optional[re.Pattern]:
    body = _char_class(
        tuple(config.symbol_ranges) + tuple(config.bullet_ranges),
        config.stripped_chars,
    )
    return re.compile(f"[{body}]") if body else None


def _compile_spaced_run(min_run: int) -> re.Pattern:
    # A single letter, then at least (min_run - 1) more single letters,
    # each separated by exactly one space.  The trailing \b stops the
    # run before a letter that belongs to a longer word.
    repeat = max(min_run, 2) - 1
    return re.compile(rf"\b{_LETTER}(?: {_LETTER}\b){{{repeat},}}")


def _compile_date_range(open_words: Iterable[str]) -> re.Pattern:
    end = _DATE
    words = _alternation(open_words)
    if words:
        end = f"{end}|{words}"
    return re.compile(
        rf"(?P<range>(?<![\d/])(?:{_DATE})[ \t]*[{_DASHES}][ \t]*(?:{end})(?![\w/]))\s*",
        re.IGNORECASE,
    )


def _compile_headers(headers: Iterable[str]) -> Optional[re.Pattern]:
    words = _alternation(headers)
    if not words:
        return None
    return re.compile(
        rf"\b(?P<header>{words})\b[ \t]*:?[ \t]*(?=[^\s:.,;)])",
        re.IGNORECASE,
    )


def _compile_job_titles(titles: Iterable[str]) -> Optional[re.Pattern]:
    words = _alternation(titles)
    if not words:
        return None
    return re.compile(
        rf"(?<=[^\n])\n(?=[^\n]{{0,50}}?\b(?:{words})\b)",
        re.IGNORECASE,
    )


# -----------------------------------------------------------------
# Normalizer
# -----------------------------------------------------------------


class TextNormalizer:
    """
    Repairs common PDF extraction artefacts in reconstructed page text.

    Each rule is a public method that can be called on its own; the
    :attr:`steps` list fixes the order in which :meth:`normalize`
    applies them.  Vocabularies come from the injected
    :class:`NormalizerConfig`.
    """

    def __init__(self, config: Optional[NormalizerConfig] = None):
        self.config = config or DEFAULT_CONFIG

        self._re_symbols = _compile_symbols(self.config)
        self._re_page_break = (
            re.compile(self.config.page_break_pattern, re.IGNORECASE)
            if self.config.page_break_pattern
            else None
        )
        self._re_spaced_run = _compile_spaced_run(self.config.min_spaced_run)
        self._re_date_range = _compile_date_range(self.config.open_range_words)
        self._re_header = _compile_headers(self.config.section_headers)
        self._re_job_title = _compile_job_titles(self.config.job_titles)

        self.steps: List[Tuple[str, Step]] = self._build_steps()

    def _build_steps(self) -> List[Tuple[str, Step]]:
        steps = [
            ("strip_symbols", self.strip_symbols),
            ("dehyphenate", self.dehyphenate),
            ("repair_letter_spacing", self.repair_letter_spacing),
            ("collapse_whitespace", self.collapse_whitespace),
        ]
        if self.config.join_wrapped_lines:
            steps.append(("join_wrapped_lines", self.join_wrapped_lines))
        steps.append(("break_sentences", self.break_sentences))
        steps.append(("space_date_ranges", self.space_date_ranges))
        if self.config.break_before_job_titles:
            steps.append(("break_before_job_titles", self.break_before_job_titles))
        steps.append(("space_section_headers", self.space_section_headers))
        steps.append(("final_cleanup", self.final_cleanup))
        return steps

    @property
    def step_names(self) -> List[str]:
        return [name for name, _ in self.steps]

    def normalize(self, text: Optional[str]) -> str:
        """
        Run every step in order.

        Returns ``""`` for ``None``, non-string or empty input; never
        raises.
        """
        if not text or not isinstance(text, str):
            return ""

        for name, step in self.steps:
            before = len(text)
            text = step(text)
            logger.debug("%s: %d -> %d chars", name, before, len(text))

        return text

    __call__ = normalize

    # -- rules ----------------------------------------------------------

    def strip_symbols(self, text: str) -> str:
        """Delete emoji, bullets, page-break markers and vertical bars."""
        if self._re_page_break is not None:
            text = self._re_page_break.sub("", text)
        if self._re_symbols is not None:
            text = self._re_symbols.sub("", text)
        return _RE_HYPHEN_BULLET.sub("", text)

    def dehyphenate(self, text: str) -> str:
        """Rejoin words hyphenated across a line break."""
        return _RE_HYPHEN_LINEBREAK.sub(r"\1\2", text)

    def repair_letter_spacing(self, text: str) -> str:
        """Collapse spaced-out words: ``"A d m i n"`` → ``"Admin"``."""
        return self._re_spaced_run.sub(lambda m: m.group(0).replace(" ", ""), text)

    def collapse_whitespace(self, text: str) -> str:
        """Single spaces within lines; newlines kept; ends trimmed."""
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        text = _RE_HORIZONTAL_SPACE.sub(" ", text)
        text = _RE_SPACE_AROUND_NEWLINE.sub("\n", text)
        return text.strip()

    def join_wrapped_lines(self, text: str) -> str:
        """Join lines that break mid-sentence between lowercase letters."""
        return _RE_WRAPPED_LINE.sub(" ", text)

    def break_sentences(self, text: str) -> str:
        """Start a new paragraph after each sentence end."""
        return _RE_SENTENCE_BREAK.sub(r"\1" + PARAGRAPH_BREAK, text)

    def space_date_ranges(self, text: str) -> str:
        """Keep date ranges verbatim and end the paragraph right after them."""
        return self._re_date_range.sub(
            lambda m: m.group("range") + PARAGRAPH_BREAK, text
        )

    def break_before_job_titles(self, text: str) -> str:
        """Start a paragraph at lines that open with a job title."""
        if self._re_job_title is None:
            return text
        return self._re_job_title.sub(PARAGRAPH_BREAK, text)

    def space_section_headers(self, text: str) -> str:
        """``"Skills Python"`` → ``"Skills:\\n\\nPython"``."""
        if self._re_header is None:
            return text
        return self._re_header.sub(
            lambda m: m.group("header") + ":" + PARAGRAPH_BREAK, text
        )

    def final_cleanup(self, text: str) -> str:
        """Drop bullets exposed by inserted breaks, cap newline runs and trim."""
        # date and header rules can move a "- " to the start of a line
        text = _RE_HYPHEN_BULLET.sub("", text)
        return _RE_EXCESS_NEWLINES.sub(PARAGRAPH_BREAK, text).strip()


_default_normalizer = TextNormalizer()


def normalize(text: Optional[str], config: Optional[NormalizerConfig] = None) -> str:
    """Normalise *text* with *config*, or with the default vocabularies."""
    if config is None:
        return _default_normalizer.normalize(text)
    return TextNormalizer(config).normalize(text)
