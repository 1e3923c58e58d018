"""
Vocabularies and switches for the text normalizer.

All values are defaults.  The normalizer takes a
:class:`NormalizerConfig` at construction, so callers (and tests) can
swap any vocabulary with ``dataclasses.replace``.
"""

from dataclasses import dataclass
from typing import Tuple

# -----------------------------------------------------------------
# Symbols
# -----------------------------------------------------------------

# Emoji, pictographs and the miscellaneous symbol / dingbat blocks
# (inclusive code-point ranges).
EMOJI_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x1F300, 0x1F5FF),  # misc symbols and pictographs
    (0x1F600, 0x1F64F),  # emoticons
    (0x1F680, 0x1F6FF),  # transport and map
    (0x1F700, 0x1F77F),  # alchemical
    (0x1F780, 0x1F7FF),  # geometric shapes extended
    (0x1F800, 0x1F8FF),  # supplemental arrows-c
    (0x1F900, 0x1F9FF),  # supplemental symbols and pictographs
    (0x1FA00, 0x1FA6F),  # chess symbols
    (0x1FA70, 0x1FAFF),  # symbols and pictographs extended-a
    (0x2600, 0x26FF),  # misc symbols (stars, card suits, weather)
    (0x2700, 0x27BF),  # dingbats
)

# Bullet-like glyphs outside the ranges above.
BULLET_RANGES: Tuple[Tuple[int, int], ...] = (
    (0x2022, 0x2022),  # bullet
    (0x2043, 0x2043),  # hyphen bullet
    (0x2219, 0x2219),  # bullet operator
    (0x2190, 0x21FF),  # arrows
    (0x25A0, 0x25FF),  # geometric shapes
)

# Characters deleted outright (table rules, pipe separators).
STRIPPED_CHARS = "|"

PAGE_BREAK_PATTERN = r"-{3}\s*page\s*(?:break|\d+)\s*-{3}"

# -----------------------------------------------------------------
# Section headers and job titles
# -----------------------------------------------------------------

SECTION_HEADERS: Tuple[str, ...] = (
    "Experience",
    "Education",
    "Skills",
    "Languages",
    "Projects",
    "Certifications",
    "References",
    "Responsibilities",
    "Achievements",
    "Key Responsibilities",
    "Work Experience",
    "Professional Experience",
    "Technical Skills",
    "Soft Skills",
    "Publications",
    "Awards",
    "Volunteer Work",
    "Interests",
    "Hobbies",
    "Contact Information",
    "Summary",
    "Objective",
    "Personal Statement",
    "Professional Statement",
    "Personal Summary",
    "Professional Summary",
    "Career Highlights",
)

JOB_TITLES: Tuple[str, ...] = (
    "Project Manager",
    "Head Of",
    "Director",
    "Manager",
    "Engineer",
    "Developer",
    "Designer",
    "Consultant",
    "Analyst",
    "Specialist",
)

# Words accepted as an open end of a date range ("2021 - Present").
OPEN_RANGE_WORDS: Tuple[str, ...] = ("Present", "Current")


@dataclass(frozen=True)
class NormalizerConfig:
    """
    Immutable vocabulary and rule switches for :class:`TextNormalizer`.

    Attributes:
        symbol_ranges:           Code-point ranges deleted from the text.
        bullet_ranges:           Bullet glyph ranges deleted from the text.
        stripped_chars:          Individual characters deleted from the text.
        page_break_pattern:      Case-insensitive regex for page markers.
        section_headers:         Headers that get a colon and a paragraph break.
        job_titles:              Keywords for the optional job-title rule.
        open_range_words:        Words closing an open-ended date range.
        min_spaced_run:          Fewest single letters that form a spaced word.
        join_wrapped_lines:      Turn single breaks between lowercase letters
                                 into spaces.
        break_before_job_titles: Start a paragraph at lines that open with a
                                 job title.
    """

    symbol_ranges: Tuple[Tuple[int, int], ...] = EMOJI_RANGES
    bullet_ranges: Tuple[Tuple[int, int], ...] = BULLET_RANGES
    stripped_chars: str = STRIPPED_CHARS
    page_break_pattern: str = PAGE_BREAK_PATTERN
    section_headers: Tuple[str, ...] = SECTION_HEADERS
    job_titles: Tuple[str, ...] = JOB_TITLES
    open_range_words: Tuple[str, ...] = OPEN_RANGE_WORDS
    min_spaced_run: int = 2
    join_wrapped_lines: bool = False
    break_before_job_titles: bool = False


DEFAULT_CONFIG = NormalizerConfig()
