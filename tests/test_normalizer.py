"""
Text normalizer rules, rule order and configuration.
"""

import dataclasses

import pytest

from reflow.text import DEFAULT_CONFIG, NormalizerConfig, TextNormalizer, normalize

FIXTURES = [
    "A d m i n",
    "2022 - 2025 Managed the team.",
    "Experience Led projects",
    "• S K I L L S Python, SQL. Experience Led projects 2019 - Present at Acme.",
    "01/2020 – 03/2022 Lead engineer\n\n\n\nReferences available on request",
    "- first item\n- second-hand item\n☎ 555 | mail 📧",
    "Summary: manage-\nment of teams.  Work  Experience Acme   Corp",
    "Experience - Acme Corp",
    "2019 - 2021 - Lead engineer",
]


@pytest.fixture
def normalizer():
    return TextNormalizer()


# -----------------------------------------------------------------
# Contract
# -----------------------------------------------------------------


@pytest.mark.parametrize("value", [None, "", 123, b"bytes"])
def test_empty_or_invalid_input_gives_empty_string(value):
    assert normalize(value) == ""


def test_step_order(normalizer):
    assert normalizer.step_names == [
        "strip_symbols",
        "dehyphenate",
        "repair_letter_spacing",
        "collapse_whitespace",
        "break_sentences",
        "space_date_ranges",
        "space_section_headers",
        "final_cleanup",
    ]


def test_optional_steps_are_slotted_in_order():
    config = dataclasses.replace(
        DEFAULT_CONFIG, join_wrapped_lines=True, break_before_job_titles=True
    )
    names = TextNormalizer(config).step_names
    assert names.index("join_wrapped_lines") == names.index("collapse_whitespace") + 1
    assert names.index("break_before_job_titles") == names.index("space_date_ranges") + 1


@pytest.mark.parametrize("text", FIXTURES)
def test_idempotent(text):
    once = normalize(text)
    assert normalize(once) == once


@pytest.mark.parametrize("text", FIXTURES)
def test_only_inserts_whitespace_and_colons(text):
    allowed = set(text) | {" ", "\n", ":"}
    assert set(normalize(text)) <= allowed


# -----------------------------------------------------------------
# Symbols
# -----------------------------------------------------------------


def test_strips_bullets_bars_and_emoji():
    assert normalize("• Python | Java ★ 😀") == "Python Java"


def test_strips_page_break_markers():
    text = "End of page. --- PAGE BREAK --- Next page"
    assert normalize(text) == "End of page.\n\nNext page"
    assert normalize("one\n--- Page 2 ---\ntwo") == "one\n\ntwo"


def test_leading_hyphen_is_a_bullet_only_before_whitespace():
    text = "- first item\n- second-hand item\n-5 degrees"
    assert normalize(text) == "first item\nsecond-hand item\n-5 degrees"


def test_symbol_vocabulary_can_be_replaced():
    config = NormalizerConfig(symbol_ranges=(), bullet_ranges=(), stripped_chars="")
    assert normalize("x | y ★", config) == "x | y ★"


# -----------------------------------------------------------------
# Hyphenation and letter spacing
# -----------------------------------------------------------------


def test_dehyphenate(normalizer):
    assert normalizer.dehyphenate("manage-\nment") == "management"
    assert normalizer.dehyphenate("manage- \n  ment") == "management"
    assert normalizer.dehyphenate("well-known") == "well-known"


def test_letter_spacing_repair():
    assert normalize("A d m i n") == "Admin"


def test_letter_spacing_repair_has_no_length_cap():
    assert normalize("A d m i n i s t r a t o r") == "Administrator"


def test_letter_spacing_keeps_initials_before_words(normalizer):
    assert normalizer.repair_letter_spacing("J Smith and a team") == (
        "J Smith and a team"
    )


def test_letter_spacing_run_stops_at_longer_word(normalizer):
    assert normalizer.repair_letter_spacing("A d m in") == "Adm in"


def test_letter_spacing_needs_single_spaces(normalizer):
    assert normalizer.repair_letter_spacing("A  d") == "A  d"


def test_letter_spacing_minimum_run_is_configurable():
    config = NormalizerConfig(min_spaced_run=3)
    n = TextNormalizer(config)
    assert n.repair_letter_spacing("I a m") == "Iam"
    assert n.repair_letter_spacing("a b test") == "a b test"


# -----------------------------------------------------------------
# Whitespace and sentences
# -----------------------------------------------------------------


def test_collapse_whitespace_keeps_newlines(normalizer):
    text = "  alpha  \t beta \n  gamma\r\ndelta  "
    assert normalizer.collapse_whitespace(text) == "alpha beta\ngamma\ndelta"


def test_sentence_breaks():
    assert normalize("First. Second! Third? fourth") == (
        "First.\n\nSecond!\n\nThird? fourth"
    )


def test_final_cleanup(normalizer):
    assert normalizer.final_cleanup("\n a\n\n\n\nb \n") == "a\n\nb"


def test_excess_newlines_collapse():
    assert normalize("alpha\n\n\n\nbeta") == "alpha\n\nbeta"


def test_wrapped_lines_joined_only_when_enabled():
    config = NormalizerConfig(join_wrapped_lines=True)
    assert normalize("broken\nline", config) == "broken line"
    assert normalize("broken\nline") == "broken\nline"


# -----------------------------------------------------------------
# Date ranges
# -----------------------------------------------------------------


def test_year_range_gets_paragraph_break():
    assert normalize("2022 - 2025 Managed the team.") == (
        "2022 - 2025\n\nManaged the team."
    )


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2019–Present Built things", "2019–Present\n\nBuilt things"),
        ("2021-current work", "2021-current\n\nwork"),
        ("01/2020 - 03/2022 Lead engineer", "01/2020 - 03/2022\n\nLead engineer"),
        ("5/2018 — present Tutor", "5/2018 — present\n\nTutor"),
    ],
)
def test_date_range_forms(text, expected):
    assert normalize(text) == expected


def test_date_range_not_matched_inside_longer_numbers(normalizer):
    assert normalizer.space_date_ranges("ID 12022-20255 x") == "ID 12022-20255 x"


def test_open_range_words_are_configurable():
    config = NormalizerConfig(open_range_words=("Now",))
    assert normalize("2020 - now Writing", config) == "2020 - now\n\nWriting"
    assert normalize("2020 - Present Writing", config) == "2020 - Present Writing"


# -----------------------------------------------------------------
# Section headers and job titles
# -----------------------------------------------------------------


def test_section_header_gets_colon_and_break():
    assert normalize("Experience Led projects") == "Experience:\n\nLed projects"


def test_section_header_existing_colon_not_doubled():
    assert normalize("Work Experience: Acme Corp") == "Work Experience:\n\nAcme Corp"


def test_section_header_keeps_case_and_prefers_longest():
    assert normalize("technical skills python") == "technical skills:\n\npython"


def test_section_header_alone_on_line_is_unchanged():
    assert normalize("Education\nState University") == "Education\nState University"


def test_section_vocabulary_can_be_replaced():
    config = NormalizerConfig(section_headers=("Overview",))
    assert normalize("Overview The system", config) == "Overview:\n\nThe system"
    assert normalize("Experience Led", config) == "Experience Led"


def test_header_followed_by_date_range():
    # both rules fire; the date rule runs first
    assert normalize("Experience 2020 - 2022 Built tools") == (
        "Experience:\n\n2020 - 2022\n\nBuilt tools"
    )


def test_header_before_hyphen_drops_the_bullet():
    assert normalize("Experience - Acme Corp") == "Experience:\n\nAcme Corp"


def test_date_range_before_hyphen_drops_the_bullet():
    assert normalize("2019 - 2021 - Lead engineer") == (
        "2019 - 2021\n\nLead engineer"
    )


def test_header_word_before_punctuation_is_not_split():
    assert normalize("I gained experience. Then I left.") == (
        "I gained experience.\n\nThen I left."
    )
    assert normalize("Skills, tools") == "Skills, tools"


def test_job_title_break_only_when_enabled():
    text = "Acme Corp\nSenior Software Engineer at Acme"
    config = NormalizerConfig(break_before_job_titles=True)
    assert normalize(text, config) == (
        "Acme Corp\n\nSenior Software Engineer at Acme"
    )
    assert normalize(text) == text
