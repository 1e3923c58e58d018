"""
Line reconstruction from positioned fragments.
"""

import random

from reflow.layout import (
    LINE_THRESHOLD,
    PARAGRAPH_THRESHOLD,
    PositionedFragment,
    coerce_fragment,
    group_lines,
    reconstruct_lines,
)


def frag(text, x, y):
    return PositionedFragment(text=text, x=x, y=y)


# -----------------------------------------------------------------
# Thresholds
# -----------------------------------------------------------------


def test_thresholds_are_fixed_constants():
    assert LINE_THRESHOLD == 4
    assert PARAGRAPH_THRESHOLD == 12


def test_baseline_delta_at_line_threshold_stays_on_line():
    assert reconstruct_lines([frag("a", 0, 100), frag("b", 10, 96)]) == "a b"


def test_baseline_delta_above_line_threshold_opens_line():
    assert reconstruct_lines([frag("a", 0, 100), frag("b", 10, 95.5)]) == "a\nb"


def test_gap_at_paragraph_threshold_is_line_break():
    assert reconstruct_lines([frag("a", 0, 100), frag("b", 0, 88)]) == "a\nb"


def test_gap_above_paragraph_threshold_is_paragraph_break():
    assert reconstruct_lines([frag("a", 0, 100), frag("b", 0, 87.5)]) == "a\n\nb"


# -----------------------------------------------------------------
# Grouping and ordering
# -----------------------------------------------------------------


def test_empty_input():
    assert reconstruct_lines([]) == ""
    assert reconstruct_lines(None) == ""
    assert group_lines(None) == []
    assert group_lines([]) == []


def test_single_fragment_is_trimmed():
    assert reconstruct_lines([frag("  Hello  ", 3, 40)]) == "Hello"


def test_same_line_fragments_get_a_space():
    fragments = [frag("Hello", 0, 100), frag("World", 50, 100)]
    assert reconstruct_lines(fragments) == "Hello World"


def test_input_order_does_not_matter():
    fragments = [frag("World", 50, 100), frag("Hello", 0, 100)]
    assert reconstruct_lines(fragments) == "Hello World"


def test_equal_baselines_ordered_by_x():
    fragments = [frag("c", 30, 50), frag("a", 10, 50), frag("b", 20, 50)]
    assert reconstruct_lines(fragments) == "a b c"


def test_top_of_page_comes_first():
    fragments = [frag("bottom", 0, 10), frag("top", 0, 700)]
    assert reconstruct_lines(fragments) == "top\n\nbottom"


def test_no_double_space_when_fragment_carries_whitespace():
    assert reconstruct_lines([frag("Hello ", 0, 100), frag("World", 50, 100)]) == (
        "Hello World"
    )
    assert reconstruct_lines([frag("Hello", 0, 100), frag(" World", 50, 100)]) == (
        "Hello World"
    )


def test_empty_fragment_does_not_glue_words():
    fragments = [frag("a", 0, 100), frag("", 5, 100), frag("b", 10, 100)]
    assert reconstruct_lines(fragments) == "a b"


def test_line_baseline_is_first_fragment():
    # 97 joins the line opened at 100; 94 is 6 away from 100, not 3 from 97
    lines = group_lines([frag("a", 0, 100), frag("b", 10, 97), frag("c", 20, 94)])
    assert [line.text for line in lines] == ["a b", "c"]
    assert [line.y for line in lines] == [100, 94]


def test_line_count_matches_baseline_runs():
    rng = random.Random(7)
    baselines = [700, 699, 650, 648, 400, 120]
    fragments = [frag("pin", 0, y) for y in baselines]
    fragments += [
        frag(f"w{i}", rng.uniform(0, 500), rng.choice(baselines)) for i in range(60)
    ]

    ordered = sorted(fragments, key=lambda f: (-f.y, f.x))
    runs = 0
    anchor = None
    for f in ordered:
        if anchor is None or abs(anchor - f.y) > LINE_THRESHOLD:
            runs += 1
            anchor = f.y

    assert len(group_lines(fragments)) == runs == 4


# -----------------------------------------------------------------
# Post-pass
# -----------------------------------------------------------------


def test_hyphenated_line_break_is_joined():
    fragments = [frag("recon-", 0, 100), frag("struct the page", 0, 90)]
    assert reconstruct_lines(fragments) == "reconstruct the page"


def test_sentence_end_starts_paragraph():
    text = reconstruct_lines([frag("One sentence. Another one", 0, 100)])
    assert text == "One sentence.\n\nAnother one"


def test_lowercase_after_period_is_not_a_sentence_break():
    assert reconstruct_lines([frag("see e.g. this", 0, 100)]) == "see e.g. this"


# -----------------------------------------------------------------
# Input coercion
# -----------------------------------------------------------------


def test_coerce_pdfjs_item_uses_transform():
    f = coerce_fragment({"str": "Hi", "transform": [1, 0, 0, 1, 10, 200]})
    assert f == PositionedFragment("Hi", 10.0, 200.0)


def test_coerce_mapping_and_tuple():
    assert coerce_fragment({"text": "a", "x": 1, "y": 2}) == PositionedFragment("a", 1, 2)
    assert coerce_fragment(("b", 3, 4)) == PositionedFragment("b", 3, 4)


def test_malformed_coordinates_default_to_zero():
    f = coerce_fragment({"text": "x", "x": "abc", "y": None})
    assert (f.x, f.y) == (0.0, 0.0)
    assert coerce_fragment({"text": "x", "x": float("nan")}).x == 0.0
    assert coerce_fragment(None) == PositionedFragment("")


def test_reconstruct_accepts_loose_input():
    items = [{"text": "A", "y": "oops"}, ("B", 10, 0)]
    assert reconstruct_lines(items) == "A B"
