from outline_toolkit.core.models import OutlineEntry
from outline_toolkit.core.services.heading_extractor import compute_outline, extract_outline
from outline_toolkit.core.services.tree_builder import build_tree


DOC = (
    "# Guide\n"
    "intro text\n"
    "## Install\n"
    "steps\n"
    "### Linux ###\n"
    "## Usage\n"
    "# Appendix\n"
)


def test_extracts_levels_text_and_offsets():
    entries = extract_outline(DOC)

    assert [(e.level, e.text) for e in entries] == [
        (1, "Guide"),
        (2, "Install"),
        (3, "Linux"),
        (2, "Usage"),
        (1, "Appendix"),
    ]
    for entry in entries:
        assert DOC[entry.pos] == "#"


def test_section_ends_stop_at_same_or_shallower_heading():
    entries = extract_outline(DOC)
    guide, install, linux, usage, appendix = entries

    assert guide.section_end == appendix.pos
    assert install.section_end == usage.pos
    assert linux.section_end == usage.pos
    assert usage.section_end == appendix.pos
    assert appendix.section_end == len(DOC)


def test_output_builds_a_valid_tree():
    forest = build_tree(extract_outline(DOC))

    assert [n.text for n in forest.roots] == ["Guide", "Appendix"]


def test_fenced_code_is_skipped():
    doc = "# Real\n```python\n# not a heading\n```\n~~~\n## nor this\n~~~~\n## Also real\n"

    entries = extract_outline(doc)

    assert [e.text for e in entries] == ["Real", "Also real"]


def test_fence_needs_matching_marker_to_close():
    doc = "````\n```\n# inside\n````\n# after\n"

    assert [e.text for e in extract_outline(doc)] == ["after"]


def test_code_blocks_kept_when_skipping_disabled():
    doc = "```\n# shown\n```\n"

    assert [e.text for e in extract_outline(doc, skip_code_blocks=False)] == ["shown"]


def test_not_headings():
    doc = "#nospace\n    # indented code\n####### seven\ntext # mid\n"

    assert extract_outline(doc) == []


def test_empty_heading_and_max_level():
    doc = "#\n## Kept\n### Dropped\n"

    entries = extract_outline(doc, max_level=2)

    assert [(e.level, e.text) for e in entries] == [(1, ""), (2, "Kept")]


def test_crlf_offsets_count_both_characters():
    doc = "# A\r\n# B\r\n"

    a, b = extract_outline(doc)

    assert (a.pos, a.section_end) == (0, 5)
    assert (b.pos, b.section_end) == (5, 10)


def test_empty_text():
    assert extract_outline("") == []
    assert extract_outline(None) == []


def test_compute_outline_from_heading_messages():
    headings = [
        {"level": 1, "text": "Intro", "pos": 0},
        {"level": 2, "text": "Sub", "pos": 10},
    ]

    assert compute_outline(headings, 50) == [
        OutlineEntry(1, "Intro", 0, 50),
        OutlineEntry(2, "Sub", 10, 50),
    ]
