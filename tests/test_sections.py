"""Tests for Markdown section extraction."""

import pytest

from worklog.core import DailyLog, DailyMeta
from worklog.core.sections import (
    extract_highlight_content,
    extract_list_items,
    extract_section,
    find_section,
    generate_excerpt,
    parse_sections,
    replace_section,
)

BODY = """# 2026-01-12 Daily Log

## Plan
- [ ]

## Completed
- Task 1
- [ ] Unchecked
- [x] Checked

## Completed Later
- Not this one

### Details
nested

## Notes ##
- remember
"""


def _daily(body: str) -> DailyLog:
    return DailyLog(DailyMeta(date="2026-01-12", week="2026-W03"), body=body)


def test_parse_sections() -> None:
    """The body is split once into a preamble and ordered sections."""
    preamble, sections = parse_sections(BODY)

    assert preamble == []
    assert [(s.title, s.level) for s in sections] == [
        ("2026-01-12 Daily Log", 1),
        ("Plan", 2),
        ("Completed", 2),
        ("Completed Later", 2),
        ("Details", 3),
        ("Notes", 2),
    ]


def test_extract_section() -> None:
    """Only the lines up to the next heading are returned."""
    assert extract_section(BODY, "Completed") == "- Task 1\n- [ ] Unchecked\n- [x] Checked"
    assert extract_section(BODY, "Completed Later") == "- Not this one"
    assert extract_section(BODY, "Details") == "nested"


def test_extract_section_case_insensitive() -> None:
    assert extract_section(BODY, "completed") == extract_section(BODY, "Completed")


def test_extract_section_trailing_hashes() -> None:
    """Closing hashes are not part of the title."""
    assert extract_section(BODY, "Notes") == "- remember"


def test_extract_section_missing() -> None:
    """A missing heading yields an empty string."""
    assert extract_section(BODY, "Risks") == ""
    assert extract_section("", "Plan") == ""
    assert find_section(BODY, "Risks") is None


def test_hash_without_space_is_not_heading() -> None:
    body = "## Tags\n#backend #infra\n"
    assert extract_section(body, "Tags") == "#backend #infra"


def test_extract_list_items() -> None:
    """Checkbox state is ignored and order is kept."""
    assert extract_list_items(BODY, "Completed") == ["Task 1", "Unchecked", "Checked"]


def test_extract_list_items_skips_empty_entries() -> None:
    """Template stubs like ``- [ ]`` and a lone ``-`` are not items."""
    assert extract_list_items(BODY, "Plan") == []
    assert extract_list_items("## Risks\n-\n", "Risks") == []


def test_extract_list_items_star_marker() -> None:
    body = "## Done\n* one\n* [X] two\nnot an item\n"
    assert extract_list_items(body, "Done") == ["one", "two"]


def test_generate_excerpt_strips_headings() -> None:
    """Heading lines are dropped and blank runs collapsed."""
    excerpt = generate_excerpt("# Title\n\n## Section\n\n\n\nSome text\n\n\n\nMore", 200)
    assert excerpt == "Some text\n\nMore"


def test_generate_excerpt_truncates() -> None:
    """Long text is cut to the limit and marked with an ellipsis."""
    excerpt = generate_excerpt("a" * 250, 200)
    assert excerpt == "a" * 200 + "..."


@pytest.mark.parametrize(
    "content, limit",
    [
        ("", 10),
        ("short", 10),
        ("exactly10!", 10),
        ("eleven chars", 11),
        ("x" * 1000, 50),
        ("# Heading only", 5),
        ("# T\n\n" + "word " * 100, 80),
    ],
)
def test_generate_excerpt_bound(content: str, limit: int) -> None:
    """Excerpts never exceed the limit plus the ellipsis."""
    excerpt = generate_excerpt(content, limit)
    cleaned = generate_excerpt(content, 10**6)

    assert len(excerpt) <= limit + 3
    assert excerpt.endswith("...") == (len(cleaned) > limit)


def test_highlight_content_prefers_completed() -> None:
    daily = _daily("## Completed\n- Shipped\n\n## Project Progress\n- alpha: 50%")
    assert extract_highlight_content(daily) == "- Shipped"


def test_highlight_content_falls_back_to_progress() -> None:
    daily = _daily("## Notes\n- n\n\n## Project Progress\n- alpha: 50%")
    assert extract_highlight_content(daily) == "- alpha: 50%"


def test_highlight_content_falls_back_to_body() -> None:
    daily = _daily("Free form text " * 50)
    content = extract_highlight_content(daily, fallback_length=100)
    assert content == daily.body[:100]


def test_highlight_fallback_flattens_headings() -> None:
    """Quoted body text never carries its own section headings."""
    daily = _daily("Shipped stuff\n\n## Next Week Plan\n- daily plan")
    content = extract_highlight_content(daily)

    assert content == "Shipped stuff\n\n**Next Week Plan**\n- daily plan"
    assert parse_sections(content)[1] == []
    assert extract_highlight_content(_daily("### \ntext")) == "text"


def test_replace_section_middle() -> None:
    """Neighbouring sections are kept verbatim."""
    body = "# T\n\n## A\nold\n\n## B\nkeep"
    assert replace_section(body, "A", "new\nlines") == "# T\n\n## A\n\nnew\nlines\n\n## B\nkeep"


def test_replace_section_last() -> None:
    body = "## A\nkeep\n\n## B\nold\nold2"
    assert replace_section(body, "b", "  fresh  ") == "## A\nkeep\n\n## B\n\nfresh"


def test_replace_section_missing() -> None:
    body = "## A\nkeep"
    assert replace_section(body, "Z", "new") == body
