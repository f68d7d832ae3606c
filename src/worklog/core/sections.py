"""Extract structured content from Markdown sections.

A section starts at an ATX heading (``#`` to ``######``) and runs until the
next heading of any level. Titles are compared case-insensitively after the
``#`` run and surrounding whitespace are stripped.
"""

import re
from typing import Optional

from worklog.core.entities import DailyLog, Section

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.*?)(?:\s+#+)?\s*$")
LIST_ITEM_PATTERN = re.compile(r"^[-*]\s*(\[[ xX]\])?\s*(.+)")
BARE_CHECKBOX_PATTERN = re.compile(r"^\[[ xX]\]$")
HEADING_LINE_PATTERN = re.compile(r"^#+[ \t].+$", re.MULTILINE)
BLANK_RUN_PATTERN = re.compile(r"\n{3,}")

COMPLETED_SECTION = "Completed"
PROGRESS_SECTION = "Project Progress"
HIGHLIGHT_SECTIONS = (COMPLETED_SECTION, PROGRESS_SECTION)

DEFAULT_EXCERPT_LENGTH = 200
DEFAULT_HIGHLIGHT_FALLBACK_LENGTH = 500


def _heading(line: str) -> Optional[tuple[int, str]]:
    match = HEADING_PATTERN.match(line)
    if not match:
        return None
    return len(match.group(1)), match.group(2).strip()


def _same_title(left: str, right: str) -> bool:
    return left.strip().casefold() == right.strip().casefold()


def parse_sections(body: str) -> tuple[list[str], list[Section]]:
    """Split a body into the lines before the first heading and its sections."""
    preamble: list[str] = []
    sections: list[Section] = []
    current: Optional[Section] = None

    for line in body.split("\n"):
        heading = _heading(line)
        if heading is not None:
            current = Section(title=heading[1], level=heading[0])
            sections.append(current)
        elif current is None:
            preamble.append(line)
        else:
            current.lines.append(line)

    return preamble, sections


def find_section(body: str, title: str) -> Optional[Section]:
    """Return the first section titled ``title``, if any."""
    _, sections = parse_sections(body)
    return next((s for s in sections if _same_title(s.title, title)), None)


def extract_section(body: str, title: str) -> str:
    """Return the trimmed content of the first section titled ``title``.

    Returns an empty string when no such heading exists.
    """
    section = find_section(body, title)
    return section.text if section else ""


def extract_list_items(body: str, title: str) -> list[str]:
    """Return list item texts of a section, in document order.

    Checkbox markers (``[ ]``, ``[x]``, ``[X]``) are stripped; checked and
    unchecked items are returned alike.
    """
    items = []
    for line in extract_section(body, title).split("\n"):
        match = LIST_ITEM_PATTERN.match(line)
        if not match:
            continue
        text = match.group(2).strip()
        if text and not BARE_CHECKBOX_PATTERN.match(text):
            items.append(text)
    return items


def generate_excerpt(content: str, max_length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """Strip headings and cap the text at ``max_length`` characters plus ``...``."""
    cleaned = HEADING_LINE_PATTERN.sub("", content)
    cleaned = BLANK_RUN_PATTERN.sub("\n\n", cleaned).strip()

    if len(cleaned) <= max_length:
        return cleaned

    return cleaned[:max_length] + "..."


def extract_highlight_content(
    daily: DailyLog, fallback_length: int = DEFAULT_HIGHLIGHT_FALLBACK_LENGTH
) -> str:
    """Pick the part of a daily log worth quoting in a weekly report."""
    for title in HIGHLIGHT_SECTIONS:
        content = extract_section(daily.body, title)
        if content:
            return content

    return _flatten_headings(daily.body[:fallback_length])


def _flatten_headings(text: str) -> str:
    """Turn heading lines into bold text so quoted content adds no sections."""
    lines = []
    for line in text.split("\n"):
        heading = _heading(line)
        if heading is None:
            lines.append(line)
        elif heading[1]:
            lines.append(f"**{heading[1]}**")
    return "\n".join(lines)


def replace_section(body: str, title: str, new_interior: str) -> str:
    """Replace the content of the first section titled ``title``.

    The heading line and everything from the next heading onward are kept
    verbatim. The body is returned unchanged if the heading is absent.
    """
    lines = body.split("\n")

    start = None
    for i, line in enumerate(lines):
        heading = _heading(line)
        if heading is not None and _same_title(heading[1], title):
            start = i
            break

    if start is None:
        return body

    end = next(
        (i for i in range(start + 1, len(lines)) if _heading(lines[i]) is not None),
        len(lines),
    )

    replacement = [lines[start], "", *new_interior.strip().split("\n")]
    if end < len(lines):
        replacement.append("")

    return "\n".join(lines[:start] + replacement + lines[end:])
