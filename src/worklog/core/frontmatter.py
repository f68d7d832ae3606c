"""Markdown + YAML frontmatter codec.

Documents are stored as::

    ---
    <YAML mapping>
    ---

    <Markdown body>

``parse``/``serialize`` work on plain mappings; the ``parse_*`` helpers
validate a mapping into the typed metadata of one document kind.
"""

import re
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, TypeVar

import yaml

from worklog.core.entities import (
    DailyLog,
    DailyMeta,
    Document,
    DocumentKind,
    GitHubLinks,
    Project,
    ProjectInfo,
    ProjectMeta,
    ProjectStatus,
    ProjectType,
    WeeklyMeta,
    WeeklyReport,
)
from worklog.core.errors import ParseError, ParseErrorKind
from worklog.core.weeks import format_week, week_date_range

FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\n(.*?)^---[ \t]*$\n?", re.DOTALL | re.MULTILINE)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Generic codec
# ---------------------------------------------------------------------------


def split_frontmatter(raw: str) -> tuple[str, str]:
    """Split raw content into the YAML text and the trimmed body.

    Raises:
        ParseError: ``MALFORMED_FRONTMATTER`` if the leading ``---`` block is
            absent or unclosed.
    """
    text = raw.lstrip("\ufeff").replace("\r\n", "\n")
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        if text.startswith("---"):
            raise ParseError.malformed("Frontmatter block is not closed")
        raise ParseError.malformed("Document does not start with a frontmatter block")

    return match.group(1), text[match.end():].strip()


def parse(raw: str) -> tuple[dict[str, Any], str]:
    """Split raw file content into its frontmatter mapping and trimmed body.

    Raises:
        ParseError: ``MALFORMED_FRONTMATTER`` if the leading ``---`` block is
            absent or unclosed, or does not hold a YAML mapping.
    """
    yaml_text, body = split_frontmatter(raw)

    # Out-of-range unquoted dates raise ValueError from the YAML constructor
    try:
        metadata = yaml.safe_load(yaml_text)
    except (yaml.YAMLError, ValueError) as e:
        raise ParseError.malformed(f"Invalid YAML in frontmatter: {e}") from e

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise ParseError.malformed("Frontmatter must be a YAML mapping")

    return metadata, body


def serialize(metadata: Mapping[str, Any], body: str) -> str:
    """Render metadata and body back into frontmatter document text."""
    yaml_text = yaml.safe_dump(
        dict(metadata),
        allow_unicode=True,
        default_flow_style=False,
        sort_keys=False,
        indent=2,
        width=float("inf"),
    ).strip()
    return f"---\n{yaml_text}\n---\n\n{body.strip()}\n"


def has_frontmatter(raw: str) -> bool:
    return raw.lstrip("\ufeff").lstrip().startswith("---")


def update_frontmatter(raw: str, updates: Mapping[str, Any]) -> str:
    """Merge ``updates`` into a document's frontmatter, keeping its body."""
    metadata, body = parse(raw)
    metadata.update(updates)
    return serialize(metadata, body)


def normalize_date(value: Any, field: str = "date") -> str:
    """Normalize a date-like value to ``YYYY-MM-DD``.

    YAML loads unquoted dates as ``date`` objects, while quoted ones stay
    strings; both forms are accepted.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text).isoformat()
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date().isoformat()
        except ValueError:
            pass
        try:
            return datetime.strptime(text, "%Y/%m/%d").date().isoformat()
        except ValueError:
            pass
    raise ParseError.invalid_date(value, field)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _string_list(value: Any) -> list[str]:
    """Coerce a YAML value to a de-duplicated list of strings, keeping order."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = [str(item).strip() for item in value if item is not None]
    else:
        items = [str(value).strip()]
    return list(dict.fromkeys(item for item in items if item))


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "on", "1")
    return bool(value)


def validate_daily(metadata: Mapping[str, Any]) -> DailyMeta:
    if not metadata.get("date"):
        raise ParseError.missing_field("date", "Daily log missing required field: date")
    if metadata.get("type") != DocumentKind.DAILY.value:
        raise ParseError.missing_field("type", "Daily log must have type: daily")

    day = normalize_date(metadata["date"])
    week = format_week(day)
    if metadata.get("week") and str(metadata["week"]) != week:
        raise ParseError(
            ParseErrorKind.INVALID_DATE,
            f"Week {metadata['week']!r} does not contain date {day} (expected {week})",
            field="week",
            value=metadata["week"],
        )

    github = metadata.get("github")
    if not isinstance(github, Mapping):
        github = {}

    return DailyMeta(
        date=day,
        week=week,
        projects=_string_list(metadata.get("projects")),
        tags=_string_list(metadata.get("tags")),
        is_highlight=_as_bool(metadata.get("weekly_highlight", False)),
        github=GitHubLinks(
            issues=_string_list(github.get("issues")),
            prs=_string_list(github.get("prs")),
        ),
    )


def validate_weekly(metadata: Mapping[str, Any]) -> WeeklyMeta:
    """Validate weekly metadata; dates must be the Monday and Sunday of ``week``."""
    if not metadata.get("week"):
        raise ParseError.missing_field("week", "Weekly report missing required field: week")
    if metadata.get("type") != DocumentKind.WEEKLY.value:
        raise ParseError.missing_field("type", "Weekly report must have type: weekly")

    week = str(metadata["week"])
    try:
        start, end = week_date_range(week)
    except ValueError as e:
        raise ParseError.invalid_date(week, "week") from e

    for field, expected in (("start_date", start), ("end_date", end)):
        raw = metadata.get(field)
        if raw and normalize_date(raw, field) != expected:
            raise ParseError(
                ParseErrorKind.INVALID_DATE,
                f"{field} {raw} does not match week {week} (expected {expected})",
                field=field,
                value=raw,
            )

    return WeeklyMeta(
        week=week,
        start_date=start,
        end_date=end,
        projects=_string_list(metadata.get("projects")),
    )


def validate_project(metadata: Mapping[str, Any]) -> ProjectMeta:
    project = metadata.get("project")
    if not project:
        raise ParseError.missing_field("project", "Project file missing required field: project")
    if not isinstance(project, Mapping):
        raise ParseError.malformed("Field 'project' must be a mapping")
    if not project.get("name"):
        raise ParseError.missing_field("project.name", "Project missing required field: project.name")
    if not project.get("github_repo"):
        raise ParseError.missing_field(
            "project.github_repo", "Project missing required field: project.github_repo"
        )

    start_raw = project.get("start_date")
    end_raw = project.get("end_date")

    return ProjectMeta(
        project=ProjectInfo(
            name=str(project["name"]),
            github_repo=str(project["github_repo"]),
            type=str(project.get("type") or ProjectType.SOFTWARE.value),
            status=str(project.get("status") or ProjectStatus.PLANNING.value),
            start_date=(
                normalize_date(start_raw, "project.start_date")
                if start_raw
                else date.today().isoformat()
            ),
            end_date=normalize_date(end_raw, "project.end_date") if end_raw else None,
        )
    )


# ---------------------------------------------------------------------------
# Typed documents
# ---------------------------------------------------------------------------


def _parse_as(
    raw: str,
    source_path: Optional[Path],
    build: Callable[[dict[str, Any], str], T],
) -> T:
    try:
        metadata, body = parse(raw)
        return build(metadata, body)
    except ParseError as e:
        e.source_path = source_path
        raise


def parse_daily(raw: str, source_path: Optional[Path] = None) -> DailyLog:
    return _parse_as(
        raw,
        source_path,
        lambda metadata, body: DailyLog(validate_daily(metadata), body, source_path),
    )


def parse_weekly(raw: str, source_path: Optional[Path] = None) -> WeeklyReport:
    return _parse_as(
        raw,
        source_path,
        lambda metadata, body: WeeklyReport(validate_weekly(metadata), body, source_path),
    )


def parse_project(raw: str, source_path: Optional[Path] = None) -> Project:
    return _parse_as(
        raw,
        source_path,
        lambda metadata, body: Project(validate_project(metadata), body, source_path),
    )


def detect_kind(metadata: Mapping[str, Any]) -> DocumentKind:
    """Decide the document kind: ``type`` first, then presence of ``project``."""
    doc_type = metadata.get("type")
    if doc_type == DocumentKind.DAILY.value:
        return DocumentKind.DAILY
    if doc_type == DocumentKind.WEEKLY.value:
        return DocumentKind.WEEKLY
    if metadata.get("project"):
        return DocumentKind.PROJECT
    raise ParseError(
        ParseErrorKind.UNKNOWN_DOCUMENT_KIND,
        "Unknown document type",
        field="type",
        value=doc_type,
    )


def parse_document(raw: str, source_path: Optional[Path] = None) -> Document:
    """Parse any workspace document, picking the kind from its frontmatter."""
    parsers: dict[DocumentKind, Callable[[str, Optional[Path]], Document]] = {
        DocumentKind.DAILY: parse_daily,
        DocumentKind.WEEKLY: parse_weekly,
        DocumentKind.PROJECT: parse_project,
    }
    kind = _parse_as(raw, source_path, lambda metadata, body: detect_kind(metadata))
    return parsers[kind](raw, source_path)


def serialize_document(document: Document) -> str:
    return serialize(document.meta.to_frontmatter(), document.body)
