"""Aggregate a week's daily logs into a weekly report."""

from dataclasses import replace

from worklog.core.entities import (
    DailyLog,
    DailySummary,
    HighlightEntry,
    WeeklyAggregation,
    WeeklyMeta,
)
from worklog.core.sections import (
    DEFAULT_EXCERPT_LENGTH,
    extract_highlight_content,
    generate_excerpt,
)

DEFAULT_TITLE_SUFFIX = "Weekly Report"

# Section headings of a generated weekly report. Merging matches on these.
SUMMARY_HEADING = "Summary (one sentence)"
HIGHLIGHTS_HEADING = "Highlights"
PROJECT_PROGRESS_HEADING = "Project Progress"
DAILY_SUMMARIES_HEADING = "Daily Summaries"
RISKS_HEADING = "Risks & Blockers"
NEXT_WEEK_HEADING = "Next Week Plan"

NO_HIGHLIGHTS = "*There are no highlighted entries this week*"
NO_PROJECTS = "*There are no associated projects this week*"
NO_DAILIES = "*There are no Daily Logs this week*"
NO_CONTENT = "*no content*"
HIGHLIGHT_MARK = "⭐"

PROGRESS_PLACEHOLDERS = ("Progress this week:", "Current status:", "Next week plan:")


def create_daily_summary(
    daily: DailyLog, excerpt_length: int = DEFAULT_EXCERPT_LENGTH
) -> DailySummary:
    return DailySummary(
        date=daily.meta.date,
        projects=list(daily.meta.projects),
        tags=list(daily.meta.tags),
        is_highlight=daily.meta.is_highlight,
        excerpt=generate_excerpt(daily.body, excerpt_length),
    )


def aggregate(
    dailies: list[DailyLog],
    week_meta: WeeklyMeta,
    title_suffix: str = DEFAULT_TITLE_SUFFIX,
    excerpt_length: int = DEFAULT_EXCERPT_LENGTH,
) -> WeeklyAggregation:
    """Build a fully regenerated weekly report from daily logs.

    Never fails: empty input yields a report made of fallback sentences.
    """
    ordered = sorted(dailies, key=lambda d: d.meta.date)

    projects: list[str] = []
    for daily in ordered:
        for project in daily.meta.projects:
            if project not in projects:
                projects.append(project)

    highlights = [
        HighlightEntry(date=d.meta.date, content=extract_highlight_content(d))
        for d in ordered
        if d.meta.is_highlight
    ]
    summaries = [create_daily_summary(d, excerpt_length) for d in ordered]

    content = render_weekly_content(
        week_meta.week, projects, highlights, summaries, title_suffix
    )

    return WeeklyAggregation(
        meta=replace(week_meta, projects=list(projects)),
        content=content,
        projects=projects,
        highlights=highlights,
        daily_summaries=summaries,
    )


def render_weekly_content(
    week: str,
    projects: list[str],
    highlights: list[HighlightEntry],
    summaries: list[DailySummary],
    title_suffix: str = DEFAULT_TITLE_SUFFIX,
) -> str:
    """Render the weekly report body in its fixed section layout."""
    lines = [
        f"# Week {week} {title_suffix}",
        "",
        f"## {SUMMARY_HEADING}",
        "",
        "",
        f"## {HIGHLIGHTS_HEADING}",
        "",
    ]

    if highlights:
        for highlight in highlights:
            lines.extend(_format_highlight(highlight))
    else:
        lines.extend([NO_HIGHLIGHTS, ""])

    lines.extend([f"## {PROJECT_PROGRESS_HEADING}", ""])
    if projects:
        for project in projects:
            lines.extend(_format_project(project))
    else:
        lines.extend([NO_PROJECTS, ""])

    lines.extend([f"## {DAILY_SUMMARIES_HEADING}", ""])
    if summaries:
        for summary in summaries:
            lines.extend(_format_summary(summary))
    else:
        lines.extend([NO_DAILIES, ""])

    lines.extend([
        f"## {RISKS_HEADING}",
        "-",
        "",
        f"## {NEXT_WEEK_HEADING}",
        "-",
        "",
    ])

    return "\n".join(lines)


def _format_highlight(highlight: HighlightEntry) -> list[str]:
    return [f"### {highlight.date}", "", highlight.content, ""]


def _format_project(project: str) -> list[str]:
    lines = [f"### {project}"]
    lines.extend(f"- {placeholder}" for placeholder in PROGRESS_PLACEHOLDERS)
    lines.append("")
    return lines


def _format_summary(summary: DailySummary) -> list[str]:
    heading = f"### {summary.date}"
    if summary.is_highlight:
        heading += f" {HIGHLIGHT_MARK}"
    if summary.projects:
        heading += f" [{', '.join(summary.projects)}]"

    return [heading, "", summary.excerpt or NO_CONTENT, ""]
