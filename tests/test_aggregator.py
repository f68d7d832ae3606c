"""Tests for weekly aggregation."""

from typing import Optional

from worklog.core import DailyLog, DailyMeta, WeeklyMeta
from worklog.core.aggregator import aggregate, create_daily_summary

WEEK = WeeklyMeta(week="2026-W03", start_date="2026-01-12", end_date="2026-01-18")


def make_daily(
    day: str,
    body: str = "",
    projects: Optional[list[str]] = None,
    is_highlight: bool = False,
) -> DailyLog:
    return DailyLog(
        meta=DailyMeta(
            date=day,
            week="2026-W03",
            projects=projects or [],
            is_highlight=is_highlight,
        ),
        body=body,
    )


def test_empty_aggregation() -> None:
    """No daily logs still yields a complete report of fallback sentences."""
    result = aggregate([], WEEK)

    assert result.projects == []
    assert result.highlights == []
    assert result.daily_summaries == []
    assert "no Daily Logs this week" in result.content
    assert "*There are no highlighted entries this week*" in result.content
    assert "*There are no associated projects this week*" in result.content
    assert result.content.startswith("# Week 2026-W03 Weekly Report\n")


def test_empty_aggregation_layout() -> None:
    """The section layout is fixed."""
    result = aggregate([], WEEK)

    assert result.content == (
        "# Week 2026-W03 Weekly Report\n"
        "\n"
        "## Summary (one sentence)\n"
        "\n"
        "\n"
        "## Highlights\n"
        "\n"
        "*There are no highlighted entries this week*\n"
        "\n"
        "## Project Progress\n"
        "\n"
        "*There are no associated projects this week*\n"
        "\n"
        "## Daily Summaries\n"
        "\n"
        "*There are no Daily Logs this week*\n"
        "\n"
        "## Risks & Blockers\n"
        "-\n"
        "\n"
        "## Next Week Plan\n"
        "-\n"
    )


def test_highlight_selection() -> None:
    """Only highlighted days appear under Highlights."""
    dailies = [
        make_daily("2026-01-15", "## Completed\n- Big release", is_highlight=True),
        make_daily("2026-01-16", "## Completed\n- Small fix"),
    ]
    result = aggregate(dailies, WEEK)

    assert len(result.highlights) == 1
    assert result.highlights[0].date == "2026-01-15"
    assert result.highlights[0].content == "- Big release"
    assert "Week 2026-W03" in result.content


def test_projects_in_first_appearance_order() -> None:
    """Projects are collected in date order without duplicates."""
    dailies = [
        make_daily("2026-01-14", projects=["beta", "alpha"]),
        make_daily("2026-01-12", projects=["alpha"]),
        make_daily("2026-01-13", projects=["gamma", "alpha"]),
    ]
    result = aggregate(dailies, WEEK)

    assert result.projects == ["alpha", "gamma", "beta"]
    assert result.meta.projects == ["alpha", "gamma", "beta"]
    assert "### alpha\n- Progress this week:\n- Current status:\n- Next week plan:" in result.content


def test_daily_summaries_sorted_by_date() -> None:
    dailies = [make_daily("2026-01-14"), make_daily("2026-01-12")]
    result = aggregate(dailies, WEEK)

    assert [s.date for s in result.daily_summaries] == ["2026-01-12", "2026-01-14"]
    assert result.content.index("### 2026-01-12") < result.content.index("### 2026-01-14")


def test_summary_heading_marks_highlight_and_projects() -> None:
    daily = make_daily("2026-01-15", "# Day\n\nWorked", projects=["alpha", "beta"], is_highlight=True)
    result = aggregate([daily], WEEK)

    assert "### 2026-01-15 ⭐ [alpha, beta]\n\nWorked\n" in result.content


def test_empty_body_summary() -> None:
    result = aggregate([make_daily("2026-01-12")], WEEK)
    assert "### 2026-01-12\n\n*no content*\n" in result.content


def test_custom_title_and_excerpt_length() -> None:
    result = aggregate([make_daily("2026-01-12", "x" * 50)], WEEK, title_suffix="Report", excerpt_length=10)

    assert result.content.startswith("# Week 2026-W03 Report\n")
    assert result.daily_summaries[0].excerpt == "x" * 10 + "..."


def test_aggregate_does_not_modify_week_meta() -> None:
    meta = WeeklyMeta(week="2026-W03", start_date="2026-01-12", end_date="2026-01-18")
    aggregate([make_daily("2026-01-12", projects=["alpha"])], meta)
    assert meta.projects == []


def test_create_daily_summary() -> None:
    daily = make_daily("2026-01-12", "## Completed\n- one", projects=["alpha"])
    summary = create_daily_summary(daily)

    assert summary.date == "2026-01-12"
    assert summary.projects == ["alpha"]
    assert summary.is_highlight is False
    assert summary.excerpt == "- one"
