"""Merge a regenerated weekly report with the previously saved one.

Only the sections a user writes by hand are carried over; the derived
sections (highlights, project progress, daily summaries) always come from
the fresh aggregation.
"""

from worklog.core.aggregator import NEXT_WEEK_HEADING, RISKS_HEADING, SUMMARY_HEADING
from worklog.core.entities import WeeklyAggregation
from worklog.core.sections import extract_section, replace_section

# Heading -> body the aggregator writes when nothing has been authored.
USER_SECTIONS = (
    (SUMMARY_HEADING, ""),
    (RISKS_HEADING, "-"),
    (NEXT_WEEK_HEADING, "-"),
)


def merge_weekly_content(existing_body: str, fresh: WeeklyAggregation) -> str:
    """Keep authored Summary / Risks / Plan text on top of fresh content.

    A section counts as authored when it is non-empty and differs from the
    placeholder; a user who literally writes the placeholder is
    indistinguishable from one who wrote nothing.
    """
    if not existing_body.strip():
        return fresh.content

    content = fresh.content
    for heading, placeholder in USER_SECTIONS:
        authored = extract_section(existing_body, heading)
        if authored and authored != placeholder:
            content = replace_section(content, heading, authored)

    return content
