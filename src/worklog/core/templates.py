"""Built-in document templates and ``{{VARIABLE}}`` substitution."""

import re
from datetime import date
from typing import Optional, Union

from worklog.core.entities import DocumentKind
from worklog.core.weeks import format_date, format_week, week_date_range

VARIABLE_PATTERN = re.compile(r"\{\{(\w+)\}\}")

DAILY_TEMPLATE = """---
date: {{DATE}}
type: daily
week: {{WEEK}}
projects: []
tags: []
weekly_highlight: false
github:
  issues: []
  prs: []
---

# {{DATE}} Daily Log

## Plan
- [ ]

## Completed
-

## Project Progress
-

## Issues / Risks
-

## Notes
-
"""

WEEKLY_TEMPLATE = """---
week: {{WEEK}}
type: weekly
start_date: {{WEEK_START}}
end_date: {{WEEK_END}}
projects: []
---

# Week {{WEEK}} Weekly Report

## Summary (one sentence)


## Highlights

## Project Progress

## Risks & Blockers
-

## Next Week Plan
-
"""

PROJECT_TEMPLATE = """---
project:
  name: {{PROJECT_NAME}}
  type: software
  github_repo: {{GITHUB_REPO}}
  status: Planning
  start_date: {{DATE}}
---

# {{PROJECT_NAME}}

## Goals


## Current Stage


## Milestones / Issues
-

## Recent Progress

## Links
- GitHub Repo: {{GITHUB_REPO}}
"""

BUILTIN_TEMPLATES = {
    DocumentKind.DAILY: DAILY_TEMPLATE,
    DocumentKind.WEEKLY: WEEKLY_TEMPLATE,
    DocumentKind.PROJECT: PROJECT_TEMPLATE,
}


def get_builtin_template(kind: DocumentKind) -> str:
    return BUILTIN_TEMPLATES[DocumentKind(kind)]


def replace_variables(template: str, variables: dict[str, str]) -> str:
    """Substitute ``{{NAME}}`` placeholders; unknown names are left as-is."""
    return VARIABLE_PATTERN.sub(
        lambda match: variables.get(match.group(1), match.group(0)), template
    )


def extract_variables(template: str) -> list[str]:
    """List placeholder names in order of first appearance."""
    return list(dict.fromkeys(VARIABLE_PATTERN.findall(template)))


def date_variables(value: Union[date, str, None] = None) -> dict[str, str]:
    day = format_date(value)
    week = format_week(day)
    start, end = week_date_range(week)
    return {
        "DATE": day,
        "YEAR": day[:4],
        "MONTH": day[5:7],
        "DAY": day[8:10],
        "WEEK": week,
        "WEEK_START": start,
        "WEEK_END": end,
    }


def week_variables(week: str) -> dict[str, str]:
    start, end = week_date_range(week)
    return {
        "WEEK": week,
        "YEAR": week[:4],
        "WEEK_START": start,
        "WEEK_END": end,
    }


def project_variables(
    name: str, github_repo: str, start_date: Optional[str] = None
) -> dict[str, str]:
    variables = date_variables(start_date)
    variables.update({"PROJECT_NAME": name, "GITHUB_REPO": github_repo})
    return variables
