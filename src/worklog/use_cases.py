"""Business logic use cases."""

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional, Union

from worklog.config import ReportConfig
from worklog.core import (
    DailyLog,
    DocumentExistsError,
    DocumentKind,
    DocumentNotFoundError,
    DocumentStore,
    ParseError,
    Project,
    ProjectInfo,
    ProjectMeta,
    ProjectStatus,
    ProjectType,
    WeeklyAggregation,
    WeeklyMeta,
    WeeklyReport,
    WorklogError,
)
from worklog.core.aggregator import aggregate
from worklog.core.frontmatter import normalize_date, parse_daily, parse_weekly, split_frontmatter
from worklog.core.github_links import normalize_repo_url, parse_link_url
from worklog.core.merge import merge_weekly_content
from worklog.core.templates import (
    date_variables,
    project_variables,
    replace_variables,
    week_variables,
)
from worklog.core.weeks import format_week, is_valid_week, week_date_range

logger = logging.getLogger(__name__)

DateInput = Union[date, str, None]


def _day(value: DateInput) -> str:
    """Normalize a date argument; today when omitted."""
    if value is None:
        return date.today().isoformat()
    return normalize_date(value)


def _week(value: Optional[str]) -> str:
    """Validate a week argument; the current week when omitted."""
    if value is None:
        return format_week()
    if not is_valid_week(value):
        raise ParseError.invalid_date(value, "week")
    return value


def _unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(value.strip() for value in values if value and value.strip()))


@dataclass
class DailyQuery:
    """Filter for daily logs. Unset fields match everything."""

    start_date: Optional[str] = None
    end_date: Optional[str] = None
    project: Optional[str] = None
    tag: Optional[str] = None
    highlight_only: bool = False

    def matches(self, daily: DailyLog) -> bool:
        if self.start_date and daily.meta.date < self.start_date:
            return False
        if self.end_date and daily.meta.date > self.end_date:
            return False
        if self.project and self.project not in daily.meta.projects:
            return False
        if self.tag and self.tag.lstrip("#") not in daily.meta.tags:
            return False
        if self.highlight_only and not daily.meta.is_highlight:
            return False
        return True


@dataclass
class ProjectQuery:
    """Filter for projects. Unset fields match everything."""

    status: Optional[str] = None
    type: Optional[str] = None
    name_contains: Optional[str] = None

    def matches(self, project: Project) -> bool:
        info = project.meta.project
        if self.status and info.status != self.status:
            return False
        if self.type and info.type != self.type:
            return False
        if self.name_contains and self.name_contains.lower() not in info.name.lower():
            return False
        return True


@dataclass
class DailyStats:
    """Counts over all daily logs."""

    total: int = 0
    this_week: int = 0
    this_month: int = 0
    highlights: int = 0
    projects: dict[str, int] = field(default_factory=dict)
    tags: dict[str, int] = field(default_factory=dict)


@dataclass
class WeeklyStats:
    """Counts over all weekly reports."""

    total: int = 0
    this_year: int = 0
    projects: dict[str, int] = field(default_factory=dict)


class DailyService:
    """Service for creating and editing daily logs."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def _save(self, daily: DailyLog) -> DailyLog:
        path = self.store.write(daily)
        return replace(daily, source_path=path)

    def _require(self, day: DateInput) -> DailyLog:
        key = _day(day)
        daily = self.store.read_daily(key)
        if daily is None:
            raise DocumentNotFoundError(f"Daily log not found: {key}")
        return daily

    def create_daily(
        self,
        day: DateInput = None,
        projects: Optional[list[str]] = None,
        tags: Optional[list[str]] = None,
    ) -> DailyLog:
        """Create a daily log from the template.

        Raises:
            DocumentExistsError: If a log for that date already exists.
        """
        key = _day(day)
        if self.store.exists(DocumentKind.DAILY, key):
            raise DocumentExistsError(f"Daily log already exists: {key}")

        template = self.store.load_template(DocumentKind.DAILY)
        daily = parse_daily(replace_variables(template, date_variables(key)))
        if projects:
            daily.meta.projects = _unique(projects)
        if tags:
            daily.meta.tags = _unique([tag.lstrip("#") for tag in tags])

        logger.info("Creating daily log %s", key)
        return self._save(daily)

    def get_daily(self, day: DateInput = None) -> Optional[DailyLog]:
        return self.store.read_daily(_day(day))

    def get_or_create_today(self) -> DailyLog:
        daily = self.get_daily()
        if daily is not None:
            return daily
        return self.create_daily()

    def update_daily(
        self,
        day: DateInput,
        body: Optional[str] = None,
        projects: Optional[list[str]] = None,
        tags: Optional[list[str]] = None,
        is_highlight: Optional[bool] = None,
    ) -> DailyLog:
        """Replace the given parts of an existing daily log."""
        daily = self._require(day)
        if body is not None:
            daily.body = body.strip()
        if projects is not None:
            daily.meta.projects = _unique(projects)
        if tags is not None:
            daily.meta.tags = _unique([tag.lstrip("#") for tag in tags])
        if is_highlight is not None:
            daily.meta.is_highlight = is_highlight
        return self._save(daily)

    def delete_daily(self, day: DateInput) -> None:
        key = _day(day)
        if not self.store.delete(DocumentKind.DAILY, key):
            raise DocumentNotFoundError(f"Daily log not found: {key}")

    def list_dailies(self, limit: Optional[int] = None) -> list[DailyLog]:
        """Daily logs, newest first."""
        dailies = self.store.list_dailies()
        return dailies[:limit] if limit else dailies

    def query_dailies(self, query: DailyQuery) -> list[DailyLog]:
        return [daily for daily in self.store.list_dailies() if query.matches(daily)]

    def add_project(self, day: DateInput, project: str) -> DailyLog:
        daily = self._require(day)
        daily.meta.projects = _unique(daily.meta.projects + [project])
        return self._save(daily)

    def remove_project(self, day: DateInput, project: str) -> DailyLog:
        daily = self._require(day)
        daily.meta.projects = [p for p in daily.meta.projects if p != project]
        return self._save(daily)

    def add_tag(self, day: DateInput, tag: str) -> DailyLog:
        daily = self._require(day)
        daily.meta.tags = _unique(daily.meta.tags + [tag.lstrip("#")])
        return self._save(daily)

    def add_github_link(self, day: DateInput, url: str) -> DailyLog:
        """Attach an issue or pull request link; the URL decides which list."""
        link = parse_link_url(url)
        if link is None:
            raise WorklogError(f"Not a GitHub issue or pull request URL: {url}")

        daily = self._require(day)
        if link.is_pull_request:
            daily.meta.github.prs = _unique(daily.meta.github.prs + [link.url])
        else:
            daily.meta.github.issues = _unique(daily.meta.github.issues + [link.url])
        return self._save(daily)

    def set_highlight(self, day: DateInput, is_highlight: bool = True) -> DailyLog:
        daily = self._require(day)
        daily.meta.is_highlight = is_highlight
        return self._save(daily)

    def get_stats(self, today: Optional[date] = None) -> DailyStats:
        today = today or date.today()
        week = format_week(today)
        month = today.isoformat()[:7]
        dailies = self.store.list_dailies()

        projects: Counter = Counter()
        tags: Counter = Counter()
        for daily in dailies:
            projects.update(daily.meta.projects)
            tags.update(daily.meta.tags)

        return DailyStats(
            total=len(dailies),
            this_week=sum(1 for d in dailies if d.meta.week == week),
            this_month=sum(1 for d in dailies if d.meta.date.startswith(month)),
            highlights=sum(1 for d in dailies if d.meta.is_highlight),
            projects=dict(projects.most_common()),
            tags=dict(tags.most_common()),
        )


class WeeklyService:
    """Service for building weekly reports from daily logs."""

    def __init__(self, store: DocumentStore, report: Optional[ReportConfig] = None) -> None:
        self.store = store
        self.report = report or ReportConfig()

    def _save(self, weekly: WeeklyReport) -> WeeklyReport:
        path = self.store.write(weekly)
        return replace(weekly, source_path=path)

    def create_weekly(self, week: Optional[str] = None, auto_aggregate: bool = False) -> WeeklyReport:
        """Create a weekly report from the template.

        With ``auto_aggregate`` the body is generated from the week's daily
        logs instead.

        Raises:
            DocumentExistsError: If a report for that week already exists.
        """
        key = _week(week)
        if self.store.exists(DocumentKind.WEEKLY, key):
            raise DocumentExistsError(f"Weekly report already exists: {key}")

        if auto_aggregate:
            aggregation = self.aggregate_week(key)
            weekly = WeeklyReport(meta=aggregation.meta, body=aggregation.content.strip())
        else:
            template = self.store.load_template(DocumentKind.WEEKLY)
            weekly = parse_weekly(replace_variables(template, week_variables(key)))

        logger.info("Creating weekly report %s", key)
        return self._save(weekly)

    def get_weekly(self, week: Optional[str] = None) -> Optional[WeeklyReport]:
        return self.store.read_weekly(_week(week))

    def list_weeklies(self, limit: Optional[int] = None) -> list[WeeklyReport]:
        """Weekly reports, newest first."""
        weeklies = self.store.list_weeklies()
        return weeklies[:limit] if limit else weeklies

    def delete_weekly(self, week: str) -> None:
        key = _week(week)
        if not self.store.delete(DocumentKind.WEEKLY, key):
            raise DocumentNotFoundError(f"Weekly report not found: {key}")

    def dailies_for_week(self, week: Optional[str] = None) -> list[DailyLog]:
        start, end = week_date_range(_week(week))
        return self.store.dailies_in_range(start, end)

    def aggregate_week(self, week: Optional[str] = None) -> WeeklyAggregation:
        key = _week(week)
        start, end = week_date_range(key)
        dailies = self.store.dailies_in_range(start, end)
        logger.debug("Aggregating %d daily logs for %s", len(dailies), key)
        return aggregate(
            dailies,
            WeeklyMeta(week=key, start_date=start, end_date=end),
            title_suffix=self.report.title_suffix,
            excerpt_length=self.report.excerpt_length,
        )

    def generate_weekly(
        self, week: Optional[str] = None
    ) -> tuple[WeeklyReport, WeeklyAggregation]:
        """Regenerate a weekly report, keeping hand-written sections.

        Creates the report when absent. Concurrent runs for the same week
        are last-write-wins.

        Returns:
            The saved report and the aggregation it was built from.
        """
        aggregation = self.aggregate_week(week)
        existing = self.store.read_weekly(aggregation.meta.week)

        if existing is None:
            weekly = WeeklyReport(meta=aggregation.meta, body=aggregation.content.strip())
        else:
            weekly = WeeklyReport(
                meta=replace(
                    existing.meta,
                    start_date=aggregation.meta.start_date,
                    end_date=aggregation.meta.end_date,
                    projects=list(aggregation.projects),
                ),
                body=merge_weekly_content(existing.body, aggregation).strip(),
            )

        logger.info(
            "Generated weekly report %s from %d daily logs",
            aggregation.meta.week,
            len(aggregation.daily_summaries),
        )
        return self._save(weekly), aggregation

    def get_stats(self, today: Optional[date] = None) -> WeeklyStats:
        today = today or date.today()
        year = str(today.isocalendar()[0])
        weeklies = self.store.list_weeklies()

        projects: Counter = Counter()
        for weekly in weeklies:
            projects.update(weekly.meta.projects)

        return WeeklyStats(
            total=len(weeklies),
            this_year=sum(1 for w in weeklies if w.meta.week.startswith(year)),
            projects=dict(projects.most_common()),
        )


class ProjectService:
    """Service for project files."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def _save(self, project: Project) -> Project:
        path = self.store.write(project)
        return replace(project, source_path=path)

    def _require(self, name: str) -> Project:
        project = self.store.read_project(name)
        if project is None:
            raise DocumentNotFoundError(f"Project not found: {name}")
        return project

    def create_project(
        self,
        name: str,
        github_repo: str,
        project_type: str = ProjectType.SOFTWARE.value,
        status: str = ProjectStatus.PLANNING.value,
        start_date: DateInput = None,
    ) -> Project:
        """Create a project file.

        Raises:
            DocumentExistsError: If a project with that name already exists.
            WorklogError: If the name or repository is blank, the name has no
                usable characters, or the type or status is not a known value.
        """
        name = name.strip()
        if not name:
            raise WorklogError("Project name cannot be empty")
        if not github_repo.strip():
            raise WorklogError("GitHub repository cannot be empty")
        if self.store.exists(DocumentKind.PROJECT, name):
            raise DocumentExistsError(f"Project already exists: {name}")

        info = ProjectInfo(
            name=name,
            github_repo=normalize_repo_url(github_repo),
            start_date=_day(start_date),
            type=_project_type(project_type),
            status=_project_status(status),
        )

        # Metadata is built directly so names never pass through YAML text
        template = self.store.load_template(DocumentKind.PROJECT)
        _, body = split_frontmatter(template)
        variables = project_variables(info.name, info.github_repo, info.start_date)

        logger.info("Creating project %s", name)
        return self._save(Project(meta=ProjectMeta(info), body=replace_variables(body, variables)))

    def get_project(self, name: str) -> Optional[Project]:
        return self.store.read_project(name)

    def list_projects(self) -> list[Project]:
        return self.store.list_projects()

    def query_projects(self, query: ProjectQuery) -> list[Project]:
        return [project for project in self.store.list_projects() if query.matches(project)]

    def update_status(self, name: str, status: str) -> Project:
        """Change the status; moving to Done stamps the end date."""
        project = self._require(name)
        info = project.meta.project
        info.status = _project_status(status)
        if info.status == ProjectStatus.DONE.value:
            info.end_date = info.end_date or date.today().isoformat()
        else:
            info.end_date = None
        return self._save(project)

    def delete_project(self, name: str) -> None:
        if not self.store.delete(DocumentKind.PROJECT, name):
            raise DocumentNotFoundError(f"Project not found: {name}")


def _project_type(value: str) -> str:
    try:
        return ProjectType(value.lower()).value
    except ValueError:
        choices = ", ".join(t.value for t in ProjectType)
        raise WorklogError(f"Invalid project type: {value} (expected one of {choices})") from None


def _project_status(value: str) -> str:
    for status in ProjectStatus:
        if status.value.lower() == value.lower():
            return status.value
    choices = ", ".join(s.value for s in ProjectStatus)
    raise WorklogError(f"Invalid project status: {value} (expected one of {choices})")
