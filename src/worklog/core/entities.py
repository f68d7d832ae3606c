"""Core domain entities."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Optional, Union


class DocumentKind(str, Enum):
    """Kind of workspace document."""

    DAILY = "daily"
    WEEKLY = "weekly"
    PROJECT = "project"


class ProjectStatus(str, Enum):
    """Lifecycle status of a project."""

    PLANNING = "Planning"
    DOING = "Doing"
    BLOCKED = "Blocked"
    DONE = "Done"


class ProjectType(str, Enum):
    """Kind of project."""

    SOFTWARE = "software"
    RESEARCH = "research"
    HYBRID = "hybrid"
    MISC = "misc"


def _yaml_date(value: str) -> Union[date, str]:
    """Emit ISO strings as YAML dates so they are written unquoted."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        return value


@dataclass
class GitHubLinks:
    """Issue and pull request links attached to a daily log."""

    issues: list[str] = field(default_factory=list)
    prs: list[str] = field(default_factory=list)


@dataclass
class DailyMeta:
    """Frontmatter of a daily log."""

    date: str
    week: str
    projects: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    is_highlight: bool = False
    github: GitHubLinks = field(default_factory=GitHubLinks)

    def __post_init__(self) -> None:
        if not self.date:
            raise ValueError("Date cannot be empty")

    def to_frontmatter(self) -> dict[str, Any]:
        return {
            "date": _yaml_date(self.date),
            "type": DocumentKind.DAILY.value,
            "week": self.week,
            "projects": list(self.projects),
            "tags": list(self.tags),
            "weekly_highlight": self.is_highlight,
            "github": {
                "issues": list(self.github.issues),
                "prs": list(self.github.prs),
            },
        }


@dataclass
class WeeklyMeta:
    """Frontmatter of a weekly report."""

    week: str
    start_date: str
    end_date: str
    projects: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.week:
            raise ValueError("Week cannot be empty")

    def to_frontmatter(self) -> dict[str, Any]:
        return {
            "week": self.week,
            "type": DocumentKind.WEEKLY.value,
            "start_date": _yaml_date(self.start_date),
            "end_date": _yaml_date(self.end_date),
            "projects": list(self.projects),
        }


@dataclass
class ProjectInfo:
    """The ``project`` mapping of a project file."""

    name: str
    github_repo: str
    start_date: str
    type: str = ProjectType.SOFTWARE.value
    status: str = ProjectStatus.PLANNING.value
    end_date: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Project name cannot be empty")


@dataclass
class ProjectMeta:
    """Frontmatter of a project file."""

    project: ProjectInfo

    def to_frontmatter(self) -> dict[str, Any]:
        info: dict[str, Any] = {
            "name": self.project.name,
            "type": self.project.type,
            "github_repo": self.project.github_repo,
            "status": self.project.status,
            "start_date": _yaml_date(self.project.start_date),
        }
        if self.project.end_date:
            info["end_date"] = _yaml_date(self.project.end_date)
        return {"project": info}


@dataclass
class DailyLog:
    """One record per calendar date."""

    kind: ClassVar[DocumentKind] = DocumentKind.DAILY

    meta: DailyMeta
    body: str = ""
    source_path: Optional[Path] = None


@dataclass
class WeeklyReport:
    """One record per ISO week."""

    kind: ClassVar[DocumentKind] = DocumentKind.WEEKLY

    meta: WeeklyMeta
    body: str = ""
    source_path: Optional[Path] = None


@dataclass
class Project:
    """Project description file."""

    kind: ClassVar[DocumentKind] = DocumentKind.PROJECT

    meta: ProjectMeta
    body: str = ""
    source_path: Optional[Path] = None


Document = Union[DailyLog, WeeklyReport, Project]


@dataclass
class Section:
    """A heading and the lines up to the next heading."""

    title: str
    level: int
    lines: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(self.lines).strip()


@dataclass
class HighlightEntry:
    """Highlighted daily content rendered into a weekly report."""

    date: str
    content: str


@dataclass
class DailySummary:
    """Per-day projection shown in a weekly report."""

    date: str
    projects: list[str]
    tags: list[str]
    is_highlight: bool
    excerpt: str


@dataclass
class WeeklyAggregation:
    """Result of aggregating a week's daily logs."""

    meta: WeeklyMeta
    content: str
    projects: list[str]
    highlights: list[HighlightEntry]
    daily_summaries: list[DailySummary]
