"""Core domain layer."""

from worklog.core.entities import (
    DailyLog,
    DailyMeta,
    DailySummary,
    Document,
    DocumentKind,
    GitHubLinks,
    HighlightEntry,
    Project,
    ProjectInfo,
    ProjectMeta,
    ProjectStatus,
    ProjectType,
    Section,
    WeeklyAggregation,
    WeeklyMeta,
    WeeklyReport,
)
from worklog.core.errors import (
    ConfigError,
    DocumentExistsError,
    DocumentNotFoundError,
    ParseError,
    ParseErrorKind,
    WorklogError,
)
from worklog.core.interfaces import DocumentStore

__all__ = [
    "DailyLog",
    "DailyMeta",
    "DailySummary",
    "Document",
    "DocumentKind",
    "GitHubLinks",
    "HighlightEntry",
    "Project",
    "ProjectInfo",
    "ProjectMeta",
    "ProjectStatus",
    "ProjectType",
    "Section",
    "WeeklyAggregation",
    "WeeklyMeta",
    "WeeklyReport",
    "DocumentStore",
    "WorklogError",
    "ParseError",
    "ParseErrorKind",
    "DocumentExistsError",
    "DocumentNotFoundError",
    "ConfigError",
]
