"""Workspace directory store for daily logs, weekly reports and projects."""

import logging
import re
from pathlib import Path
from typing import Callable, Optional, TypeVar

from worklog.config import DirectoriesConfig
from worklog.core.entities import DailyLog, Document, DocumentKind, Project, WeeklyReport
from worklog.core.errors import ParseError, WorklogError
from worklog.core.frontmatter import (
    parse_daily,
    parse_project,
    parse_weekly,
    serialize_document,
)
from worklog.core.interfaces import DocumentStore
from worklog.core.templates import get_builtin_template

logger = logging.getLogger(__name__)

T = TypeVar("T")

TEMPLATE_FILES = {
    DocumentKind.DAILY: "daily.md",
    DocumentKind.WEEKLY: "weekly.md",
    DocumentKind.PROJECT: "project.md",
}


def slugify(name: str) -> str:
    """Turn a project name into a file stem; non-ASCII letters are kept."""
    slug = name.strip().lower()
    slug = re.sub(r"[\s_]+", "-", slug)
    slug = re.sub(r"[^\w-]", "", slug)
    slug = re.sub(r"-{2,}", "-", slug)
    return slug.strip("-")


def document_key(document: Document) -> str:
    """The key a document is filed under: date, week or project name."""
    if isinstance(document, DailyLog):
        return document.meta.date
    if isinstance(document, WeeklyReport):
        return document.meta.week
    return document.meta.project.name


class WorkspaceStore(DocumentStore):
    """Store documents as Markdown files under a workspace directory."""

    def __init__(self, root: Path, directories: Optional[DirectoriesConfig] = None) -> None:
        self.root = root
        self.directories = directories or DirectoriesConfig()

    @property
    def daily_dir(self) -> Path:
        return self.root / self.directories.daily

    @property
    def weekly_dir(self) -> Path:
        return self.root / self.directories.weekly

    @property
    def projects_dir(self) -> Path:
        return self.root / self.directories.projects

    @property
    def templates_dir(self) -> Path:
        return self.root / self.directories.templates

    def ensure_structure(self) -> None:
        """Create the workspace directories."""
        for directory in (self.daily_dir, self.weekly_dir, self.projects_dir, self.templates_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def install_templates(self, overwrite: bool = False) -> list[Path]:
        """Copy the built-in templates into the workspace for editing."""
        written = []
        self.templates_dir.mkdir(parents=True, exist_ok=True)
        for kind, filename in TEMPLATE_FILES.items():
            path = self.templates_dir / filename
            if path.exists() and not overwrite:
                continue
            path.write_text(get_builtin_template(kind), encoding="utf-8")
            written.append(path)
        return written

    # Paths

    def daily_path(self, date: str) -> Path:
        return self.daily_dir / f"{date}.md"

    def weekly_path(self, week: str) -> Path:
        return self.weekly_dir / f"{week}.md"

    def project_path(self, name: str) -> Path:
        slug = slugify(name)
        if not slug:
            raise WorklogError(f"Project name has no usable characters: {name!r}")
        return self.projects_dir / f"{slug}.md"

    def template_path(self, kind: DocumentKind) -> Path:
        return self.templates_dir / TEMPLATE_FILES[DocumentKind(kind)]

    def path_for(self, kind: DocumentKind, key: str) -> Path:
        kind = DocumentKind(kind)
        if kind == DocumentKind.DAILY:
            return self.daily_path(key)
        if kind == DocumentKind.WEEKLY:
            return self.weekly_path(key)
        return self.project_path(key)

    # DocumentStore

    def exists(self, kind: DocumentKind, key: str) -> bool:
        return self.path_for(kind, key).exists()

    def write(self, document: Document) -> Path:
        path = self.path_for(document.kind, document_key(document))
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(serialize_document(document))
        logger.debug("Wrote %s %s", document.kind.value, path)
        return path

    def delete(self, kind: DocumentKind, key: str) -> bool:
        path = self.path_for(kind, key)
        if not path.exists():
            return False
        path.unlink()
        logger.debug("Deleted %s", path)
        return True

    def read_daily(self, date: str) -> Optional[DailyLog]:
        return self._read(self.daily_path(date), parse_daily)

    def read_weekly(self, week: str) -> Optional[WeeklyReport]:
        return self._read(self.weekly_path(week), parse_weekly)

    def read_project(self, name: str) -> Optional[Project]:
        return self._read(self.project_path(name), parse_project)

    def list_dailies(self) -> list[DailyLog]:
        dailies = self._load_all(self.daily_dir, parse_daily)
        return sorted(dailies, key=lambda daily: daily.meta.date, reverse=True)

    def dailies_in_range(self, start: str, end: str) -> list[DailyLog]:
        """Daily logs whose file date falls in ``start``..``end``, oldest first.

        Files are selected by name so unrelated days are never parsed.
        """
        dailies = []
        if not self.daily_dir.exists():
            return dailies

        for path in sorted(self.daily_dir.glob("*.md")):
            if not start <= path.stem <= end:
                continue
            daily = self._load(path, parse_daily)
            if daily is not None:
                dailies.append(daily)

        return dailies

    def list_weeklies(self) -> list[WeeklyReport]:
        weeklies = self._load_all(self.weekly_dir, parse_weekly)
        return sorted(weeklies, key=lambda weekly: weekly.meta.week, reverse=True)

    def list_projects(self) -> list[Project]:
        projects = self._load_all(self.projects_dir, parse_project)
        return sorted(projects, key=lambda project: project.meta.project.name.lower())

    def load_template(self, kind: DocumentKind) -> str:
        """Workspace template if one exists, otherwise the built-in one."""
        path = self.template_path(kind)
        if path.exists():
            return path.read_text(encoding="utf-8")
        return get_builtin_template(kind)

    # Internals

    def _read(self, path: Path, parser: Callable[[str, Optional[Path]], T]) -> Optional[T]:
        """Read and parse one file; parse errors propagate."""
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return parser(f.read(), path)

    def _load(self, path: Path, parser: Callable[[str, Optional[Path]], T]) -> Optional[T]:
        """Read one file for a listing, skipping it if it does not parse."""
        try:
            return self._read(path, parser)
        except ParseError as e:
            logger.warning("Skipping unparsable file: %s", e)
            return None

    def _load_all(self, directory: Path, parser: Callable[[str, Optional[Path]], T]) -> list[T]:
        if not directory.exists():
            return []

        documents = []
        for path in sorted(directory.glob("*.md")):
            document = self._load(path, parser)
            if document is not None:
                documents.append(document)
        return documents
