"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from worklog.core.entities import DailyLog, Document, DocumentKind, Project, WeeklyReport


class DocumentStore(ABC):
    """Interface for persisting workspace documents."""

    @abstractmethod
    def exists(self, kind: DocumentKind, key: str) -> bool:
        """Check whether the document identified by ``key`` is present."""
        pass

    @abstractmethod
    def write(self, document: Document) -> Path:
        """Persist a document and return where it was written."""
        pass

    @abstractmethod
    def delete(self, kind: DocumentKind, key: str) -> bool:
        """Remove a document; returns False if it did not exist."""
        pass

    @abstractmethod
    def read_daily(self, date: str) -> Optional[DailyLog]:
        """Read the daily log of a date."""
        pass

    @abstractmethod
    def read_weekly(self, week: str) -> Optional[WeeklyReport]:
        """Read the weekly report of an ISO week."""
        pass

    @abstractmethod
    def read_project(self, name: str) -> Optional[Project]:
        """Read a project by name."""
        pass

    @abstractmethod
    def list_dailies(self) -> list[DailyLog]:
        """All daily logs, newest first."""
        pass

    @abstractmethod
    def dailies_in_range(self, start: str, end: str) -> list[DailyLog]:
        """Daily logs dated within ``start``..``end`` inclusive."""
        pass

    @abstractmethod
    def list_weeklies(self) -> list[WeeklyReport]:
        """All weekly reports, newest first."""
        pass

    @abstractmethod
    def list_projects(self) -> list[Project]:
        """All projects."""
        pass

    @abstractmethod
    def load_template(self, kind: DocumentKind) -> str:
        """Template text used to create a new document of ``kind``."""
        pass
