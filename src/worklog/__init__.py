"""Daily logs, weekly reports and projects kept as Markdown files."""

__version__ = "0.1.0"
