"""CLI entry point for worklog."""

import logging
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

import typer

from worklog.adapters.storage import WorkspaceStore
from worklog.config import Settings, get_settings, save_settings
from worklog.core import ProjectStatus, WorklogError
from worklog.core.frontmatter import serialize_document
from worklog.use_cases import (
    DailyQuery,
    DailyService,
    ProjectQuery,
    ProjectService,
    WeeklyService,
)

app = typer.Typer(help="Daily logs, weekly reports and projects as Markdown files.")
daily_app = typer.Typer(help="Manage daily logs.")
weekly_app = typer.Typer(help="Manage weekly reports.")
project_app = typer.Typer(help="Manage projects.")

app.add_typer(daily_app, name="daily")
app.add_typer(weekly_app, name="weekly")
app.add_typer(project_app, name="project")


@contextmanager
def handle_errors() -> Iterator[None]:
    """Turn domain errors into a red message and exit code 1."""
    try:
        yield
    except WorklogError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _settings(ctx: typer.Context) -> Settings:
    settings = ctx.obj
    if not settings.is_initialized:
        raise WorklogError(
            f"Workspace not initialized: {settings.workspace} (run `worklog init` first)"
        )
    return settings


def _store(settings: Settings) -> WorkspaceStore:
    return WorkspaceStore(settings.workspace, settings.directories)


@app.callback()
def main(
    ctx: typer.Context,
    workspace: Optional[Path] = typer.Option(
        None, "--workspace", "-w", help="Workspace directory (default: nearest initialized one)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Keep daily logs and generate weekly reports from them."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    with handle_errors():
        ctx.obj = get_settings(workspace)


@app.command()
def init(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(None, help="Directory to initialize"),
    name: Optional[str] = typer.Option(None, "--name", help="Workspace name"),
) -> None:
    """Create the workspace directories, templates and config file."""
    with handle_errors():
        settings = get_settings(path) if path is not None else ctx.obj
        if settings.is_initialized:
            raise WorklogError(f"Workspace already initialized: {settings.workspace}")

        settings.name = name or settings.workspace.name
        settings.created_at = datetime.now().isoformat(timespec="seconds")

        store = _store(settings)
        store.ensure_structure()
        store.install_templates()
        config_path = save_settings(settings)

    print(f"✓ Initialized workspace: {settings.workspace}")
    print(f"  • Config: {config_path.name}")
    for directory in (settings.daily_dir, settings.weekly_dir, settings.projects_dir, settings.templates_dir):
        print(f"  • {directory.name}/")


# Daily logs


@daily_app.command("new")
def daily_new(
    ctx: typer.Context,
    day: Optional[str] = typer.Argument(None, help="Date (YYYY-MM-DD), default today"),
    projects: Optional[list[str]] = typer.Option(None, "--project", "-p", help="Project name"),
    tags: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Tag"),
) -> None:
    """Create a daily log."""
    with handle_errors():
        service = DailyService(_store(_settings(ctx)))
        daily = service.create_daily(day, projects=projects, tags=tags)

    print(f"✓ Created daily log {daily.meta.date}: {daily.source_path}")


@daily_app.command("show")
def daily_show(
    ctx: typer.Context,
    day: Optional[str] = typer.Argument(None, help="Date (YYYY-MM-DD), default today"),
) -> None:
    """Print a daily log."""
    with handle_errors():
        service = DailyService(_store(_settings(ctx)))
        daily = service.get_daily(day)
        if daily is None:
            raise WorklogError(f"Daily log not found: {day or 'today'}")

    print(serialize_document(daily), end="")


@daily_app.command("list")
def daily_list(
    ctx: typer.Context,
    limit: int = typer.Option(10, "--limit", "-n", help="Maximum number of entries"),
    project: Optional[str] = typer.Option(None, "--project", "-p", help="Only this project"),
    tag: Optional[str] = typer.Option(None, "--tag", "-t", help="Only this tag"),
    highlight: bool = typer.Option(False, "--highlight", help="Only highlighted days"),
) -> None:
    """List daily logs, newest first."""
    with handle_errors():
        service = DailyService(_store(_settings(ctx)))
        query = DailyQuery(project=project, tag=tag, highlight_only=highlight)
        dailies = service.query_dailies(query)[:limit]

    if not dailies:
        print("No daily logs found")
        return

    for daily in dailies:
        mark = "⭐" if daily.meta.is_highlight else "  "
        projects = ", ".join(daily.meta.projects) or "-"
        print(f"{mark} {daily.meta.date}  [{daily.meta.week}]  {projects}")


@daily_app.command("highlight")
def daily_highlight(
    ctx: typer.Context,
    day: Optional[str] = typer.Argument(None, help="Date (YYYY-MM-DD), default today"),
    off: bool = typer.Option(False, "--off", help="Remove the highlight"),
) -> None:
    """Mark a day for the weekly report's highlights."""
    with handle_errors():
        service = DailyService(_store(_settings(ctx)))
        daily = service.set_highlight(day, not off)

    state = "highlighted" if daily.meta.is_highlight else "not highlighted"
    print(f"✓ {daily.meta.date} is {state}")


@daily_app.command("link")
def daily_link(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="GitHub issue or pull request URL"),
    day: Optional[str] = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD), default today"),
) -> None:
    """Attach a GitHub issue or pull request to a day."""
    with handle_errors():
        service = DailyService(_store(_settings(ctx)))
        daily = service.add_github_link(day, url)

    print(f"✓ Linked to {daily.meta.date}")
    print(f"  • Issues: {len(daily.meta.github.issues)}")
    print(f"  • PRs: {len(daily.meta.github.prs)}")


@daily_app.command("tag")
def daily_tag(
    ctx: typer.Context,
    tag: str = typer.Argument(..., help="Tag, with or without a leading #"),
    day: Optional[str] = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD), default today"),
) -> None:
    """Add a tag to a day."""
    with handle_errors():
        service = DailyService(_store(_settings(ctx)))
        daily = service.add_tag(day, tag)

    print(f"✓ Tags for {daily.meta.date}: {', '.join(daily.meta.tags)}")


# Weekly reports


def _weekly_service(settings: Settings) -> WeeklyService:
    return WeeklyService(_store(settings), settings.report)


@weekly_app.command("new")
def weekly_new(
    ctx: typer.Context,
    week: Optional[str] = typer.Argument(None, help="ISO week (YYYY-Www), default current"),
    aggregate: bool = typer.Option(False, "--aggregate", help="Fill from the week's daily logs"),
) -> None:
    """Create a weekly report."""
    with handle_errors():
        service = _weekly_service(_settings(ctx))
        weekly = service.create_weekly(week, auto_aggregate=aggregate)

    print(f"✓ Created weekly report {weekly.meta.week}: {weekly.source_path}")


@weekly_app.command("generate")
def weekly_generate(
    ctx: typer.Context,
    week: Optional[str] = typer.Argument(None, help="ISO week (YYYY-Www), default current"),
) -> None:
    """Regenerate a weekly report from daily logs, keeping edited sections."""
    with handle_errors():
        service = _weekly_service(_settings(ctx))
        weekly, aggregation = service.generate_weekly(week)

    print(f"✓ Generated weekly report {weekly.meta.week}: {weekly.source_path}")
    print(f"  • Period: {weekly.meta.start_date} - {weekly.meta.end_date}")
    print(f"  • Daily logs: {len(aggregation.daily_summaries)}")
    print(f"  • Highlights: {len(aggregation.highlights)}")
    print(f"  • Projects: {', '.join(weekly.meta.projects) or '-'}")


@weekly_app.command("show")
def weekly_show(
    ctx: typer.Context,
    week: Optional[str] = typer.Argument(None, help="ISO week (YYYY-Www), default current"),
) -> None:
    """Print a weekly report."""
    with handle_errors():
        service = _weekly_service(_settings(ctx))
        weekly = service.get_weekly(week)
        if weekly is None:
            raise WorklogError(f"Weekly report not found: {week or 'current week'}")

    print(serialize_document(weekly), end="")


@weekly_app.command("list")
def weekly_list(
    ctx: typer.Context,
    limit: int = typer.Option(10, "--limit", "-n", help="Maximum number of entries"),
) -> None:
    """List weekly reports, newest first."""
    with handle_errors():
        weeklies = _weekly_service(_settings(ctx)).list_weeklies(limit)

    if not weeklies:
        print("No weekly reports found")
        return

    for weekly in weeklies:
        projects = ", ".join(weekly.meta.projects) or "-"
        print(f"{weekly.meta.week}  {weekly.meta.start_date} - {weekly.meta.end_date}  {projects}")


# Projects


@project_app.command("new")
def project_new(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Project name"),
    repo: str = typer.Option(..., "--repo", "-r", help="GitHub repository (owner/repo or URL)"),
    project_type: str = typer.Option("software", "--type", help="software, research, hybrid or misc"),
    status: str = typer.Option(ProjectStatus.PLANNING.value, "--status", help="Initial status"),
) -> None:
    """Create a project file."""
    with handle_errors():
        service = ProjectService(_store(_settings(ctx)))
        project = service.create_project(name, repo, project_type=project_type, status=status)

    print(f"✓ Created project {project.meta.project.name}: {project.source_path}")


@project_app.command("list")
def project_list(
    ctx: typer.Context,
    status: Optional[str] = typer.Option(None, "--status", help="Only this status"),
) -> None:
    """List projects."""
    with handle_errors():
        service = ProjectService(_store(_settings(ctx)))
        projects = service.query_projects(ProjectQuery(status=status))

    if not projects:
        print("No projects found")
        return

    for project in projects:
        info = project.meta.project
        print(f"{info.name}  [{info.status}]  {info.type}  {info.github_repo}")


@project_app.command("status")
def project_status(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Project name"),
    status: str = typer.Argument(..., help="Planning, Doing, Blocked or Done"),
) -> None:
    """Change a project's status."""
    with handle_errors():
        service = ProjectService(_store(_settings(ctx)))
        project = service.update_status(name, status)

    print(f"✓ {project.meta.project.name} is now {project.meta.project.status}")


if __name__ == "__main__":
    app()
