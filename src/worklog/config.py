"""Configuration management."""

import os
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from pathlib import Path
from typing import Optional

import yaml

from worklog.core.errors import ConfigError

CONFIG_FILENAME = ".worklog.yaml"
WORKSPACE_ENV_VAR = "WORKLOG_WORKSPACE"
CONFIG_VERSION = "1.0.0"


@dataclass
class DirectoriesConfig:
    """Directory names inside a workspace."""
    daily: str = "daily"
    weekly: str = "weekly"
    projects: str = "projects"
    templates: str = "templates"


@dataclass
class ReportConfig:
    """Weekly report rendering settings."""
    title_suffix: str = "Weekly Report"
    excerpt_length: int = 200


@dataclass
class GitHubConfig:
    """GitHub account settings."""
    username: Optional[str] = None
    default_org: Optional[str] = None


@dataclass
class Settings:
    """Application settings."""

    workspace: Path = Path(".")
    name: str = ""
    version: str = CONFIG_VERSION
    created_at: str = ""

    # From environment only
    editor: str = "vi"

    # Config sections
    directories: DirectoriesConfig = field(default_factory=DirectoriesConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)

    @property
    def config_path(self) -> Path:
        return self.workspace / CONFIG_FILENAME

    @property
    def daily_dir(self) -> Path:
        return self.workspace / self.directories.daily

    @property
    def weekly_dir(self) -> Path:
        return self.workspace / self.directories.weekly

    @property
    def projects_dir(self) -> Path:
        return self.workspace / self.directories.projects

    @property
    def templates_dir(self) -> Path:
        return self.workspace / self.directories.templates

    @property
    def is_initialized(self) -> bool:
        return self.config_path.exists()


def find_workspace(start: Path) -> Optional[Path]:
    """Walk up from ``start`` to the nearest directory holding a config file."""
    current = start.resolve()
    for candidate in (current, *current.parents):
        if (candidate / CONFIG_FILENAME).exists():
            return candidate
    return None


def resolve_workspace(explicit: Optional[Path] = None) -> Path:
    """Pick the workspace: explicit path, environment, nearest ancestor, cwd."""
    if explicit is not None:
        return explicit.expanduser().resolve()

    from_env = os.getenv(WORKSPACE_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser().resolve()

    return find_workspace(Path.cwd()) or Path.cwd().resolve()


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"{config_path} must contain a mapping")

    return config


def _apply_section(target: object, name: str, values: object) -> None:
    """Copy one config section onto its dataclass, rejecting unknown keys."""
    if values is None:
        return
    if not isinstance(values, dict):
        raise ConfigError(f"Section '{name}' in config must be a mapping")

    known = {f.name: f.type for f in fields(target)}
    for key, value in values.items():
        if key not in known:
            raise ConfigError(f"Unknown key '{key}' in config section '{name}'")
        if known[key] is str:
            if value is None or isinstance(value, (dict, list)):
                raise ConfigError(f"Config key '{name}.{key}' must be a string")
            value = str(value)
        elif known[key] is int and (isinstance(value, bool) or not isinstance(value, int)):
            raise ConfigError(f"Config key '{name}.{key}' must be an integer")
        setattr(target, key, value)


def get_settings(workspace: Optional[Path] = None) -> Settings:
    """Get settings from the workspace YAML config and environment."""
    root = resolve_workspace(workspace)
    config = load_config(root / CONFIG_FILENAME)

    settings = Settings(
        workspace=root,
        editor=os.getenv("VISUAL") or os.getenv("EDITOR") or "vi",
    )

    for key in ("name", "version", "created_at"):
        if key in config:
            setattr(settings, key, str(config[key]))

    _apply_section(settings.directories, "directories", config.get("directories"))
    _apply_section(settings.report, "report", config.get("report"))
    _apply_section(settings.github, "github", config.get("github"))

    return settings


def save_settings(settings: Settings) -> Path:
    """Write the workspace config file."""
    data = {
        "name": settings.name,
        "version": settings.version,
        "created_at": settings.created_at or datetime.now().isoformat(timespec="seconds"),
        "directories": asdict(settings.directories),
        "report": asdict(settings.report),
        "github": asdict(settings.github),
    }

    settings.workspace.mkdir(parents=True, exist_ok=True)
    with open(settings.config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, allow_unicode=True, default_flow_style=False, sort_keys=False)

    return settings.config_path
