"""Parse GitHub repository, issue and pull request URLs.

Only string handling; nothing here talks to the GitHub API.
"""

import re
from dataclasses import dataclass
from typing import Optional

GITHUB_BASE = "https://github.com"
API_BASE = "https://api.github.com"

_NAME = r"[a-zA-Z0-9_-]+"
_REPO = r"[a-zA-Z0-9_.-]+?"

SHORT_REPO_PATTERN = re.compile(rf"^({_NAME})/({_REPO})(\.git)?$")
HTTPS_REPO_PATTERN = re.compile(rf"^https?://github\.com/({_NAME})/({_REPO})(\.git)?/?$")
SSH_REPO_PATTERN = re.compile(rf"^git@github\.com:({_NAME})/({_REPO})(\.git)?$")
LINK_URL_PATTERN = re.compile(
    rf"^https?://github\.com/({_NAME})/([a-zA-Z0-9_.-]+)/(issues|pull)/(\d+)"
)
SHORT_LINK_PATTERN = re.compile(rf"^({_NAME})/([a-zA-Z0-9_.-]+)#(\d+)$")


@dataclass
class GitHubRepo:
    """A GitHub repository and its derived URLs."""

    owner: str
    repo: str

    @property
    def url(self) -> str:
        return f"{GITHUB_BASE}/{self.owner}/{self.repo}"

    @property
    def api_url(self) -> str:
        return f"{API_BASE}/repos/{self.owner}/{self.repo}"

    @property
    def clone_url(self) -> str:
        return f"{self.url}.git"

    @property
    def ssh_url(self) -> str:
        return f"git@github.com:{self.owner}/{self.repo}.git"


@dataclass
class GitHubLink:
    """An issue or pull request reference."""

    owner: str
    repo: str
    number: int
    kind: str  # "issue" or "pull"

    @property
    def url(self) -> str:
        path = "pull" if self.kind == "pull" else "issues"
        return f"{GITHUB_BASE}/{self.owner}/{self.repo}/{path}/{self.number}"

    @property
    def is_pull_request(self) -> bool:
        return self.kind == "pull"


def parse_repo_url(url: str) -> Optional[GitHubRepo]:
    """Parse ``owner/repo``, HTTPS or SSH repository URLs.

    Returns None if the string is not a GitHub repository reference.
    """
    if not url:
        return None

    url = url.strip()
    for pattern in (SHORT_REPO_PATTERN, HTTPS_REPO_PATTERN, SSH_REPO_PATTERN):
        match = pattern.match(url)
        if match:
            return GitHubRepo(owner=match.group(1), repo=match.group(2))

    return None


def parse_link_url(url: str) -> Optional[GitHubLink]:
    """Parse an issue/PR URL or the ``owner/repo#123`` shorthand.

    The shorthand cannot tell issues from pull requests and is read as an
    issue.
    """
    if not url:
        return None

    url = url.strip()
    match = LINK_URL_PATTERN.match(url)
    if match:
        owner, repo, kind, number = match.groups()
        return GitHubLink(
            owner=owner,
            repo=repo,
            number=int(number),
            kind="pull" if kind == "pull" else "issue",
        )

    match = SHORT_LINK_PATTERN.match(url)
    if match:
        owner, repo, number = match.groups()
        return GitHubLink(owner=owner, repo=repo, number=int(number), kind="issue")

    return None


def is_valid_repo_url(url: str) -> bool:
    return parse_repo_url(url) is not None


def normalize_repo_url(url: str) -> str:
    """Return the canonical HTTPS URL, or the input unchanged if unparsable."""
    repo = parse_repo_url(url)
    return repo.url if repo else url


def build_issue_url(owner: str, repo: str, number: int) -> str:
    return GitHubLink(owner, repo, number, "issue").url


def build_pr_url(owner: str, repo: str, number: int) -> str:
    return GitHubLink(owner, repo, number, "pull").url


def is_same_repo(first: str, second: str) -> bool:
    """Compare two repository references, ignoring case and URL form."""
    left = parse_repo_url(first)
    right = parse_repo_url(second)
    if left is None or right is None:
        return False
    return left.url.lower() == right.url.lower()
