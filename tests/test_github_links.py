"""Tests for GitHub URL parsing."""

import pytest

from worklog.core.github_links import (
    build_issue_url,
    build_pr_url,
    is_same_repo,
    is_valid_repo_url,
    normalize_repo_url,
    parse_link_url,
    parse_repo_url,
)


@pytest.mark.parametrize(
    "url",
    [
        "acme/app",
        "https://github.com/acme/app",
        "https://github.com/acme/app/",
        "https://github.com/acme/app.git",
        "http://github.com/acme/app",
        "git@github.com:acme/app.git",
    ],
)
def test_parse_repo_url_forms(url: str) -> None:
    """Short, HTTPS and SSH forms resolve to the same repository."""
    repo = parse_repo_url(url)

    assert repo is not None
    assert repo.owner == "acme"
    assert repo.repo == "app"
    assert repo.url == "https://github.com/acme/app"


def test_repo_derived_urls() -> None:
    repo = parse_repo_url("acme/my.app")

    assert repo.repo == "my.app"
    assert repo.api_url == "https://api.github.com/repos/acme/my.app"
    assert repo.clone_url == "https://github.com/acme/my.app.git"
    assert repo.ssh_url == "git@github.com:acme/my.app.git"


@pytest.mark.parametrize("url", ["", "acme", "https://gitlab.com/acme/app", "acme/app/extra"])
def test_parse_repo_url_rejects(url: str) -> None:
    assert parse_repo_url(url) is None
    assert not is_valid_repo_url(url)


def test_parse_link_url() -> None:
    """Issue and pull request URLs are told apart by path."""
    issue = parse_link_url("https://github.com/acme/app/issues/12")
    pr = parse_link_url("https://github.com/acme/app/pull/42")

    assert issue.kind == "issue"
    assert issue.number == 12
    assert not issue.is_pull_request
    assert pr.is_pull_request
    assert pr.url == "https://github.com/acme/app/pull/42"


def test_parse_link_shorthand() -> None:
    """The owner/repo#N form is read as an issue."""
    link = parse_link_url("acme/app#7")

    assert link.kind == "issue"
    assert link.url == "https://github.com/acme/app/issues/7"


def test_parse_link_url_rejects() -> None:
    assert parse_link_url("https://github.com/acme/app") is None
    assert parse_link_url("not a url") is None


def test_normalize_and_build() -> None:
    assert normalize_repo_url("git@github.com:acme/app.git") == "https://github.com/acme/app"
    assert normalize_repo_url("whatever") == "whatever"
    assert build_issue_url("acme", "app", 3) == "https://github.com/acme/app/issues/3"
    assert build_pr_url("acme", "app", 4) == "https://github.com/acme/app/pull/4"


def test_is_same_repo() -> None:
    assert is_same_repo("acme/App", "https://github.com/ACME/app.git")
    assert not is_same_repo("acme/app", "acme/other")
    assert not is_same_repo("acme/app", "nonsense")
