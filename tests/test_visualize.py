"""Tests for ledger visualization helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from chainlog.ledger import LogicalClock, RepositoryManager
from chainlog.ledger.visualize import (
    format_commit_log,
    format_commit_oneline,
    format_repositories,
    generate_mermaid_timeline,
)


@pytest.fixture
def manager():
    start = datetime(2024, 5, 1, 23, 59, 0, tzinfo=timezone.utc)
    return RepositoryManager(clock=LogicalClock(start=start, step=timedelta(seconds=30)))


@pytest.fixture
def repo(manager):
    repo = manager.create("main")
    for message in ["first", "second", "third"]:
        repo.commit(message)
    return repo


def test_commit_log(repo):
    text = format_commit_log(repo)

    assert text.startswith("commit 2\nRepository: main\nDate:   2024-05-02 00:00:00")
    assert "Parent: 1" in text
    assert "    first" in text
    assert text.count("commit ") == 3


def test_commit_log_limit(repo):
    text = format_commit_log(repo, max_commits=1)

    assert text.count("commit ") == 1
    assert "third" in text
    assert "first" not in text


def test_oneline(repo):
    assert format_commit_oneline(repo) == "* 2 (HEAD) third\n  1 second\n  0 first"


def test_empty_repository(manager):
    empty = manager.create("empty")

    assert format_commit_log(empty) == "No commits yet."
    assert format_commit_oneline(empty) == "No commits yet."
    assert "No commits yet" in generate_mermaid_timeline(empty)


def test_format_repositories(manager, repo):
    manager.create("empty")
    other = manager.create("solo")
    other.commit("x")

    assert format_repositories(manager) == (
        "empty -> empty (0 commits)\n"
        "main -> 2 (3 commits)\n"
        "solo -> 3 (1 commit)"
    )


def test_mermaid_timeline_groups_by_date(repo):
    text = generate_mermaid_timeline(repo)
    lines = text.split("\n")

    assert lines[0] == "timeline"
    assert lines[1] == "    title main history"
    assert "    section 2024-05-01" in lines
    assert "    section 2024-05-02" in lines
    # Oldest commit first
    assert lines.index("        0 first") < lines.index("        2 third")
