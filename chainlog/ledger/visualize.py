"""
Ledger visualization utilities.

Provides various formats for visualizing repository history.
"""

from chainlog.ledger.commit import Commit
from chainlog.ledger.manager import RepositoryManager
from chainlog.ledger.repository import Repository


def format_commit_log(repo: Repository, max_commits: int = 20) -> str:
    """
    Format commit history similar to `git log`.

    Args:
        repo: The repository.
        max_commits: Maximum commits to show.

    Returns:
        Formatted log string.
    """
    lines = []
    history = repo.log(max_commits)

    if not history:
        return "No commits yet."

    for commit in history:
        lines.append(f"commit {commit.id}")
        lines.append(f"Repository: {repo.name}")
        lines.append(f"Date:   {commit.timestamp.strftime('%Y-%m-%d %H:%M:%S')}")

        if commit.previous:
            lines.append(f"Parent: {commit.previous.id}")

        lines.append("")
        lines.append(f"    {commit.message}")
        lines.append("")

    return "\n".join(lines).rstrip("\n")


def format_commit_oneline(repo: Repository, max_commits: int = 20) -> str:
    """
    Format commit history in one-line format similar to `git log --oneline`.

    Args:
        repo: The repository.
        max_commits: Maximum commits to show.

    Returns:
        Formatted log string.
    """
    lines = []
    history = repo.log(max_commits)

    if not history:
        return "No commits yet."

    for i, commit in enumerate(history):
        prefix = "* " if i == 0 else "  "
        head_marker = " (HEAD)" if i == 0 else ""
        lines.append(f"{prefix}{commit.id}{head_marker} {commit.message}")

    return "\n".join(lines)


def format_repositories(manager: RepositoryManager) -> str:
    """
    Format the repository list similar to `git branch -v`.

    Args:
        manager: The repository manager.

    Returns:
        Formatted repository list.
    """
    lines = []
    for repo in manager.list_repositories():
        head = repo.head() or "empty"
        size = repo.size()
        noun = "commit" if size == 1 else "commits"
        lines.append(f"{repo.name} -> {head} ({size} {noun})")

    return "\n".join(lines)


def generate_mermaid_timeline(repo: Repository, max_commits: int = 30) -> str:
    """
    Generate a Mermaid timeline of a repository's commits.

    Args:
        repo: The repository.
        max_commits: Maximum commits to include (most recent ones).

    Returns:
        Mermaid timeline diagram code.
    """
    lines = ["timeline"]
    lines.append(f"    title {repo.name} history")

    commits = repo.log(max_commits)

    if not commits:
        lines.append("    section No Commits")
        lines.append("        No commits yet")
        return "\n".join(lines)

    # Group by date, oldest first
    by_date: dict[str, list[Commit]] = {}
    for commit in reversed(commits):
        date_str = commit.timestamp.strftime("%Y-%m-%d")
        by_date.setdefault(date_str, []).append(commit)

    for date_str in sorted(by_date.keys()):
        lines.append(f"    section {date_str}")
        for commit in by_date[date_str]:
            desc = f"{commit.id} {commit.message}"
            desc = desc[:40].replace(":", "-")  # Mermaid-safe
            lines.append(f"        {desc}")

    return "\n".join(lines)
