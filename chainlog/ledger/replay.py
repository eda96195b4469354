"""
Scripted replay of repository operations.

A replay script is JSON, either a bare list of steps or an object of the
form ``{"repositories": ["a", "b"], "steps": [...]}``. Each step names an
operation and its arguments, for example::

    {"op": "commit", "repo": "a", "message": "initial"}
    {"op": "sync", "repo": "a", "other": "b"}
    {"op": "history", "repo": "a", "n": 5}
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, get_args

from loguru import logger

from chainlog.ledger.errors import ReplayError
from chainlog.ledger.manager import RepositoryManager


Operation = Literal[
    "create",
    "commit",
    "drop",
    "contains",
    "head",
    "size",
    "history",
    "sync",
    "show",
]

# Arguments each operation needs besides "repo"
_REQUIRED_ARGS: dict[str, tuple[str, ...]] = {
    "create": (),
    "commit": ("message",),
    "drop": ("id",),
    "contains": ("id",),
    "head": (),
    "size": (),
    "history": ("n",),
    "sync": ("other",),
    "show": (),
}


@dataclass
class ReplayStep:
    """
    One operation in a replay script.

    Attributes:
        op: Operation name.
        repo: Repository the operation runs against.
        args: Operation arguments (message, id, n, other).
    """

    op: Operation
    repo: str
    args: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReplayStep":
        """Create from dictionary, validating the operation and its arguments."""
        if not isinstance(data, dict):
            raise ReplayError(f"Step must be an object, got {type(data).__name__}")

        op = data.get("op")
        if op not in get_args(Operation):
            raise ReplayError(f"Unknown operation: {op!r}")

        repo = data.get("repo")
        if not isinstance(repo, str) or not repo:
            raise ReplayError(f"Step '{op}' needs a repository name")

        missing = [name for name in _REQUIRED_ARGS[op] if name not in data]
        if missing:
            raise ReplayError(f"Step '{op}' is missing: {', '.join(missing)}")

        args = {k: v for k, v in data.items() if k not in ("op", "repo")}
        return cls(op=op, repo=repo, args=args)

    def __str__(self) -> str:
        """Human-readable representation."""
        details = " ".join(f"{k}={v!r}" for k, v in self.args.items())
        return f"{self.op} {self.repo} {details}".rstrip()


@dataclass
class StepResult:
    """The outcome of running a single step."""

    step: ReplayStep
    value: Any = None


def parse_script(data: Any) -> tuple[list[str], list[ReplayStep]]:
    """
    Parse a decoded replay script.

    Args:
        data: Either a list of steps or an object with "steps" and an
            optional "repositories" list.

    Returns:
        Tuple of (repository names to pre-create, steps).
    """
    if isinstance(data, list):
        return [], [ReplayStep.from_dict(item) for item in data]

    if isinstance(data, dict):
        repositories = data.get("repositories", [])
        if not isinstance(repositories, list):
            raise ReplayError("'repositories' must be a list of names")
        steps = data.get("steps", [])
        if not isinstance(steps, list):
            raise ReplayError("'steps' must be a list")
        return [str(name) for name in repositories], [ReplayStep.from_dict(item) for item in steps]

    raise ReplayError("Replay script must be a list or an object")


def load_script(path: Path) -> tuple[list[str], list[ReplayStep]]:
    """
    Load a replay script from a JSON file.

    Args:
        path: Path to the script.

    Returns:
        Tuple of (repository names to pre-create, steps).
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as e:
        raise ReplayError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ReplayError(f"Invalid JSON in {path}: {e}") from e
    return parse_script(data)


def run_steps(
    manager: RepositoryManager,
    steps: list[ReplayStep],
    strict: bool = False,
) -> list[StepResult]:
    """
    Run steps in order against the manager's repositories.

    Ledger errors (for example a non-positive history count) propagate
    unchanged and stop the replay.

    Args:
        manager: Repository manager to operate on.
        steps: Steps to run.
        strict: If True, repositories must be created before use;
            otherwise they are created on first mention.

    Returns:
        One result per step, in order.
    """
    results = []

    for step in steps:
        if step.op == "create":
            value: Any = manager.create(step.repo)
            results.append(StepResult(step, value))
            continue

        repo = manager.require(step.repo) if strict else manager.get_or_create(step.repo)

        if step.op == "commit":
            value = repo.commit(step.args["message"])
        elif step.op == "drop":
            value = repo.drop(step.args["id"])
        elif step.op == "contains":
            value = repo.contains(step.args["id"])
        elif step.op == "head":
            value = repo.head()
        elif step.op == "size":
            value = repo.size()
        elif step.op == "history":
            value = repo.history(step.args["n"])
        elif step.op == "sync":
            other_name = step.args["other"]
            other = manager.require(other_name) if strict else manager.get_or_create(other_name)
            repo.synchronize(other)
            value = repo.size()
        else:
            value = str(repo)

        logger.debug(f"replay: {step} -> {value!r}")
        results.append(StepResult(step, value))

    return results
