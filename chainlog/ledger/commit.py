"""Commit data structure."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from chainlog.ledger.clock import Clock, SystemClock
from chainlog.ledger.ids import CommitIdGenerator, default_generator


DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d at %H:%M:%S %Z"


@dataclass(eq=False)
class Commit:
    """
    A single point in a repository's history.

    Commits form a singly-linked chain from newest to oldest through
    ``previous``. Everything except ``previous`` is fixed at creation;
    ``previous`` is only rewritten by the repository when it drops or
    splices nodes. Commits compare by identity: a node is never copied.

    Attributes:
        id: Decimal id, unique and increasing in creation order.
        message: Description of the commit.
        timestamp: When this commit was created.
        previous: The commit made before this one in its chain (None at the tail).
    """

    id: str
    message: str
    timestamp: datetime
    previous: "Commit | None" = None

    @classmethod
    def create(
        cls,
        message: str,
        previous: "Commit | None" = None,
        *,
        id_generator: CommitIdGenerator | None = None,
        clock: Clock | None = None,
    ) -> "Commit":
        """
        Create a commit with a freshly generated id and timestamp.

        Args:
            message: Commit message. The caller is responsible for validating it.
            previous: Commit this one follows, if any.
            id_generator: Id source (default: the process-wide generator).
            clock: Time source (default: the system clock).

        Returns:
            The new commit.
        """
        generator = id_generator or default_generator()
        clock = clock or SystemClock()
        return cls(
            id=generator.next_id(),
            message=message,
            timestamp=clock.now(),
            previous=previous,
        )

    def __setattr__(self, name: str, value: Any) -> None:
        # Only the chain link may change after construction
        if name != "previous" and name in self.__dict__:
            raise AttributeError(f"Commit.{name} is read-only")
        super().__setattr__(name, value)

    def render(self, timestamp_format: str | None = None) -> str:
        """Render as ``"<id> at <timestamp>: <message>"``."""
        stamp = self.timestamp.strftime(timestamp_format or DEFAULT_TIMESTAMP_FORMAT)
        return f"{self.id} at {stamp.strip()}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for display or export."""
        return {
            "id": self.id,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "previous_id": self.previous.id if self.previous else None,
        }

    def __str__(self) -> str:
        """Human-readable representation."""
        return self.render()

    def __repr__(self) -> str:
        """Debug representation."""
        previous_id = self.previous.id if self.previous else None
        return f"Commit(id={self.id}, message={self.message!r}, previous={previous_id})"


def reset_ids() -> None:
    """Reset the process-wide commit id counter. Intended for tests only."""
    default_generator().reset()
