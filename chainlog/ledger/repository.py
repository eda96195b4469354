"""
Repository - owner of a single commit chain.

A repository holds a reference to its newest commit (the head); every other
commit is reached by following ``previous`` links. All chain surgery lives
here: appending commits, unlinking a commit by id, and merging another
repository's chain into this one without copying any nodes.
"""

from itertools import islice
from typing import Iterator

from loguru import logger

from chainlog.ledger.clock import Clock, SystemClock
from chainlog.ledger.commit import Commit, DEFAULT_TIMESTAMP_FORMAT
from chainlog.ledger.errors import InvalidArgumentError
from chainlog.ledger.ids import CommitIdGenerator, default_generator


class Repository:
    """
    A named, in-memory history of commits.

    The chain is ordered newest to oldest. Each commit node is owned by
    exactly one repository at a time; ``synchronize`` moves nodes from the
    other repository into this one and leaves the other empty.

    Attributes:
        name: Name of the repository.
        id_generator: Source of commit ids, shared with sibling repositories.
        clock: Source of commit timestamps.
        timestamp_format: strftime format used when rendering history.
    """

    def __init__(
        self,
        name: str,
        *,
        id_generator: CommitIdGenerator | None = None,
        clock: Clock | None = None,
        timestamp_format: str | None = None,
    ):
        if not name:
            raise InvalidArgumentError("Need a name for repository")
        self.name = name
        self.id_generator = id_generator or default_generator()
        self.clock = clock or SystemClock()
        self.timestamp_format = timestamp_format or DEFAULT_TIMESTAMP_FORMAT
        self._head: Commit | None = None

    # =========================================================================
    # Queries
    # =========================================================================

    def head(self) -> str | None:
        """Get the id of the most recent commit, or None if there are none."""
        return self._head.id if self._head else None

    def head_commit(self) -> Commit | None:
        """Get the most recent commit itself."""
        return self._head

    def is_empty(self) -> bool:
        return self._head is None

    def size(self) -> int:
        """Count the commits reachable from the head."""
        count = 0
        for _ in self:
            count += 1
        return count

    def contains(self, commit_id: str | int) -> bool:
        """
        Check whether a commit with the given id is in this repository.

        Args:
            commit_id: The id to look for.

        Returns:
            True if some commit in the chain has this id.
        """
        if commit_id is None:
            raise InvalidArgumentError("Id cannot be None")
        target = str(commit_id)
        return any(commit.id == target for commit in self)

    def log(self, max_commits: int | None = None) -> list[Commit]:
        """
        Get commits from newest to oldest.

        Args:
            max_commits: Maximum number of commits to return (default: all).

        Returns:
            List of commits, newest first.
        """
        return list(islice(self, max_commits))

    def history(self, n: int) -> str:
        """
        Render the ``n`` most recent commits, one per line, newest first.

        Fewer lines are returned when the repository holds fewer than ``n``
        commits; an empty repository yields an empty string.

        Args:
            n: Number of commits to include. Must be positive.

        Returns:
            Newline-joined commit renderings.
        """
        if isinstance(n, bool) or not isinstance(n, int):
            raise InvalidArgumentError(f"count must be an integer, got {n!r}")
        if n <= 0:
            raise InvalidArgumentError("count must be positive")
        return "\n".join(
            commit.render(self.timestamp_format) for commit in self.log(n)
        )

    # =========================================================================
    # Mutations
    # =========================================================================

    def commit(self, message: str) -> str:
        """
        Record a new commit on top of the current head.

        Args:
            message: Commit message.

        Returns:
            The id of the new commit.
        """
        if message is None:
            raise InvalidArgumentError("message cannot be None")
        self._head = Commit.create(
            message,
            self._head,
            id_generator=self.id_generator,
            clock=self.clock,
        )
        logger.debug(f"[{self.name}] committed {self._head.id}: {message}")
        return self._head.id

    def drop(self, commit_id: str | int) -> bool:
        """
        Remove the first commit (newest to oldest) with the given id.

        Dropping the head makes its predecessor the new head; dropping any
        other commit links its successor straight to its predecessor.

        Args:
            commit_id: Id of the commit to remove.

        Returns:
            True if a commit was removed, False if none matched.
        """
        if commit_id is None:
            raise InvalidArgumentError("target id cannot be None")
        target = str(commit_id)

        if self._head is None:
            return False

        if self._head.id == target:
            self._head = self._head.previous
            logger.debug(f"[{self.name}] dropped head {target}")
            return True

        cursor = self._head
        while cursor.previous is not None:
            if cursor.previous.id == target:
                cursor.previous = cursor.previous.previous
                logger.debug(f"[{self.name}] dropped {target}")
                return True
            cursor = cursor.previous

        return False

    def synchronize(self, other: "Repository") -> None:
        """
        Merge another repository's commits into this one.

        Both chains must already be ordered newest to oldest; this is not
        checked. The result is a single chain ordered by timestamp, built by
        relinking the existing nodes. On equal timestamps, this repository's
        commit stays ahead of the other's. The other repository ends up empty.

        Args:
            other: Repository whose commits are moved into this one.
        """
        if other is None:
            raise InvalidArgumentError("Repository to synchronize cannot be None")
        if other is self:
            raise InvalidArgumentError("Cannot synchronize a repository with itself")

        if self._head is None:
            self._head, other._head = other._head, None
            logger.debug(f"[{self.name}] adopted chain of '{other.name}'")
            return

        if other._head is None:
            return

        moved = 0
        if self._head.timestamp < other._head.timestamp:
            self._head = other._take_head(previous=self._head)
            moved += 1

        cursor = self._head
        while cursor.previous is not None and other._head is not None:
            if cursor.previous.timestamp < other._head.timestamp:
                cursor.previous = other._take_head(previous=cursor.previous)
                moved += 1
            cursor = cursor.previous

        # The rest of other's chain is older than everything here
        if other._head is not None:
            cursor.previous, other._head = other._head, None

        logger.debug(
            f"[{self.name}] synchronized with '{other.name}' "
            f"({moved} spliced, remainder appended)"
        )

    def _take_head(self, previous: Commit | None) -> Commit:
        """
        Detach this repository's head and relink it in front of ``previous``.

        The detached node's successor becomes this repository's head, so the
        node leaves this chain and joins the caller's chain in one step.
        """
        node = self._head
        self._head = node.previous
        node.previous = previous
        return node

    # =========================================================================
    # Python protocol
    # =========================================================================

    def __iter__(self) -> Iterator[Commit]:
        current = self._head
        while current is not None:
            yield current
            current = current.previous

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, commit_id: object) -> bool:
        if commit_id is None:
            return False
        return self.contains(commit_id)

    def __str__(self) -> str:
        """Human-readable representation."""
        if self._head is None:
            return f"{self.name} - No commits"
        return f"{self.name} - Current head: {self._head.render(self.timestamp_format)}"

    def __repr__(self) -> str:
        """Debug representation."""
        return f"Repository(name={self.name}, head={self.head()})"
