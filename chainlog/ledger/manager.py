"""
Repository manager.

Keeps a set of named repositories that share one id generator and clock,
and provides name-based operations on them, including synchronization.
"""

from typing import TYPE_CHECKING, Iterator

from loguru import logger

from chainlog.ledger.clock import Clock, LogicalClock, SystemClock
from chainlog.ledger.errors import RepositoryExistsError, RepositoryNotFoundError
from chainlog.ledger.ids import CommitIdGenerator, default_generator
from chainlog.ledger.repository import Repository

if TYPE_CHECKING:
    from chainlog.config.schema import Config


class RepositoryManager:
    """
    Manages in-memory repositories.

    Provides operations for:
    - Repository creation and deletion
    - Lookup by name
    - Synchronizing one repository into another

    All repositories created here draw ids from the same generator. Unless
    one is injected, that is the process-wide generator, so ids stay unique
    and increasing across managed and standalone repositories alike.
    """

    def __init__(
        self,
        id_generator: CommitIdGenerator | None = None,
        clock: Clock | None = None,
        timestamp_format: str | None = None,
    ):
        self.id_generator = id_generator or default_generator()
        self.clock = clock or SystemClock()
        self.timestamp_format = timestamp_format
        self._repositories: dict[str, Repository] = {}

    @classmethod
    def from_config(cls, config: "Config") -> "RepositoryManager":
        """Build a manager from the ledger section of a configuration."""
        ledger = config.ledger
        if ledger.clock == "logical":
            clock: Clock = LogicalClock(step=ledger.logical_step)
        else:
            clock = SystemClock()
        # A custom starting id needs its own sequence
        id_generator = None
        if ledger.id_start != 0:
            id_generator = CommitIdGenerator(start=ledger.id_start)
        return cls(
            id_generator=id_generator,
            clock=clock,
            timestamp_format=ledger.timestamp_format,
        )

    def create(self, name: str) -> Repository:
        """
        Create and register a new repository.

        Args:
            name: Name of the repository.

        Returns:
            The created repository.
        """
        if name in self._repositories:
            raise RepositoryExistsError(f"Repository '{name}' already exists")

        repo = Repository(
            name,
            id_generator=self.id_generator,
            clock=self.clock,
            timestamp_format=self.timestamp_format,
        )
        self._repositories[name] = repo
        logger.debug(f"Created repository '{name}'")
        return repo

    def get(self, name: str) -> Repository | None:
        """Get a repository by name."""
        return self._repositories.get(name)

    def require(self, name: str) -> Repository:
        """Get a repository by name, raising if it does not exist."""
        repo = self._repositories.get(name)
        if repo is None:
            raise RepositoryNotFoundError(f"Repository '{name}' does not exist")
        return repo

    def get_or_create(self, name: str) -> Repository:
        """Get a repository by name, creating it if needed."""
        repo = self._repositories.get(name)
        if repo is None:
            repo = self.create(name)
        return repo

    def delete(self, name: str) -> bool:
        """
        Delete a repository and every commit it holds.

        Args:
            name: Repository name.

        Returns:
            True if deleted, False if it did not exist.
        """
        if self._repositories.pop(name, None) is None:
            return False
        logger.debug(f"Deleted repository '{name}'")
        return True

    def list_repositories(self) -> list[Repository]:
        """List all repositories, sorted by name."""
        return sorted(self._repositories.values(), key=lambda r: r.name)

    def names(self) -> list[str]:
        return sorted(self._repositories)

    def synchronize(self, target: str, source: str) -> Repository:
        """
        Merge one repository into another.

        Every commit of ``source`` is moved into ``target`` in timestamp
        order; ``source`` stays registered but is left empty.

        Args:
            target: Repository to merge into.
            source: Repository to merge from.

        Returns:
            The target repository.
        """
        target_repo = self.require(target)
        source_repo = self.require(source)
        target_repo.synchronize(source_repo)
        return target_repo

    def reset_ids(self) -> None:
        """Restart the shared id sequence. Intended for tests only."""
        self.id_generator.reset()

    def __contains__(self, name: object) -> bool:
        return name in self._repositories

    def __len__(self) -> int:
        return len(self._repositories)

    def __iter__(self) -> Iterator[Repository]:
        return iter(self.list_repositories())
