"""
In-memory commit ledger.

This module provides named repositories holding linked chains of commits,
supporting:
- Appending commits with globally increasing ids
- Lookup and bounded history rendering
- Dropping a commit by id
- Merging two repositories' histories in timestamp order by relinking nodes
"""

from chainlog.ledger.clock import Clock, LogicalClock, SystemClock
from chainlog.ledger.commit import Commit, reset_ids
from chainlog.ledger.errors import (
    InvalidArgumentError,
    LedgerError,
    ReplayError,
    RepositoryExistsError,
    RepositoryNotFoundError,
)
from chainlog.ledger.ids import CommitIdGenerator, default_generator
from chainlog.ledger.manager import RepositoryManager
from chainlog.ledger.repository import Repository

__all__ = [
    "Clock",
    "LogicalClock",
    "SystemClock",
    "Commit",
    "reset_ids",
    "CommitIdGenerator",
    "default_generator",
    "Repository",
    "RepositoryManager",
    "LedgerError",
    "InvalidArgumentError",
    "RepositoryExistsError",
    "RepositoryNotFoundError",
    "ReplayError",
]
