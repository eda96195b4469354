"""Ledger exceptions."""


class LedgerError(Exception):
    """Base class for all ledger errors."""


class InvalidArgumentError(LedgerError, ValueError):
    """
    An operation received an argument it cannot accept.
    
    Raised before any state is modified, so the repository is left
    exactly as it was.
    """


class RepositoryNotFoundError(LedgerError, KeyError):
    """No repository with the requested name is registered."""


class RepositoryExistsError(LedgerError):
    """A repository with the requested name is already registered."""


class ReplayError(LedgerError):
    """A replay script step is malformed."""
