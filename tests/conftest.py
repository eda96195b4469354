"""Shared pytest fixtures."""

import pytest

from chainlog.ledger import reset_ids


@pytest.fixture(autouse=True)
def fresh_ids():
    """Start every test from id 0 on the process-wide generator."""
    reset_ids()
    yield
    reset_ids()
