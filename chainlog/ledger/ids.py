"""Commit id generation."""

import threading


class CommitIdGenerator:
    """
    Hands out strictly increasing commit ids.
    
    Every repository that shares a generator draws from the same sequence,
    so ids are unique and ordered by creation across all of them.
    
    Attributes:
        start: Value the sequence starts from (and returns to on reset).
    """
    
    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError("start must be non-negative")
        self.start = start
        self._next = start
        self._lock = threading.Lock()
    
    def next_id(self) -> str:
        """Return the next id as decimal text."""
        with self._lock:
            value = self._next
            self._next += 1
        return str(value)
    
    def peek(self) -> int:
        """Return the value the next id will have, without consuming it."""
        with self._lock:
            return self._next
    
    def reset(self, start: int | None = None) -> None:
        """
        Restart the sequence.
        
        Only meant for deterministic test setup: ids handed out before the
        reset will be handed out again.
        
        Args:
            start: New starting value (default: the original start).
        """
        with self._lock:
            if start is not None:
                self.start = start
            self._next = self.start
    
    def __repr__(self) -> str:
        return f"CommitIdGenerator(next={self._next})"


_default_generator = CommitIdGenerator()


def default_generator() -> CommitIdGenerator:
    """Get the process-wide generator used when none is injected."""
    return _default_generator
