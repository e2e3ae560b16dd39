"""
Positional parameter counter.
"""
from sqlclause.exceptions import ConfigError

__all__ = ['IndexAllocator']


class IndexAllocator:
    """Running positional-parameter counter for one generation call.

    One allocator is created per call (or per combined Set+Where call, where
    Set fields draw from it first and Where fields continue after them).
    Callers may pass their own allocator to keep numbering across several
    clauses and read `current` afterwards.
    """

    def __init__(self, start: int = 1) -> None:
        if isinstance(start, bool) or not isinstance(start, int) or start < 1:
            raise ConfigError(f'Start index must be an integer >= 1 (not {start!r})')
        self.start = start
        self.current = start

    def next(self, consumes: bool = True) -> int:
        """Return the current index, advancing past it when `consumes`.
        """
        index = self.current
        if consumes:
            self.current += 1
        return index

    @property
    def last(self) -> int:
        """Last consumed index (`start - 1` when nothing was consumed)."""
        return self.current - 1

    @property
    def consumed(self) -> int:
        """Number of indices consumed so far."""
        return self.current - self.start

    def __repr__(self) -> str:
        return f'IndexAllocator(start={self.start}, current={self.current})'
