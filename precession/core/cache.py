# precession/core/cache.py
# -----------------------------------------------------------------------------
# Per-epoch term cache
#
# Holds evaluated precession terms for one (epoch, model) pair. The owning
# engine replaces it when the epoch changes and clears it when the model
# changes; entries are never evicted otherwise.
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Dict, Hashable

from .errors import TermNotFoundError

__all__ = ["TermCache"]


class TermCache:
    """Mapping from term to computed value, with hit/miss counters."""

    def __init__(self):
        self._values: Dict[Hashable, float] = {}
        self.hits = 0
        self.misses = 0

    def has(self, term: Hashable) -> bool:
        if term in self._values:
            self.hits += 1
            return True
        self.misses += 1
        return False

    def get(self, term: Hashable) -> float:
        try:
            return self._values[term]
        except KeyError:
            raise TermNotFoundError(f"Term {term!r} is not cached", term=term) from None

    def set(self, term: Hashable, value: float) -> None:
        self._values[term] = value

    def clear(self) -> None:
        self._values.clear()

    def __contains__(self, term: Hashable) -> bool:
        return term in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"TermCache(size={len(self._values)}, hits={self.hits}, misses={self.misses})"
