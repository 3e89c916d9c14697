"""In-memory byte cache bounded by total cost.

:class:`MemoryCache` keeps ``key -> bytes`` entries and charges each entry
its length. Once the running total exceeds the configured ceiling the
least recently used entries are reclaimed until it fits again. There is no
explicit invalidation; entries simply disappear under pressure.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import Optional


class MemoryCache:
    """Least-recently-used ``str -> bytes`` map with a byte-cost ceiling.

    An entry whose own cost exceeds the whole ceiling is not retained.

    Args:
        cost_limit: Maximum total number of bytes held.
    """

    def __init__(self, cost_limit: int) -> None:
        self._cost_limit = cost_limit
        self._entries: OrderedDict[str, bytes] = OrderedDict()
        self._total_cost = 0

    def get(self, key: str) -> Optional[bytes]:
        """Return the bytes stored under *key* and mark them recently used."""
        data = self._entries.get(key)
        if data is not None:
            self._entries.move_to_end(key)
        return data

    def set(self, key: str, data: bytes) -> None:
        """Store *data* under *key*, replacing any previous entry."""
        previous = self._entries.pop(key, None)
        if previous is not None:
            self._total_cost -= len(previous)
        self._entries[key] = data
        self._total_cost += len(data)
        self._reclaim()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def total_cost(self) -> int:
        return self._total_cost

    @property
    def cost_limit(self) -> int:
        return self._cost_limit

    def _reclaim(self) -> None:
        while self._total_cost > self._cost_limit and self._entries:
            _, evicted = self._entries.popitem(last=False)
            self._total_cost -= len(evicted)
