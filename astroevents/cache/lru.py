"""Bounded least-recently-used cache for position lookups.

The cache is a plain handle passed to the providers that use it; there is
no process-wide instance.  Searches are single-threaded so no locking is
performed.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Any, Final, Protocol, TypeVar

from ..errors import InvalidConfigurationError

__all__ = [
    "CacheKey",
    "DEFAULT_MAX_SIZE",
    "LRUCache",
    "NullCache",
    "PositionCache",
]

DEFAULT_MAX_SIZE: Final[int] = 10_000

V = TypeVar("V")
_MISSING: Final = object()


class PositionCache(Protocol):
    """Interface shared by :class:`LRUCache` and :class:`NullCache`."""

    def get(self, key: Hashable, default: Any = None) -> Any: ...

    def put(self, key: Hashable, value: Any) -> None: ...

    def fetch(self, key: Hashable, compute: Callable[[], V]) -> V: ...

    def clear(self) -> None: ...

    def __len__(self) -> int: ...


def _validate_size(max_size: int) -> int:
    if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size <= 0:
        raise InvalidConfigurationError(f"cache max_size must be a positive integer, got {max_size!r}")
    return max_size


class LRUCache:
    """Strict LRU cache with a bounded number of entries.

    Reads promote an entry to most-recently-used; inserting past
    ``max_size`` evicts the least-recently-used entry, and shrinking
    ``max_size`` evicts the oldest entries immediately.
    """

    __slots__ = ("_max_size", "_data", "hits", "misses")

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE) -> None:
        self._max_size = _validate_size(max_size)
        self._data: OrderedDict[Hashable, Any] = OrderedDict()
        self.hits = 0
        self.misses = 0

    @property
    def max_size(self) -> int:
        return self._max_size

    @max_size.setter
    def max_size(self, new_size: int) -> None:
        self._max_size = _validate_size(new_size)
        self._evict()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._data

    def __getitem__(self, key: Hashable) -> Any:
        value = self._data[key]
        self._data.move_to_end(key)
        return value

    def __setitem__(self, key: Hashable, value: Any) -> None:
        self.put(key, value)

    def get(self, key: Hashable, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    def put(self, key: Hashable, value: Any) -> None:
        if key in self._data:
            self._data.move_to_end(key)
        self._data[key] = value
        self._evict()

    def fetch(self, key: Hashable, compute: Callable[[], V]) -> V:
        """Return the cached value for ``key``, computing and storing it if absent."""

        value = self.get(key, _MISSING)
        if value is not _MISSING:
            self.hits += 1
            return value
        self.misses += 1
        computed = compute()
        self.put(key, computed)
        return computed

    def keys(self) -> list[Hashable]:
        """Keys ordered from least to most recently used."""

        return list(self._data)

    def clear(self) -> None:
        self._data.clear()

    def _evict(self) -> None:
        while len(self._data) > self._max_size:
            self._data.popitem(last=False)


class NullCache:
    """Cache stand-in that never stores anything."""

    __slots__ = ()

    max_size = 0

    def __len__(self) -> int:
        return 0

    def __contains__(self, key: Hashable) -> bool:
        return False

    def get(self, key: Hashable, default: Any = None) -> Any:
        return default

    def put(self, key: Hashable, value: Any) -> None:
        return None

    def fetch(self, key: Hashable, compute: Callable[[], V]) -> V:
        return compute()

    def clear(self) -> None:
        return None


class CacheKey:
    """Build cache keys from a quantity kind, a rounded instant and call-site parts."""

    @staticmethod
    def round_terrestrial_time(jd_tt: float, precision: int) -> float:
        """Round a TT Julian day to ``precision`` decimal places (``<= 0`` disables)."""

        if precision <= 0:
            return jd_tt
        return round(jd_tt, precision)

    @classmethod
    def generate(
        cls,
        kind: str,
        jd_tt: float,
        *components: Hashable,
        precision: int,
    ) -> tuple[Hashable, ...]:
        return (kind, cls.round_terrestrial_time(jd_tt, precision), *components)
