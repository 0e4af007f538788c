# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Request memoisation that never outlives a detected filesystem change.

Entries are stamped with the cache *generation* current when their
computation started. ``invalidate`` (wired to the host's file watcher) bumps
the generation, so every older entry, positive or negative, becomes a miss,
and a computation that straddles the change cannot store its stale result.
There are no locks: two callers may compute the same key concurrently, which
only wastes work.
"""

from __future__ import annotations

import logging
from contextlib import suppress
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, NamedTuple

from shadowtree._internal.logging_utils import structured_extra
from shadowtree.core.model_types import LogComponent, Namespace
from shadowtree.results import Defer

if TYPE_CHECKING:
    import os

    from shadowtree.results import ResolutionResult

logger: logging.Logger = logging.getLogger("shadowtree.cache")

DEFAULT_MAX_ENTRIES: Final[int] = 4096


class ResolutionKey(NamedTuple):
    """Cache key: specifier, importer namespace, and normalised relative target."""

    specifier: str
    namespace: Namespace
    relative_path: str


@dataclass(slots=True, frozen=True)
class CacheStats:
    """Snapshot of cache counters."""

    hits: int
    misses: int
    generation: int
    size: int


class ResolutionCache:
    """Generation-stamped memo of pipeline decisions.

    Args:
        negative: Whether ``Defer`` results are cached at all.
        max_entries: Upper bound on stored entries; the oldest entry is
            evicted first. ``None`` disables the bound.
    """

    def __init__(self, *, negative: bool = True, max_entries: int | None = DEFAULT_MAX_ENTRIES) -> None:
        self._negative = negative
        self._max_entries = max_entries
        self._entries: dict[ResolutionKey, tuple[int, ResolutionResult]] = {}
        self._generation = 0
        self._hits = 0
        self._misses = 0

    @property
    def generation(self) -> int:
        """Current generation; capture it before computing a result to store."""
        return self._generation

    def get(self, key: ResolutionKey) -> ResolutionResult | None:
        """Return the cached decision for ``key``, or ``None`` on a miss."""
        entry = self._entries.get(key)
        if entry is None or entry[0] != self._generation:
            self._misses += 1
            return None
        self._hits += 1
        return entry[1]

    def put(self, key: ResolutionKey, result: ResolutionResult, *, generation: int | None = None) -> bool:
        """Store ``result`` if it is still current.

        Args:
            key: Cache key.
            result: Decision to remember.
            generation: Generation observed when the computation started.
                Results from an older generation are discarded.

        Returns:
            True when the entry was stored.
        """
        stamp = self._generation if generation is None else generation
        if stamp != self._generation:
            return False
        if isinstance(result, Defer) and not self._negative:
            return False
        if self._max_entries is not None and key not in self._entries and len(self._entries) >= self._max_entries:
            self._evict_oldest()
        self._entries[key] = (stamp, result)
        return True

    def _evict_oldest(self) -> None:
        # Concurrent puts can resize the dict mid-iteration; the entry then stays.
        with suppress(RuntimeError, KeyError):
            oldest = next(iter(self._entries), None)
            if oldest is not None:
                del self._entries[oldest]

    def invalidate(self, path: str | os.PathLike[str] | None = None) -> None:
        """Start a new generation after a filesystem change was observed.

        Args:
            path: The changed path, for logging only. Any change invalidates
                every entry because a new file can turn an old ``Defer`` into
                a ``Found`` for an unrelated-looking specifier.
        """
        self._generation += 1
        self._entries = {}
        logger.debug(
            "Cache invalidated (generation %d)",
            self._generation,
            extra=structured_extra(LogComponent.CACHE, path=path, details={"generation": self._generation}),
        )

    def clear(self) -> None:
        """Drop all entries and reset the counters."""
        self._entries = {}
        self._hits = 0
        self._misses = 0

    def stats(self) -> CacheStats:
        """Return current counters."""
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            generation=self._generation,
            size=len(self._entries),
        )

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["DEFAULT_MAX_ENTRIES", "CacheStats", "ResolutionCache", "ResolutionKey"]
