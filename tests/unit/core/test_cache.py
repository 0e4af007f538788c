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

"""Unit tests for ResolutionCache."""

from __future__ import annotations

import sys
import threading

import pytest

from shadowtree.cache import ResolutionCache, ResolutionKey
from shadowtree.core.model_types import Namespace, ResolutionRule, RootName
from shadowtree.core.type_aliases import AbsPath
from shadowtree.results import Defer, Found, Redirect

pytestmark = pytest.mark.unit

KEY = ResolutionKey("./Header", Namespace.CORE, "components/Header")
FOUND = Found(AbsPath("/ext/components/Header.tsx"), ResolutionRule.RELATIVE_FROM_CORE)


def test_put_then_get() -> None:
    cache = ResolutionCache()
    assert cache.get(KEY) is None
    assert cache.put(KEY, FOUND)
    assert cache.get(KEY) == FOUND
    assert len(cache) == 1
    stats = cache.stats()
    assert (stats.hits, stats.misses, stats.size) == (1, 1, 1)


def test_keys_distinguish_namespace() -> None:
    cache = ResolutionCache()
    _ = cache.put(KEY, FOUND)
    assert cache.get(KEY._replace(namespace=Namespace.EXTENSION)) is None


def test_invalidate_drops_positive_and_negative_entries() -> None:
    cache = ResolutionCache()
    other = ResolutionKey("react", Namespace.CORE, "react")
    _ = cache.put(KEY, FOUND)
    _ = cache.put(other, Defer(ResolutionRule.BARE_FROM_CORE))
    cache.invalidate("/ext/components/Header.tsx")
    assert cache.generation == 1
    assert cache.get(KEY) is None
    assert cache.get(other) is None
    assert len(cache) == 0


def test_stale_computation_is_not_stored() -> None:
    cache = ResolutionCache()
    started = cache.generation
    cache.invalidate()
    assert not cache.put(KEY, FOUND, generation=started)
    assert cache.get(KEY) is None


def test_negative_caching_can_be_disabled() -> None:
    cache = ResolutionCache(negative=False)
    assert not cache.put(KEY, Defer(ResolutionRule.RELATIVE_FROM_CORE))
    assert cache.put(KEY, Redirect(RootName.EXTENSION_SOURCE))
    assert cache.get(KEY) == Redirect(RootName.EXTENSION_SOURCE)


def test_oldest_entry_is_evicted_at_capacity() -> None:
    cache = ResolutionCache(max_entries=2)
    keys = [ResolutionKey(f"./m{index}", Namespace.CORE, f"m{index}") for index in range(3)]
    for key in keys:
        _ = cache.put(key, FOUND)
    assert len(cache) == 2
    assert cache.get(keys[0]) is None
    assert cache.get(keys[2]) == FOUND


def test_clear_resets_counters_but_keeps_generation() -> None:
    cache = ResolutionCache()
    cache.invalidate()
    _ = cache.put(KEY, FOUND)
    _ = cache.get(KEY)
    cache.clear()
    stats = cache.stats()
    assert (stats.hits, stats.misses, stats.size, stats.generation) == (0, 0, 0, 1)


def test_concurrent_puts_at_capacity_never_raise() -> None:
    cache = ResolutionCache(max_entries=8)
    errors: list[BaseException] = []

    def fill(worker: int) -> None:
        try:
            for index in range(5_000):
                _ = cache.put(ResolutionKey(f"./w{worker}/m{index}", Namespace.CORE, f"m{index}"), Defer())
        except Exception as exc:  # noqa: BLE001
            errors.append(exc)

    previous = sys.getswitchinterval()
    sys.setswitchinterval(1e-6)
    try:
        threads = [threading.Thread(target=fill, args=(worker,)) for worker in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
    finally:
        sys.setswitchinterval(previous)
    assert not errors
    assert len(cache) >= 1
