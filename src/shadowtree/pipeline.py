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

"""Rule-table resolution of a single import edge.

``ResolutionPipeline.resolve`` classifies the specifier and the importer,
then evaluates the rules below in order; the first matching rule decides.

R1  bare specifier from a core file: if the package exists in the extension
    dependency root, ``Redirect`` to the extension source root.
R2  relative specifier from a core file, target inside the core root: an
    extension file at the same logical path wins, else ``Defer``.
R3  relative specifier from an extension file, target inside the extension
    root: probe the extension root, then the core root.
R4  aliased specifier from anywhere: probe the extension root, else ``Defer``
    so the host's own alias table maps it onto the core tree.
R5  everything else: ``Defer``.

No rule raises for a missing file; absence is the common case.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from shadowtree._internal.logging_utils import structured_extra
from shadowtree._internal.paths import join_within, normalise
from shadowtree.cache import ResolutionKey
from shadowtree.classify import classify_specifier, importer_path, package_name, strip_alias
from shadowtree.core.model_types import LogComponent, Namespace, ResolutionRule, RootName, SpecifierKind
from shadowtree.probe import OverrideProbe
from shadowtree.registry import OUT_OF_BOUNDS
from shadowtree.results import Defer, Found, Redirect

if TYPE_CHECKING:
    from shadowtree.cache import ResolutionCache
    from shadowtree.registry import RootRegistry
    from shadowtree.results import ResolutionResult

logger: logging.Logger = logging.getLogger("shadowtree.pipeline")

PathCheck = Callable[[str], bool]


class ResolutionPipeline:
    """Evaluate the override rule table against an immutable registry.

    Args:
        registry: Validated roots and probe settings.
        probe: Probe to use (defaults to one built from ``registry.suffixes``).
        cache: Optional generation-stamped memo of decisions.
        exists: Predicate used for the dependency-root package check.
    """

    __slots__ = ("_cache", "_exists", "_probe", "_registry")

    def __init__(
        self,
        registry: RootRegistry,
        *,
        probe: OverrideProbe | None = None,
        cache: ResolutionCache | None = None,
        exists: PathCheck = os.path.exists,
    ) -> None:
        self._registry = registry
        self._probe = probe or OverrideProbe(registry.suffixes)
        self._cache = cache
        self._exists = exists

    @property
    def registry(self) -> RootRegistry:
        return self._registry

    @property
    def cache(self) -> ResolutionCache | None:
        return self._cache

    def resolve(self, specifier: str, importer: str | None) -> ResolutionResult:
        """Decide how the host should satisfy ``specifier`` imported from ``importer``.

        Args:
            specifier: Raw import string.
            importer: Id of the importing module as given by the host, or
                ``None`` (or empty) for entry points.

        Returns:
            ``Found``, ``Redirect`` or ``Defer``.
        """
        started = time.perf_counter()
        if not importer:
            return Defer()
        kind = classify_specifier(specifier, self._registry.alias_prefix)
        namespace = self._registry.classify(importer)
        result = self._evaluate(specifier, kind, namespace, importer_path(importer))
        logger.debug(
            "%s %s -> %s",
            kind,
            specifier,
            result.outcome,
            extra=structured_extra(
                LogComponent.PIPELINE,
                specifier=specifier,
                importer=importer,
                namespace=namespace,
                rule=result.rule,
                outcome=result.outcome,
                path=getattr(result, "path", None),
                duration_ms=(time.perf_counter() - started) * 1000,
            ),
        )
        return result

    def _evaluate(
        self,
        specifier: str,
        kind: SpecifierKind,
        namespace: Namespace,
        importer: str | None,
    ) -> ResolutionResult:
        match kind, namespace:
            case SpecifierKind.BARE, Namespace.CORE:
                return self._bare_from_core(specifier)
            case SpecifierKind.RELATIVE, Namespace.CORE if importer is not None:
                return self._relative_from_core(specifier, importer)
            case SpecifierKind.RELATIVE, Namespace.EXTENSION if importer is not None:
                return self._relative_from_extension(specifier, importer)
            case SpecifierKind.ALIASED, _:
                return self._aliased(specifier, namespace)
            case _:
                return Defer()

    def _bare_from_core(self, specifier: str) -> ResolutionResult:
        name = package_name(specifier)
        if name is None:
            return Defer(ResolutionRule.BARE_FROM_CORE)

        def compute() -> ResolutionResult:
            location = join_within(self._registry.extension_dependency.absolute_path, name)
            if location is not None and self._exists(location):
                return Redirect(RootName.EXTENSION_SOURCE)
            return Defer(ResolutionRule.BARE_FROM_CORE)

        return self._memoised(ResolutionKey(specifier, Namespace.CORE, name), compute)

    def _relative_from_core(self, specifier: str, importer: str) -> ResolutionResult:
        target = normalise(os.path.join(os.path.dirname(importer), specifier))
        relative = self._registry.relative_to(target, RootName.CORE_SOURCE)
        if relative is OUT_OF_BOUNDS:
            return Defer(ResolutionRule.RELATIVE_FROM_CORE)

        def compute() -> ResolutionResult:
            override = self._probe.probe(relative, self._registry.extension_source)
            if override is not None:
                return Found(override, ResolutionRule.RELATIVE_FROM_CORE)
            return Defer(ResolutionRule.RELATIVE_FROM_CORE)

        return self._memoised(ResolutionKey(specifier, Namespace.CORE, relative), compute)

    def _relative_from_extension(self, specifier: str, importer: str) -> ResolutionResult:
        target = normalise(os.path.join(os.path.dirname(importer), specifier))
        relative = self._registry.relative_to(target, RootName.EXTENSION_SOURCE)
        if relative is OUT_OF_BOUNDS:
            return Defer()

        def compute() -> ResolutionResult:
            for root in (self._registry.extension_source, self._registry.core_source):
                hit = self._probe.probe(relative, root)
                if hit is not None:
                    return Found(hit, ResolutionRule.RELATIVE_FROM_EXTENSION)
            return Defer(ResolutionRule.RELATIVE_FROM_EXTENSION)

        return self._memoised(ResolutionKey(specifier, Namespace.EXTENSION, relative), compute)

    def _aliased(self, specifier: str, namespace: Namespace) -> ResolutionResult:
        logical = strip_alias(specifier, self._registry.alias_prefix)

        def compute() -> ResolutionResult:
            override = self._probe.probe(logical, self._registry.extension_source)
            if override is not None:
                return Found(override, ResolutionRule.ALIASED)
            return Defer(ResolutionRule.ALIASED)

        return self._memoised(ResolutionKey(specifier, namespace, logical), compute)

    def _memoised(self, key: ResolutionKey, compute: Callable[[], ResolutionResult]) -> ResolutionResult:
        if self._cache is None:
            return compute()
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(
                "Cache hit for %s",
                key.specifier,
                extra=structured_extra(
                    LogComponent.CACHE,
                    specifier=key.specifier,
                    namespace=key.namespace,
                    outcome=cached.outcome,
                    cached=True,
                ),
            )
            return cached
        generation = self._cache.generation
        result = compute()
        _ = self._cache.put(key, result, generation=generation)
        return result


def resolve(registry: RootRegistry, specifier: str, importer: str | None) -> ResolutionResult:
    """Resolve one import edge without a cache.

    Convenience wrapper for callers that hold only a registry.
    """
    return ResolutionPipeline(registry).resolve(specifier, importer)


__all__ = ["PathCheck", "ResolutionPipeline", "resolve"]
