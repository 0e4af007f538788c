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

"""Process-wide, read-only description of the configured namespace roots.

A ``RootRegistry`` is built once from a ``ResolverConfig`` and then passed to
every resolution call. It is a frozen value with no mutable state, so it can
be shared freely between threads or event-loop tasks.
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from itertools import combinations
from typing import TYPE_CHECKING, Final, Literal

from shadowtree._internal.logging_utils import structured_extra
from shadowtree._internal.paths import is_within, normalise, relative_within
from shadowtree.classify import classify_path
from shadowtree.config.models import (
    DuplicateRootError,
    MissingRootError,
    NestedRootsError,
    RelativeRootError,
)
from shadowtree.core.model_types import LogComponent, RootName
from shadowtree.core.type_aliases import RelPath

if TYPE_CHECKING:
    from pathlib import Path

    from shadowtree.config.models import ResolverConfig
    from shadowtree.core.model_types import Namespace

logger: logging.Logger = logging.getLogger("shadowtree.registry")


class OutOfBounds(enum.Enum):
    """Sentinel returned when a path lies outside the requested root."""

    TOKEN = "out-of-bounds"

    def __repr__(self) -> str:
        return "OUT_OF_BOUNDS"


OUT_OF_BOUNDS: Final = OutOfBounds.TOKEN


@dataclass(slots=True, frozen=True)
class Root:
    """A named, absolute, normalised base directory."""

    name: RootName
    absolute_path: str

    def contains(self, path: str) -> bool:
        """Return whether ``path`` (normalised, absolute) lies within this root."""
        return is_within(self.absolute_path, path)


@dataclass(slots=True, frozen=True)
class CandidateSuffixSet:
    """Ordered code-file suffixes plus the static-asset extension set.

    Attributes:
        code: Suffixes appended, in order, to a code logical path after the
            literal attempt.
        static_assets: Lower-cased extensions that are matched exactly.
    """

    code: tuple[str, ...]
    static_assets: frozenset[str]

    def is_static_asset(self, logical_path: str) -> bool:
        """Return whether the trailing extension marks ``logical_path`` as a static asset."""
        _, extension = os.path.splitext(logical_path)
        return extension.lower() in self.static_assets

    def candidates(self, logical_path: str) -> tuple[str, ...]:
        """Return relative candidate paths in probe order.

        Static assets only ever produce the literal path. An empty logical
        path (the root itself) only takes directory-style suffixes such as
        ``/index.ts``.
        """
        if self.is_static_asset(logical_path):
            return (logical_path,)
        if not logical_path:
            return tuple(suffix.lstrip("/") for suffix in self.code if suffix.startswith("/"))
        return (logical_path, *(logical_path + suffix for suffix in self.code))


@dataclass(slots=True, frozen=True)
class RootRegistry:
    """Validated roots and probe settings shared by every resolution request."""

    extension_source: Root
    core_source: Root
    extension_dependency: Root
    suffixes: CandidateSuffixSet
    alias_prefix: str
    redirect_entry: str

    @classmethod
    def initialize(cls, config: ResolverConfig) -> RootRegistry:
        """Validate a configuration and freeze it into a registry.

        Args:
            config: Loaded resolver configuration.

        Returns:
            The registry.

        Raises:
            MissingRootError: A root is not configured.
            RelativeRootError: A root is not an absolute path.
            DuplicateRootError: Two roots are the same directory.
            NestedRootsError: One root lies inside another.
        """
        declared: tuple[tuple[RootName, Path | None], ...] = (
            (RootName.EXTENSION_SOURCE, config.extension_source_root),
            (RootName.CORE_SOURCE, config.core_source_root),
            (RootName.EXTENSION_DEPENDENCY, config.extension_dependency_root),
        )
        roots: dict[RootName, Root] = {}
        for name, value in declared:
            if value is None or not os.fspath(value).strip():
                raise MissingRootError(name)
            raw = os.fspath(value)
            if not os.path.isabs(raw):
                raise RelativeRootError(name, raw)
            roots[name] = Root(name=name, absolute_path=normalise(raw))
        _check_disjoint(tuple(roots.values()))

        registry = cls(
            extension_source=roots[RootName.EXTENSION_SOURCE],
            core_source=roots[RootName.CORE_SOURCE],
            extension_dependency=roots[RootName.EXTENSION_DEPENDENCY],
            suffixes=CandidateSuffixSet(
                code=tuple(config.code_file_probe_order),
                static_assets=frozenset(ext.lower() for ext in config.static_asset_extensions),
            ),
            alias_prefix=config.alias_prefix,
            redirect_entry=config.redirect_entry,
        )
        for root in registry.roots:
            if not os.path.isdir(root.absolute_path):
                logger.warning(
                    "%s root %s does not exist yet; it will be treated as empty",
                    root.name,
                    root.absolute_path,
                    extra=structured_extra(LogComponent.REGISTRY, root=root.name, path=root.absolute_path),
                )
        return registry

    @property
    def roots(self) -> tuple[Root, Root, Root]:
        """All three roots, extension source first."""
        return (self.extension_source, self.core_source, self.extension_dependency)

    def root(self, name: RootName) -> Root:
        """Return the root registered under ``name``."""
        match name:
            case RootName.EXTENSION_SOURCE:
                return self.extension_source
            case RootName.CORE_SOURCE:
                return self.core_source
            case _:
                return self.extension_dependency

    def classify(self, path: str | None) -> Namespace:
        """Classify an importer path by root containment."""
        return classify_path(path, self.roots)

    def relative_to(self, path: str, root: Root | RootName) -> RelPath | Literal[OutOfBounds.TOKEN]:
        """Express an absolute path relative to a root.

        Returns:
            POSIX relative path (``""`` for the root itself), or
            ``OUT_OF_BOUNDS`` if the path escapes the root.
        """
        target = root if isinstance(root, Root) else self.root(root)
        relative = relative_within(target.absolute_path, path)
        return OUT_OF_BOUNDS if relative is None else RelPath(relative)


def _check_disjoint(roots: tuple[Root, ...]) -> None:
    for first, second in combinations(roots, 2):
        if first.absolute_path == second.absolute_path:
            raise DuplicateRootError(first.name, second.name, first.absolute_path)
        if first.contains(second.absolute_path):
            raise NestedRootsError(first.name, second.name, first.absolute_path, second.absolute_path)
        if second.contains(first.absolute_path):
            raise NestedRootsError(second.name, first.name, second.absolute_path, first.absolute_path)


__all__ = ["OUT_OF_BOUNDS", "CandidateSuffixSet", "OutOfBounds", "Root", "RootRegistry"]
