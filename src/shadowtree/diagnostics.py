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

"""Offline reports over the configured trees.

These helpers walk the filesystem eagerly and are meant for the CLI and for
tests, never for the per-import hot path.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from shadowtree._internal.collection_utils import dedupe_preserve
from shadowtree._internal.logging_utils import structured_extra
from shadowtree.core.model_types import LogComponent, RootName
from shadowtree.core.type_aliases import AbsPath, RelPath
from shadowtree.probe import OverrideProbe

if TYPE_CHECKING:
    from shadowtree.registry import CandidateSuffixSet, Root, RootRegistry

logger: logging.Logger = logging.getLogger("shadowtree.diagnostics")

SKIPPED_DIRECTORIES: Final[frozenset[str]] = frozenset({"node_modules", ".git"})


@dataclass(slots=True, frozen=True)
class OverrideEntry:
    """An extension file that shadows a core file at the same logical path."""

    logical_path: RelPath
    extension_path: AbsPath
    core_path: AbsPath


@dataclass(slots=True, frozen=True)
class ProbeTie:
    """Several candidates exist for one logical path; only ``winner`` is ever used."""

    root: RootName
    logical_path: RelPath
    winner: AbsPath
    shadowed: tuple[AbsPath, ...]


def iter_files(root: Root) -> Iterator[RelPath]:
    """Yield POSIX paths of regular files under ``root`` in sorted order."""
    for current, dirs, files in os.walk(root.absolute_path):
        dirs[:] = sorted(name for name in dirs if name not in SKIPPED_DIRECTORIES)
        for name in sorted(files):
            full = os.path.join(current, name)
            yield RelPath(os.path.relpath(full, root.absolute_path).replace(os.sep, "/"))


def logical_stems(relative: str, suffixes: CandidateSuffixSet) -> tuple[RelPath, ...]:
    """Return the logical paths through which a probe can reach ``relative``.

    ``components/Button/index.tsx`` is reachable as ``components/Button/index``
    and as ``components/Button``; a static asset only by its literal path.
    """
    if suffixes.is_static_asset(relative):
        return (RelPath(relative),)
    stems = [
        relative[: -len(suffix)]
        for suffix in suffixes.code
        if relative.endswith(suffix) and len(relative) > len(suffix)
    ]
    stems.append(relative)
    return tuple(RelPath(stem) for stem in dedupe_preserve(stems))


def scan_overrides(registry: RootRegistry) -> list[OverrideEntry]:
    """List every logical path where the extension tree shadows the core tree.

    Returns:
        Entries sorted by logical path. Each shadowing pair of files is
        reported once, under the shortest logical path that reaches it.
    """
    probe = OverrideProbe(registry.suffixes)
    seen: set[str] = set()
    by_pair: dict[tuple[str, str], OverrideEntry] = {}
    for relative in iter_files(registry.extension_source):
        for stem in sorted(logical_stems(relative, registry.suffixes), key=len):
            if stem in seen:
                continue
            seen.add(stem)
            winner = probe.probe(stem, registry.extension_source)
            if winner is None:
                continue
            core = probe.probe(stem, registry.core_source)
            if core is None:
                continue
            current = by_pair.get((winner, core))
            if current is None or len(stem) < len(current.logical_path):
                by_pair[winner, core] = OverrideEntry(logical_path=stem, extension_path=winner, core_path=core)
    entries = list(by_pair.values())
    entries.sort(key=lambda entry: entry.logical_path)
    logger.info(
        "Found %d override(s)",
        len(entries),
        extra=structured_extra(LogComponent.DIAGNOSTICS, root=RootName.EXTENSION_SOURCE, details={"count": len(entries)}),
    )
    return entries


def scan_probe_ties(registry: RootRegistry, root_name: RootName = RootName.EXTENSION_SOURCE) -> list[ProbeTie]:
    """Report logical paths with more than one matching candidate.

    Probe order settles such ties silently at resolution time; this surfaces
    them so they can be cleaned up.
    """
    root = registry.root(root_name)
    probe = OverrideProbe(registry.suffixes)
    seen: set[str] = set()
    ties: list[ProbeTie] = []
    for relative in iter_files(root):
        for stem in logical_stems(relative, registry.suffixes):
            if stem in seen:
                continue
            seen.add(stem)
            matches = list(probe.iter_matches(stem, root))
            if len(matches) < 2:
                continue
            tie = ProbeTie(root=root_name, logical_path=stem, winner=matches[0], shadowed=tuple(matches[1:]))
            logger.warning(
                "Ambiguous logical path %s: %s wins over %s",
                stem,
                tie.winner,
                ", ".join(tie.shadowed),
                extra=structured_extra(LogComponent.DIAGNOSTICS, root=root_name, path=tie.winner),
            )
            ties.append(tie)
    ties.sort(key=lambda tie: tie.logical_path)
    return ties


__all__ = [
    "OverrideEntry",
    "ProbeTie",
    "iter_files",
    "logical_stems",
    "scan_overrides",
    "scan_probe_ties",
]
