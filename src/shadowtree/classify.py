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

"""Pure classification of import specifiers and importer paths.

Neither function touches the filesystem: a specifier is classified by its
leading characters, and an importer path by lexical containment in the
configured roots.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Final

from shadowtree._internal.paths import VIRTUAL_PREFIX, is_within, normalise, strip_query
from shadowtree.core.model_types import Namespace, SpecifierKind
from shadowtree.core.type_aliases import PackageName, RelPath

if TYPE_CHECKING:
    from collections.abc import Iterable

    from shadowtree.registry import Root

RELATIVE_MARKERS: Final[tuple[str, ...]] = (".", "..")
_RELATIVE_PREFIXES: Final[tuple[str, ...]] = ("./", "../")


def has_alias_prefix(specifier: str, alias_prefix: str) -> bool:
    """Return whether ``specifier`` is the alias itself or starts with ``alias/``."""
    return specifier == alias_prefix or specifier.startswith(alias_prefix + "/")


def classify_specifier(specifier: str, alias_prefix: str) -> SpecifierKind:
    """Classify a raw import specifier.

    Args:
        specifier: The import string as written in source.
        alias_prefix: Configured alias prefix (without trailing ``/``).

    Returns:
        ``RELATIVE`` for ``.``/``..``-led specifiers, ``ALIASED`` when the
        alias prefix matches on a segment boundary, otherwise ``BARE``.
    """
    if specifier in RELATIVE_MARKERS or specifier.startswith(_RELATIVE_PREFIXES):
        return SpecifierKind.RELATIVE
    if has_alias_prefix(specifier, alias_prefix):
        return SpecifierKind.ALIASED
    return SpecifierKind.BARE


def strip_alias(specifier: str, alias_prefix: str) -> RelPath:
    """Remove the alias prefix, leaving a logical path relative to a source root."""
    return RelPath(specifier[len(alias_prefix) :].lstrip("/"))


def package_name(specifier: str) -> PackageName | None:
    """Return the top-level package a bare specifier refers to.

    ``@scope/pkg/deep/path`` yields ``@scope/pkg`` and ``pkg/deep`` yields
    ``pkg``. Absolute paths, protocol specifiers (``node:fs``) and malformed
    scoped names have no package name.
    """
    if not specifier or specifier.startswith(("/", "\\")) or ":" in specifier:
        return None
    segments = specifier.split("/")
    if specifier.startswith("@"):
        if len(segments) < 2 or len(segments[0]) < 2 or not segments[1]:
            return None
        return PackageName("/".join(segments[:2]))
    return PackageName(segments[0]) if segments[0] not in RELATIVE_MARKERS else None


def importer_path(importer: str | None) -> str | None:
    """Turn a host importer id into a normalised absolute path, when it is one."""
    if not importer or importer.startswith(VIRTUAL_PREFIX):
        return None
    path = strip_query(importer)
    if not os.path.isabs(path):
        return None
    return normalise(path)


def classify_path(path: str | None, roots: Iterable[Root]) -> Namespace:
    """Classify an importing file by the root that contains it.

    The longest containing root wins. Files in the extension dependency root
    and files outside every root are ``OTHER``.

    Args:
        path: Importer id as given by the host (may carry a query suffix).
        roots: Configured roots.

    Returns:
        The importer's namespace.
    """
    absolute = importer_path(path)
    if absolute is None:
        return Namespace.OTHER
    best: Root | None = None
    for root in roots:
        if is_within(root.absolute_path, absolute) and (
            best is None or len(root.absolute_path) > len(best.absolute_path)
        ):
            best = root
    return Namespace.OTHER if best is None else best.name.namespace


__all__ = [
    "RELATIVE_MARKERS",
    "classify_path",
    "classify_specifier",
    "has_alias_prefix",
    "importer_path",
    "package_name",
    "strip_alias",
]
