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

"""Lexical path helpers for root containment.

Nothing here touches the filesystem. Containment is decided on normalised
strings so that ``..`` segments can never smuggle a candidate outside its
root, and symlinks are deliberately left unresolved.
"""

from __future__ import annotations

import os
from typing import Final

VIRTUAL_PREFIX: Final[str] = "\0"
_QUERY_MARKERS: Final[tuple[str, ...]] = ("?", "#")


def normalise(path: str | os.PathLike[str]) -> str:
    """Return a lexically normalised native path string."""
    return os.path.normpath(os.fspath(path))


def is_within(root: str, candidate: str) -> bool:
    """Return whether ``candidate`` equals ``root`` or lies beneath it.

    Both arguments must already be normalised absolute paths.
    """
    if candidate == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return candidate.startswith(prefix)


def relative_within(root: str, candidate: str) -> str | None:
    """Express ``candidate`` relative to ``root`` in POSIX form.

    Returns:
        ``""`` for the root itself, the relative path for descendants, and
        ``None`` when the candidate escapes the root.
    """
    target = normalise(candidate)
    if not is_within(root, target):
        return None
    if target == root:
        return ""
    return os.path.relpath(target, root).replace(os.sep, "/")


def join_within(root: str, relative: str) -> str | None:
    """Join a relative path onto ``root`` and keep it only if still contained."""
    if os.path.isabs(relative):
        return None
    joined = normalise(os.path.join(root, relative)) if relative else root
    return joined if is_within(root, joined) else None


def strip_query(importer: str) -> str:
    """Drop a host-appended query or fragment (``?v=1``, ``#hash``) from an id."""
    cut = len(importer)
    for marker in _QUERY_MARKERS:
        index = importer.find(marker)
        if index != -1:
            cut = min(cut, index)
    return importer[:cut]


__all__ = [
    "VIRTUAL_PREFIX",
    "is_within",
    "join_within",
    "normalise",
    "relative_within",
    "strip_query",
]
