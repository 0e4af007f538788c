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

"""Ordered existence probing of logical paths under a root."""

from __future__ import annotations

import logging
import os
import posixpath
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from shadowtree._internal.logging_utils import structured_extra
from shadowtree._internal.paths import join_within
from shadowtree.core.model_types import LogComponent
from shadowtree.core.type_aliases import AbsPath

if TYPE_CHECKING:
    from shadowtree.registry import CandidateSuffixSet, Root

logger: logging.Logger = logging.getLogger("shadowtree.probe")

FileCheck = Callable[[str], bool]


class OverrideProbe:
    """Find the first existing candidate for a logical path under a root.

    Candidates come from ``CandidateSuffixSet.candidates``: the literal path,
    then each code suffix in configured order (static assets get the literal
    only). The first candidate that is an existing regular file wins, even if
    a later candidate also exists.

    Args:
        suffixes: Probe configuration from the registry.
        is_file: Existence predicate. Defaults to ``os.path.isfile``, which
            reports ``False`` rather than raising on unreadable paths.
    """

    __slots__ = ("_is_file", "_suffixes")

    def __init__(self, suffixes: CandidateSuffixSet, *, is_file: FileCheck = os.path.isfile) -> None:
        self._suffixes = suffixes
        self._is_file = is_file

    @property
    def suffixes(self) -> CandidateSuffixSet:
        return self._suffixes

    def probe(self, logical_path: str, root: Root) -> AbsPath | None:
        """Return the first existing candidate, or ``None``.

        The logical path is rejected before any filesystem access if it is
        absolute or normalises to somewhere outside ``root``.
        """
        for candidate in self.iter_matches(logical_path, root):
            logger.debug(
                "Probe hit for %s under %s",
                logical_path,
                root.name,
                extra=structured_extra(LogComponent.PROBE, root=root.name, path=candidate),
            )
            return candidate
        return None

    def iter_matches(self, logical_path: str, root: Root) -> Iterator[AbsPath]:
        """Yield every existing candidate in probe order.

        ``probe`` takes the first of these; diagnostics use the rest to report
        shadowed duplicates.
        The logical path is normalised first, so `components/` and
        `a/../components` probe the same candidates as `components`.
        """
        normalised = posixpath.normpath(logical_path) if logical_path else ""
        if normalised == ".":
            normalised = ""
        if join_within(root.absolute_path, logical_path) is None:
            logger.debug(
                "Rejected %s: escapes %s",
                logical_path,
                root.name,
                extra=structured_extra(LogComponent.PROBE, root=root.name, details={"logical": logical_path}),
            )
            return
        for relative in self._suffixes.candidates(normalised):
            candidate = join_within(root.absolute_path, relative)
            if candidate is None or candidate == root.absolute_path:
                continue
            if self._is_file(candidate):
                yield AbsPath(candidate)


__all__ = ["FileCheck", "OverrideProbe"]
