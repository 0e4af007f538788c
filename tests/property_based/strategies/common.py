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

"""Shared Hypothesis strategies for specifiers and logical paths."""

from __future__ import annotations

from hypothesis import strategies as st

SEGMENT_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-"


def path_segments() -> st.SearchStrategy[str]:
    """A single file or directory name (never ``.`` or ``..``)."""
    return st.text(alphabet=SEGMENT_ALPHABET, min_size=1, max_size=8)


def logical_paths(max_depth: int = 4) -> st.SearchStrategy[str]:
    """POSIX logical paths made of plain segments."""
    return st.lists(path_segments(), min_size=1, max_size=max_depth).map("/".join)


def traversal_paths(max_depth: int = 5) -> st.SearchStrategy[str]:
    """Logical paths that may contain ``..`` and ``.`` segments."""
    segment = st.one_of(path_segments(), st.just(".."), st.just("."))
    return st.lists(segment, min_size=1, max_size=max_depth).map("/".join)


def relative_specifiers() -> st.SearchStrategy[str]:
    """Relative import specifiers such as ``./a/b`` or ``../../x``."""
    return st.tuples(st.sampled_from(["./", "../", "../../"]), traversal_paths()).map("".join)


def bare_specifiers() -> st.SearchStrategy[str]:
    """Bare package specifiers, scoped or not, with optional deep paths."""
    unscoped = st.tuples(path_segments(), st.lists(path_segments(), max_size=2)).map(
        lambda parts: "/".join([parts[0], *parts[1]]),
    )
    scoped = st.tuples(path_segments(), path_segments(), st.lists(path_segments(), max_size=2)).map(
        lambda parts: "/".join([f"@{parts[0]}", parts[1], *parts[2]]),
    )
    return st.one_of(unscoped, scoped).filter(lambda value: not value.startswith(("-", "@core")))


def any_specifiers() -> st.SearchStrategy[str]:
    """Relative, aliased and bare specifiers mixed together."""
    aliased = traversal_paths().map(lambda path: f"@core/{path}")
    return st.one_of(relative_specifiers(), aliased, bare_specifiers())
