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

"""Unit tests for the override and probe-tie reports."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from shadowtree.core.model_types import RootName
from shadowtree.diagnostics import iter_files, logical_stems, scan_overrides, scan_probe_ties
from shadowtree.registry import CandidateSuffixSet

if TYPE_CHECKING:
    from tests.fixtures.trees import SourceTreeBuilder

pytestmark = pytest.mark.unit

SUFFIXES = CandidateSuffixSet(code=(".tsx", ".ts", "/index.tsx"), static_assets=frozenset({".css"}))


def test_logical_stems_for_code_files() -> None:
    assert logical_stems("components/Header.tsx", SUFFIXES) == ("components/Header", "components/Header.tsx")
    assert logical_stems("components/Sidebar/index.tsx", SUFFIXES) == (
        "components/Sidebar/index",
        "components/Sidebar",
        "components/Sidebar/index.tsx",
    )


def test_logical_stems_for_static_assets_and_unknown_files() -> None:
    assert logical_stems("styles/theme.css", SUFFIXES) == ("styles/theme.css",)
    assert logical_stems("README.md", SUFFIXES) == ("README.md",)


def test_iter_files_skips_node_modules(tree: SourceTreeBuilder) -> None:
    _ = tree.extension_file("b.ts")
    _ = tree.extension_file("a/c.ts")
    _ = tree.extension_file("node_modules/pkg/index.js")
    registry = tree.registry()
    assert list(iter_files(registry.extension_source)) == ["a/c.ts", "b.ts"]


def test_scan_overrides_reports_each_pair_once(populated_tree: SourceTreeBuilder) -> None:
    entries = scan_overrides(populated_tree.registry())
    assert [entry.logical_path for entry in entries] == [
        "components/Header",
        "components/Sidebar",
        "styles/theme.css",
    ]
    header = entries[0]
    assert header.extension_path == str(populated_tree.extension_root / "components" / "Header.tsx")
    assert header.core_path == str(populated_tree.core_root / "components" / "Header.tsx")


def test_scan_overrides_matches_across_suffixes(tree: SourceTreeBuilder) -> None:
    _ = tree.core_file("services/api.js")
    ext = tree.extension_file("services/api.ts")
    entries = scan_overrides(tree.registry())
    assert len(entries) == 1
    assert entries[0].extension_path == str(ext)


def test_scan_probe_ties(tree: SourceTreeBuilder, caplog: pytest.LogCaptureFixture) -> None:
    tsx = tree.extension_file("widgets/Card.tsx")
    ts = tree.extension_file("widgets/Card.ts")
    _ = tree.extension_file("widgets/Solo.tsx")
    with caplog.at_level(logging.WARNING, logger="shadowtree.diagnostics"):
        ties = scan_probe_ties(tree.registry())
    assert len(ties) == 1
    tie = ties[0]
    assert tie.root is RootName.EXTENSION_SOURCE
    assert tie.logical_path == "widgets/Card"
    assert tie.winner == str(tsx)
    assert tie.shadowed == (str(ts),)
    assert any("Ambiguous logical path" in record.getMessage() for record in caplog.records)


def test_scan_probe_ties_in_core_root(tree: SourceTreeBuilder) -> None:
    _ = tree.core_file("Layout.tsx")
    _ = tree.core_file("Layout/index.tsx")
    ties = scan_probe_ties(tree.registry(), RootName.CORE_SOURCE)
    assert [tie.logical_path for tie in ties] == ["Layout"]
