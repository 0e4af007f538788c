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

"""Unit tests for RootRegistry construction and path helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from shadowtree.config.models import (
    DuplicateRootError,
    MissingRootError,
    NestedRootsError,
    RelativeRootError,
    ResolverConfig,
)
from shadowtree.core.model_types import Namespace, RootName
from shadowtree.registry import OUT_OF_BOUNDS, CandidateSuffixSet, RootRegistry

if TYPE_CHECKING:
    from tests.fixtures.trees import SourceTreeBuilder

pytestmark = pytest.mark.unit


def test_initialize_freezes_roots(tree: SourceTreeBuilder) -> None:
    registry = tree.registry()
    assert registry.extension_source.absolute_path == str(tree.extension_root)
    assert registry.core_source.absolute_path == str(tree.core_root)
    assert registry.extension_dependency.absolute_path == str(tree.dependency_root)
    assert [root.name for root in registry.roots] == [
        RootName.EXTENSION_SOURCE,
        RootName.CORE_SOURCE,
        RootName.EXTENSION_DEPENDENCY,
    ]
    assert registry.root(RootName.CORE_SOURCE) is registry.core_source
    assert registry.alias_prefix == "@core"
    assert registry.redirect_entry == "index.tsx"


def test_initialize_normalises_root_paths(tree: SourceTreeBuilder) -> None:
    registry = tree.registry(core_source_root=tree.core_root / ".." / "src")
    assert registry.core_source.absolute_path == str(tree.core_root)


def test_missing_root_is_fatal(tree: SourceTreeBuilder) -> None:
    with pytest.raises(MissingRootError, match="core_source_root is required"):
        _ = RootRegistry.initialize(tree.config(core_source_root=None))


def test_relative_root_is_fatal(tree: SourceTreeBuilder) -> None:
    with pytest.raises(RelativeRootError):
        _ = RootRegistry.initialize(tree.config(extension_source_root=Path("extension/src")))


def test_duplicate_roots_are_fatal(tree: SourceTreeBuilder) -> None:
    with pytest.raises(DuplicateRootError):
        _ = RootRegistry.initialize(tree.config(core_source_root=tree.extension_root))


def test_nested_roots_are_fatal(tree: SourceTreeBuilder) -> None:
    nested = tree.core_root / "plugins"
    with pytest.raises(NestedRootsError) as excinfo:
        _ = RootRegistry.initialize(tree.config(extension_source_root=nested))
    assert excinfo.value.outer is RootName.CORE_SOURCE
    assert excinfo.value.inner is RootName.EXTENSION_SOURCE


def test_sibling_prefix_roots_are_not_nested(tmp_path: Path) -> None:
    config = ResolverConfig(
        extension_source_root=tmp_path / "src-ext",
        core_source_root=tmp_path / "src",
        extension_dependency_root=tmp_path / "deps",
    )
    registry = RootRegistry.initialize(config)
    assert registry.classify(str(tmp_path / "src-ext" / "a.ts")) is Namespace.EXTENSION


def test_missing_directory_only_warns(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    config = ResolverConfig(
        extension_source_root=tmp_path / "ext",
        core_source_root=tmp_path / "core",
        extension_dependency_root=tmp_path / "deps",
    )
    with caplog.at_level(logging.WARNING, logger="shadowtree.registry"):
        registry = RootRegistry.initialize(config)
    assert registry.core_source.absolute_path == str(tmp_path / "core")
    assert sum("does not exist yet" in record.getMessage() for record in caplog.records) == 3


def test_relative_to(tree: SourceTreeBuilder) -> None:
    registry = tree.registry()
    inside = str(tree.core_root / "components" / "Header.tsx")
    assert registry.relative_to(inside, RootName.CORE_SOURCE) == "components/Header.tsx"
    assert registry.relative_to(str(tree.core_root), RootName.CORE_SOURCE) == ""
    assert registry.relative_to(str(tree.extension_root / "a.ts"), RootName.CORE_SOURCE) is OUT_OF_BOUNDS
    assert registry.relative_to(str(tree.core_root / ".." / "secrets.ts"), registry.core_source) is OUT_OF_BOUNDS


def test_classify_uses_roots(tree: SourceTreeBuilder) -> None:
    registry = tree.registry()
    assert registry.classify(str(tree.core_root / "App.tsx")) is Namespace.CORE
    assert registry.classify(str(tree.extension_root / "App.tsx")) is Namespace.EXTENSION
    assert registry.classify(str(tree.dependency_root / "react" / "index.js")) is Namespace.OTHER


def test_candidate_order() -> None:
    suffixes = CandidateSuffixSet(code=(".tsx", ".ts", "/index.tsx"), static_assets=frozenset({".css", ".svg"}))
    assert suffixes.candidates("components/Header") == (
        "components/Header",
        "components/Header.tsx",
        "components/Header.ts",
        "components/Header/index.tsx",
    )


def test_candidates_for_static_assets_are_exact() -> None:
    suffixes = CandidateSuffixSet(code=(".tsx",), static_assets=frozenset({".css", ".svg"}))
    assert suffixes.candidates("styles/theme.css") == ("styles/theme.css",)
    assert suffixes.candidates("img/Logo.SVG") == ("img/Logo.SVG",)
    assert suffixes.is_static_asset("a.svg")
    assert not suffixes.is_static_asset("a.tsx")


def test_candidates_for_root_path_only_use_directory_suffixes() -> None:
    suffixes = CandidateSuffixSet(code=(".tsx", "/index.tsx", "/index.ts"), static_assets=frozenset())
    assert suffixes.candidates("") == ("index.tsx", "index.ts")
