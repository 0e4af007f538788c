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

"""Unit tests for OverrideProbe."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from shadowtree.core.model_types import RootName
from shadowtree.probe import OverrideProbe
from shadowtree.registry import CandidateSuffixSet, Root

if TYPE_CHECKING:
    from tests.fixtures.trees import SourceTreeBuilder

pytestmark = pytest.mark.unit

SUFFIXES = CandidateSuffixSet(
    code=(".tsx", ".ts", ".js", "/index.tsx", "/index.ts"),
    static_assets=frozenset({".css", ".svg"}),
)
ROOT = Root(RootName.EXTENSION_SOURCE, "/ext")


class _RecordingFiles:
    def __init__(self, *existing: str) -> None:
        self.existing = set(existing)
        self.checked: list[str] = []

    def __call__(self, path: str) -> bool:
        self.checked.append(path)
        return path in self.existing


def test_first_candidate_in_probe_order_wins() -> None:
    files = _RecordingFiles("/ext/widgets/Card.ts", "/ext/widgets/Card.tsx")
    probe = OverrideProbe(SUFFIXES, is_file=files)
    assert probe.probe("widgets/Card", ROOT) == "/ext/widgets/Card.tsx"
    assert files.checked == ["/ext/widgets/Card", "/ext/widgets/Card.tsx"]


def test_literal_is_tried_before_suffixes() -> None:
    files = _RecordingFiles("/ext/worker.js", "/ext/worker.js.tsx")
    probe = OverrideProbe(SUFFIXES, is_file=files)
    assert probe.probe("worker.js", ROOT) == "/ext/worker.js"


def test_static_asset_is_checked_exactly_once() -> None:
    files = _RecordingFiles("/ext/logo.svg.tsx")
    probe = OverrideProbe(SUFFIXES, is_file=files)
    assert probe.probe("logo.svg", ROOT) is None
    assert files.checked == ["/ext/logo.svg"]


def test_escaping_logical_path_never_touches_filesystem() -> None:
    files = _RecordingFiles("/etc/passwd")
    probe = OverrideProbe(SUFFIXES, is_file=files)
    assert probe.probe("../etc/passwd", ROOT) is None
    assert probe.probe("/etc/passwd", ROOT) is None
    assert files.checked == []


def test_root_logical_path_only_probes_index_files() -> None:
    files = _RecordingFiles("/ext.tsx", "/ext/index.ts")
    probe = OverrideProbe(SUFFIXES, is_file=files)
    assert probe.probe("", ROOT) == "/ext/index.ts"
    assert "/ext.tsx" not in files.checked


def test_iter_matches_yields_every_candidate() -> None:
    files = _RecordingFiles("/ext/a.tsx", "/ext/a/index.ts")
    probe = OverrideProbe(SUFFIXES, is_file=files)
    assert list(probe.iter_matches("a", ROOT)) == ["/ext/a.tsx", "/ext/a/index.ts"]


def test_directory_never_satisfies_a_code_probe(tree: SourceTreeBuilder) -> None:
    index = tree.extension_file("components/Sidebar/index.tsx")
    registry = tree.registry()
    probe = OverrideProbe(registry.suffixes)
    assert probe.probe("components/Sidebar", registry.extension_source) == str(index)


def test_missing_file_is_absent(tree: SourceTreeBuilder) -> None:
    registry = tree.registry()
    probe = OverrideProbe(registry.suffixes)
    assert probe.probe("components/Nothing", registry.extension_source) is None
    assert probe.suffixes is registry.suffixes


@pytest.mark.parametrize("logical", ["widgets/", "widgets/./", "other/../widgets"])
def test_logical_path_is_normalised_before_probing(logical: str) -> None:
    files = _RecordingFiles("/ext/widgets/.tsx", "/ext/widgets/index.tsx")
    probe = OverrideProbe(SUFFIXES, is_file=files)
    assert probe.probe(logical, ROOT) == "/ext/widgets/index.tsx"
    assert "/ext/widgets/.tsx" not in files.checked
