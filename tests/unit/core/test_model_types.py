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

"""Unit tests for shared enumerations."""

from __future__ import annotations

import pytest

from shadowtree.core import type_aliases
from shadowtree.core.model_types import DataFormat, LogFormat, Namespace, RootName

pytestmark = pytest.mark.unit


def test_root_name_namespace_mapping() -> None:
    assert RootName.CORE_SOURCE.namespace is Namespace.CORE
    assert RootName.EXTENSION_SOURCE.namespace is Namespace.EXTENSION
    assert RootName.EXTENSION_DEPENDENCY.namespace is Namespace.OTHER


def test_root_name_from_str_accepts_cli_spelling() -> None:
    assert RootName.from_str("Extension-Source") is RootName.EXTENSION_SOURCE
    with pytest.raises(ValueError, match="Unknown root"):
        _ = RootName.from_str("vendor")


def test_format_enums_from_str() -> None:
    assert LogFormat.from_str("JSON") is LogFormat.JSON
    assert DataFormat.from_str(" text ") is DataFormat.TEXT
    with pytest.raises(ValueError):
        _ = DataFormat.from_str("yaml")


def test_type_aliases_wrap_plain_strings() -> None:
    assert type_aliases.__all__ == ["AbsPath", "PackageName", "RelPath"]
    assert type_aliases.AbsPath("/ext/a.ts") == "/ext/a.ts"
    assert type_aliases.PackageName("@acme/widgets") == "@acme/widgets"
