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

"""Unit tests for the error code registry."""

from __future__ import annotations

from pathlib import Path

import pytest

from shadowtree.config.models import (
    ConfigReadError,
    MissingRootError,
    NestedRootsError,
)
from shadowtree.core.model_types import RootName
from shadowtree.error_codes import error_code_catalog, error_code_for
from shadowtree.exceptions import ShadowtreeError, ShadowtreeValidationError

pytestmark = pytest.mark.unit


def test_error_code_for_specific_classes() -> None:
    assert error_code_for(MissingRootError(RootName.CORE_SOURCE)) == "ST120"
    nested = NestedRootsError(RootName.CORE_SOURCE, RootName.EXTENSION_SOURCE, "/a", "/a/b")
    assert error_code_for(nested) == "ST123"


def test_error_code_for_walks_the_hierarchy() -> None:
    class _CustomValidation(ShadowtreeValidationError):
        pass

    assert error_code_for(_CustomValidation("x")) == "ST100"
    assert error_code_for(ShadowtreeError("x")) == "ST000"
    assert error_code_for(RuntimeError("x")) == "ST000"


def test_catalog_codes_are_unique_and_qualified() -> None:
    catalog = error_code_catalog()
    assert len(set(catalog.values())) == len(catalog)
    assert catalog["shadowtree.config.models.ConfigReadError"] == error_code_for(
        ConfigReadError(Path("x"), OSError("boom")),
    )
