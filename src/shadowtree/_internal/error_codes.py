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

"""Stable error codes for shadowtree exceptions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import NewType

from shadowtree._internal.exceptions import ShadowtreeError, ShadowtreeTypeError, ShadowtreeValidationError
from shadowtree.config.models import (
    ConfigError,
    ConfigFieldTypeError,
    ConfigFieldValueError,
    ConfigReadError,
    DuplicateRootError,
    InvalidConfigFileError,
    MissingRootError,
    NestedRootsError,
    RelativeRootError,
    UnsupportedConfigVersionError,
)

ErrorCode = NewType("ErrorCode", str)

_ERROR_CODES: dict[type[BaseException], ErrorCode] = {
    ShadowtreeError: ErrorCode("ST000"),
    ShadowtreeValidationError: ErrorCode("ST100"),
    ShadowtreeTypeError: ErrorCode("ST101"),
    ConfigError: ErrorCode("ST110"),
    ConfigFieldTypeError: ErrorCode("ST111"),
    ConfigFieldValueError: ErrorCode("ST112"),
    UnsupportedConfigVersionError: ErrorCode("ST113"),
    ConfigReadError: ErrorCode("ST114"),
    InvalidConfigFileError: ErrorCode("ST115"),
    MissingRootError: ErrorCode("ST120"),
    RelativeRootError: ErrorCode("ST121"),
    DuplicateRootError: ErrorCode("ST122"),
    NestedRootsError: ErrorCode("ST123"),
}


def error_code_for(exc: BaseException) -> ErrorCode:
    """Return a stable error code for a structured shadowtree exception."""
    for cls in type(exc).__mro__:
        code = _ERROR_CODES.get(cls)
        if code:
            return code
    return ErrorCode("ST000")


def error_code_catalog() -> Mapping[str, ErrorCode]:
    """Return a mapping of fully-qualified exception names to error codes.

    Used by the docs and tests; the private table stays the single source
    of truth.
    """
    result: dict[str, ErrorCode] = {}
    for exc_type, code in _ERROR_CODES.items():
        key = f"{exc_type.__module__}.{exc_type.__name__}"
        result[key] = code
    return result


__all__ = ["ErrorCode", "error_code_catalog", "error_code_for"]
