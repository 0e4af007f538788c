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

"""Default values for resolver configuration."""

from __future__ import annotations

from typing import Final

CONFIG_VERSION: Final[int] = 0

DEFAULT_ALIAS_PREFIX: Final[str] = "@core"
DEFAULT_REDIRECT_ENTRY: Final[str] = "index.tsx"

DEFAULT_CODE_FILE_PROBE_ORDER: Final[tuple[str, ...]] = (
    ".tsx",
    ".ts",
    ".jsx",
    ".js",
    "/index.tsx",
    "/index.ts",
)
DEFAULT_STATIC_ASSET_EXTENSIONS: Final[tuple[str, ...]] = (
    ".css",
    ".scss",
    ".sass",
    ".less",
    ".json",
    ".svg",
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".webp",
)

CONFIG_ENV: Final[str] = "SHADOWTREE_CONFIG"
EXTENSION_ROOT_ENV: Final[str] = "SHADOWTREE_EXTENSION_ROOT"
CORE_ROOT_ENV: Final[str] = "SHADOWTREE_CORE_ROOT"
DEPENDENCY_ROOT_ENV: Final[str] = "SHADOWTREE_DEPENDENCY_ROOT"

__all__ = [
    "CONFIG_ENV",
    "CONFIG_VERSION",
    "CORE_ROOT_ENV",
    "DEFAULT_ALIAS_PREFIX",
    "DEFAULT_CODE_FILE_PROBE_ORDER",
    "DEFAULT_REDIRECT_ENTRY",
    "DEFAULT_STATIC_ASSET_EXTENSIONS",
    "DEPENDENCY_ROOT_ENV",
    "EXTENSION_ROOT_ENV",
]
