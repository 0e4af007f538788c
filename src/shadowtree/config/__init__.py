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

"""Configuration management for shadowtree.

Loading, validation and model definitions for the resolver configuration:
the three namespace roots, the alias prefix, and the probe suffix lists.
"""

from __future__ import annotations

from .constants import (
    CONFIG_ENV,
    CORE_ROOT_ENV,
    DEFAULT_ALIAS_PREFIX,
    DEFAULT_CODE_FILE_PROBE_ORDER,
    DEFAULT_REDIRECT_ENTRY,
    DEFAULT_STATIC_ASSET_EXTENSIONS,
    DEPENDENCY_ROOT_ENV,
    EXTENSION_ROOT_ENV,
)
from .loader import (
    CONFIG_FILENAMES,
    LoadedConfig,
    apply_root_overrides,
    load_config,
    load_config_with_metadata,
    resolve_project_root,
)
from .models import (
    ConfigError,
    ConfigFieldTypeError,
    ConfigFieldValueError,
    ConfigReadError,
    DuplicateRootError,
    InvalidConfigFileError,
    MissingRootError,
    NestedRootsError,
    RelativeRootError,
    ResolverConfig,
    ResolverConfigModel,
    UnsupportedConfigVersionError,
    config_from_model,
    ensure_list,
)

__all__ = [
    "CONFIG_ENV",
    "CONFIG_FILENAMES",
    "CORE_ROOT_ENV",
    "DEFAULT_ALIAS_PREFIX",
    "DEFAULT_CODE_FILE_PROBE_ORDER",
    "DEFAULT_REDIRECT_ENTRY",
    "DEFAULT_STATIC_ASSET_EXTENSIONS",
    "DEPENDENCY_ROOT_ENV",
    "EXTENSION_ROOT_ENV",
    "ConfigError",
    "ConfigFieldTypeError",
    "ConfigFieldValueError",
    "ConfigReadError",
    "DuplicateRootError",
    "InvalidConfigFileError",
    "LoadedConfig",
    "MissingRootError",
    "NestedRootsError",
    "RelativeRootError",
    "ResolverConfig",
    "ResolverConfigModel",
    "UnsupportedConfigVersionError",
    "apply_root_overrides",
    "config_from_model",
    "ensure_list",
    "load_config",
    "load_config_with_metadata",
    "resolve_project_root",
]
