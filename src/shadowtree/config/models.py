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

"""Configuration models and validation for shadowtree.

Two layers live here: Pydantic models that validate and coerce raw TOML
payloads, and a frozen dataclass (``ResolverConfig``) that the rest of the
package consumes. Root invariants (presence, absoluteness, nesting) are not
checked here; ``RootRegistry.initialize`` is the single gate for those so that
roots supplied through CLI flags or environment variables are held to the
same rules as roots read from a file.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, ClassVar, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from shadowtree._internal.collection_utils import dedupe_preserve
from shadowtree._internal.exceptions import ShadowtreeValidationError

from .constants import (
    CONFIG_VERSION,
    DEFAULT_ALIAS_PREFIX,
    DEFAULT_CODE_FILE_PROBE_ORDER,
    DEFAULT_REDIRECT_ENTRY,
    DEFAULT_STATIC_ASSET_EXTENSIONS,
)

if TYPE_CHECKING:
    from shadowtree.core.model_types import RootName


class ConfigError(ShadowtreeValidationError):
    """Raised when resolver configuration is unusable. Always fatal at startup."""


class ConfigFieldTypeError(ConfigError):
    """Raised when a configuration field has an invalid type."""

    def __init__(self, field: str, expected: str) -> None:
        """Initialize the exception with the offending field.

        Args:
            field: The name of the configuration field.
            expected: Human readable description of the expected type.
        """
        self.field = field
        self.expected = expected
        super().__init__(f"{field} must be {expected}")


class ConfigFieldValueError(ConfigError):
    """Raised when a configuration field holds an unsupported value."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        """Initialize the exception with the offending field and value.

        Args:
            field: The name of the configuration field.
            value: The rejected value.
            reason: Why the value was rejected.
        """
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field} value {value!r} is invalid: {reason}")


class UnsupportedConfigVersionError(ConfigError):
    """Raised when a configuration file declares an unsupported schema version."""

    def __init__(self, provided: int, expected: int) -> None:
        """Initialize the exception with version information.

        Args:
            provided: The config_version value found in the file.
            expected: The config_version value this release understands.
        """
        self.provided = provided
        self.expected = expected
        super().__init__(f"Unsupported config_version {provided}; expected {expected}")


class ConfigReadError(ConfigError):
    """Raised when a configuration file cannot be read or parsed."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The configuration file that could not be read.
            error: The underlying exception.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigError):
    """Raised when a configuration file fails schema validation."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and validation error.

        Args:
            path: The configuration file that failed validation.
            error: The underlying validation exception.
        """
        self.path = path
        self.error = error
        super().__init__(f"Invalid shadowtree configuration in {path}: {error}")


class MissingRootError(ConfigError):
    """Raised when a required root is not configured."""

    def __init__(self, root: RootName) -> None:
        self.root = root
        super().__init__(f"{root}_root is required but was not configured")


class RelativeRootError(ConfigError):
    """Raised when a configured root is not an absolute path."""

    def __init__(self, root: RootName, path: str) -> None:
        self.root = root
        self.path = path
        super().__init__(f"{root}_root must be an absolute path (got {path!r})")


class DuplicateRootError(ConfigError):
    """Raised when two roots point at the same directory."""

    def __init__(self, first: RootName, second: RootName, path: str) -> None:
        self.first = first
        self.second = second
        self.path = path
        super().__init__(f"{first}_root and {second}_root both resolve to {path}")


class NestedRootsError(ConfigError):
    """Raised when one root lies inside another."""

    def __init__(self, outer: RootName, inner: RootName, outer_path: str, inner_path: str) -> None:
        self.outer = outer
        self.inner = inner
        self.outer_path = outer_path
        self.inner_path = inner_path
        super().__init__(f"{inner}_root ({inner_path}) must not be nested inside {outer}_root ({outer_path})")


@dataclass(slots=True, frozen=True)
class ResolverConfig:
    """Runtime resolver configuration.

    Root paths may still be ``None`` or relative here; ``RootRegistry`` rejects
    both. Everything else is already validated and normalised.

    Attributes:
        extension_source_root: Tree whose files may shadow core files.
        core_source_root: Tree providing the defaults.
        extension_dependency_root: Directory holding extension-private packages.
        alias_prefix: Specifier prefix that addresses the core tree by name.
        code_file_probe_order: Suffixes tried, in order, after the literal path.
        static_asset_extensions: Extensions matched by exact path only.
        redirect_entry: File name (relative to the extension source root) used
            as the synthetic importer when a bare import is redirected.
        cache: Whether the host adapter memoises decisions.
    """

    extension_source_root: Path | None = None
    core_source_root: Path | None = None
    extension_dependency_root: Path | None = None
    alias_prefix: str = DEFAULT_ALIAS_PREFIX
    code_file_probe_order: tuple[str, ...] = DEFAULT_CODE_FILE_PROBE_ORDER
    static_asset_extensions: tuple[str, ...] = DEFAULT_STATIC_ASSET_EXTENSIONS
    redirect_entry: str = DEFAULT_REDIRECT_ENTRY
    cache: bool = True

    def with_roots(
        self,
        *,
        extension_source_root: Path | None = None,
        core_source_root: Path | None = None,
        extension_dependency_root: Path | None = None,
    ) -> ResolverConfig:
        """Return a copy with the given roots replaced (``None`` keeps the current value)."""
        return dataclasses.replace(
            self,
            extension_source_root=extension_source_root or self.extension_source_root,
            core_source_root=core_source_root or self.core_source_root,
            extension_dependency_root=extension_dependency_root or self.extension_dependency_root,
        )


def ensure_list(value: object | None) -> list[str] | None:
    """Convert a string or iterable of strings to a list of stripped strings.

    Args:
        value: ``None``, a single string, or an iterable of strings.

    Returns:
        A list of non-empty strings, or ``None`` if the input was ``None``.
    """
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return [stripped] if stripped else []
    if not isinstance(value, Iterable):
        return []
    result: list[str] = []
    for item in cast("Iterable[object]", value):
        if isinstance(item, str):
            stripped = item.strip()
            if stripped:
                result.append(stripped)
    return result


def _has_parent_segment(value: str) -> bool:
    return ".." in PurePosixPath(value.replace("\\", "/")).parts


class ResolverConfigModel(BaseModel):
    """Pydantic model for validating resolver configuration from TOML.

    After validation, ``config_from_model`` converts it to a ``ResolverConfig``.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(populate_by_name=True)

    config_version: int = Field(default=CONFIG_VERSION)
    extension_source_root: Path | None = None
    core_source_root: Path | None = None
    extension_dependency_root: Path | None = None
    alias_prefix: str = DEFAULT_ALIAS_PREFIX
    code_file_probe_order: list[str] = Field(default_factory=lambda: list(DEFAULT_CODE_FILE_PROBE_ORDER))
    static_asset_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_STATIC_ASSET_EXTENSIONS),
    )
    redirect_entry: str = DEFAULT_REDIRECT_ENTRY
    cache: bool = True

    @field_validator("alias_prefix", mode="before")
    @classmethod
    def _normalise_alias(cls, value: object) -> str:
        if not isinstance(value, str):
            msg = "alias_prefix"
            raise ConfigFieldTypeError(msg, "a string")
        prefix = value.strip().rstrip("/")
        if not prefix:
            msg = "alias_prefix"
            raise ConfigFieldValueError(msg, value, "must not be empty")
        if prefix.startswith("."):
            msg = "alias_prefix"
            raise ConfigFieldValueError(msg, value, "must not start with '.'")
        return prefix

    @field_validator("code_file_probe_order", mode="before")
    @classmethod
    def _coerce_probe_order(cls, value: object) -> list[str]:
        suffixes = ensure_list(value) or []
        for suffix in suffixes:
            if not suffix.startswith((".", "/")):
                msg = "code_file_probe_order"
                raise ConfigFieldValueError(msg, suffix, "entries must start with '.' or '/'")
            if _has_parent_segment(suffix):
                msg = "code_file_probe_order"
                raise ConfigFieldValueError(msg, suffix, "entries must not contain '..'")
        return dedupe_preserve(suffixes)

    @field_validator("static_asset_extensions", mode="before")
    @classmethod
    def _coerce_static_assets(cls, value: object) -> list[str]:
        extensions = [item.lower() for item in ensure_list(value) or []]
        for extension in extensions:
            if not extension.startswith(".") or "/" in extension:
                msg = "static_asset_extensions"
                raise ConfigFieldValueError(msg, extension, "entries must look like '.svg'")
        return dedupe_preserve(extensions)

    @field_validator("redirect_entry", mode="before")
    @classmethod
    def _validate_redirect_entry(cls, value: object) -> str:
        if not isinstance(value, str):
            msg = "redirect_entry"
            raise ConfigFieldTypeError(msg, "a string")
        entry = value.strip()
        if not entry or entry.startswith("/") or _has_parent_segment(entry):
            msg = "redirect_entry"
            raise ConfigFieldValueError(msg, value, "must be a relative file name inside the extension root")
        return entry

    @model_validator(mode="after")
    def _check_version(self) -> ResolverConfigModel:
        if self.config_version != CONFIG_VERSION:
            raise UnsupportedConfigVersionError(self.config_version, CONFIG_VERSION)
        return self


def _resolved_root(base_dir: Path | None, value: Path | None) -> Path | None:
    if value is None or base_dir is None or value.is_absolute():
        return value
    return (base_dir / value).resolve()


def config_from_model(model: ResolverConfigModel, base_dir: Path | None = None) -> ResolverConfig:
    """Convert a validated model into a runtime ``ResolverConfig``.

    Args:
        model: Validated configuration model.
        base_dir: Directory that relative root paths are resolved against
            (normally the directory holding the configuration file).

    Returns:
        Frozen runtime configuration.
    """
    return ResolverConfig(
        extension_source_root=_resolved_root(base_dir, model.extension_source_root),
        core_source_root=_resolved_root(base_dir, model.core_source_root),
        extension_dependency_root=_resolved_root(base_dir, model.extension_dependency_root),
        alias_prefix=model.alias_prefix,
        code_file_probe_order=tuple(model.code_file_probe_order),
        static_asset_extensions=tuple(model.static_asset_extensions),
        redirect_entry=model.redirect_entry,
        cache=model.cache,
    )


__all__ = [
    "ConfigError",
    "ConfigFieldTypeError",
    "ConfigFieldValueError",
    "ConfigReadError",
    "DuplicateRootError",
    "InvalidConfigFileError",
    "MissingRootError",
    "NestedRootsError",
    "RelativeRootError",
    "ResolverConfig",
    "ResolverConfigModel",
    "UnsupportedConfigVersionError",
    "config_from_model",
    "ensure_list",
]
