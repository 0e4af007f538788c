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

"""Enumerations shared by the resolution engine, logging, and CLI.

- Namespace, SpecifierKind and RootName classify the two inputs of a request
- ResolutionRule and Outcome label pipeline decisions
- LogComponent, LogFormat and DataFormat drive logging and CLI rendering
"""

from __future__ import annotations

from shadowtree.compat import StrEnum


class Namespace(StrEnum):
    """Namespace an importing file belongs to, by root containment.

    Attributes:
        CORE: File lives under the core source root.
        EXTENSION: File lives under the extension source root.
        OTHER: Anything else (dependency root, virtual modules, unrelated trees).
    """

    CORE = "core"
    EXTENSION = "extension"
    OTHER = "other"


class SpecifierKind(StrEnum):
    """Shape of a raw import specifier.

    Attributes:
        RELATIVE: Starts with a same-directory or parent-directory marker.
        ALIASED: Starts with the configured alias prefix.
        BARE: Everything else (package names, absolute paths, protocols).
    """

    RELATIVE = "relative"
    ALIASED = "aliased"
    BARE = "bare"


class RootName(StrEnum):
    """Names of the three configured namespace roots."""

    EXTENSION_SOURCE = "extension_source"
    CORE_SOURCE = "core_source"
    EXTENSION_DEPENDENCY = "extension_dependency"

    @classmethod
    def from_str(cls, raw: str) -> RootName:
        """Create a RootName from a string value.

        Args:
            raw: String representation of the root name.

        Returns:
            RootName enum value.

        Raises:
            ValueError: If the string does not match any RootName value.
        """
        value = raw.strip().lower().replace("-", "_")
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown root '{raw}'"
            raise ValueError(msg) from exc

    @property
    def namespace(self) -> Namespace:
        """Namespace assigned to files contained in this root."""
        if self is RootName.CORE_SOURCE:
            return Namespace.CORE
        if self is RootName.EXTENSION_SOURCE:
            return Namespace.EXTENSION
        return Namespace.OTHER


class ResolutionRule(StrEnum):
    """Rule-table entry that produced a pipeline decision."""

    BARE_FROM_CORE = "bare-from-core"
    RELATIVE_FROM_CORE = "relative-from-core"
    RELATIVE_FROM_EXTENSION = "relative-from-extension"
    ALIASED = "aliased"
    FALLTHROUGH = "fallthrough"


class Outcome(StrEnum):
    """Terminal decision kinds."""

    FOUND = "found"
    REDIRECT = "redirect"
    DEFER = "defer"


class LogComponent(StrEnum):
    """Logical component attached to structured log records."""

    CLI = "cli"
    CONFIG = "config"
    REGISTRY = "registry"
    PIPELINE = "pipeline"
    PROBE = "probe"
    CACHE = "cache"
    HOST = "host"
    DIAGNOSTICS = "diagnostics"


class LogFormat(StrEnum):
    """Supported log output formats."""

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class DataFormat(StrEnum):
    """CLI output formats."""

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> DataFormat:
        """Create a DataFormat from a string value.

        Args:
            raw: String representation of the output format.

        Returns:
            DataFormat enum value.

        Raises:
            ValueError: If the string does not match any DataFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown data format '{raw}'"
            raise ValueError(msg) from exc


__all__ = [
    "DataFormat",
    "LogComponent",
    "LogFormat",
    "Namespace",
    "Outcome",
    "ResolutionRule",
    "RootName",
    "SpecifierKind",
]
