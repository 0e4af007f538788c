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

"""Configuration discovery and loading for shadowtree.

Configuration is read once at startup from ``shadowtree.toml``,
``.shadowtree.toml`` or the ``[tool.shadowtree]`` table of ``pyproject.toml``,
searched in that order inside the detected project root. Root locations may
additionally be overridden from the environment or the CLI.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Literal, TypeAlias, cast

from pydantic import ValidationError

from shadowtree._internal.logging_utils import structured_extra
from shadowtree._internal.precedence import resolve_with_precedence
from shadowtree.compat import tomllib
from shadowtree.core.model_types import LogComponent

from .constants import CONFIG_ENV, CORE_ROOT_ENV, DEPENDENCY_ROOT_ENV, EXTENSION_ROOT_ENV
from .models import (
    ConfigReadError,
    InvalidConfigFileError,
    ResolverConfig,
    ResolverConfigModel,
    config_from_model,
)

logger: logging.Logger = logging.getLogger("shadowtree.config")

ConfigFilename: TypeAlias = Literal["shadowtree.toml", ".shadowtree.toml", "pyproject.toml"]
CONFIG_FILENAMES: Final[tuple[ConfigFilename, ConfigFilename, ConfigFilename]] = (
    "shadowtree.toml",
    ".shadowtree.toml",
    "pyproject.toml",
)


@dataclass(slots=True, frozen=True)
class LoadedConfig:
    """Container for a loaded configuration and its source path.

    Attributes:
        config: Parsed configuration instance.
        path: File the configuration was loaded from, or None when defaults
            are used.
    """

    config: ResolverConfig
    path: Path | None


def resolve_project_root(start: Path | None = None) -> Path:
    """Walk parent directories looking for a configuration marker.

    Args:
        start: Optional starting path (defaults to the current working directory).

    Returns:
        The first directory containing one of ``CONFIG_FILENAMES``, or the
        starting directory when none is found.
    """
    base = (start or Path.cwd()).resolve()
    if base.is_file():
        base = base.parent
    for candidate in (base, *base.parents):
        for marker in CONFIG_FILENAMES:
            if (candidate / marker).exists():
                return candidate
    logger.debug(
        "No configuration markers found above %s",
        base,
        extra=structured_extra(LogComponent.CONFIG, path=base),
    )
    return base


def load_config(explicit_path: Path | None = None) -> ResolverConfig:
    """Load resolver configuration from a TOML file or use defaults.

    Args:
        explicit_path: Optional explicit configuration file. When omitted,
            ``SHADOWTREE_CONFIG`` and then the standard locations are used.

    Returns:
        The loaded configuration, with relative roots resolved against the
        configuration file's directory.
    """
    return load_config_with_metadata(explicit_path).config


def load_config_with_metadata(
    explicit_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> LoadedConfig:
    """Load resolver configuration together with the file it came from.

    Search order:

    1. ``explicit_path`` if provided, else ``$SHADOWTREE_CONFIG`` if set. Only
       that file is checked and it must contain shadowtree configuration.
    2. ``shadowtree.toml``, ``.shadowtree.toml`` and ``pyproject.toml`` in the
       detected project root; the first one carrying configuration wins.

    Args:
        explicit_path: Optional explicit configuration file.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        LoadedConfig: Parsed configuration and its source path. Defaults with
        a ``None`` path are returned when nothing is found.
    """
    env = os.environ if environ is None else environ
    if explicit_path is None and env.get(CONFIG_ENV):
        explicit_path = Path(env[CONFIG_ENV])
    if explicit_path is not None:
        candidate = _absolute(explicit_path)
        loaded = _load_candidate(candidate, explicit=True)
        if loaded is None:
            raise ConfigReadError(candidate, FileNotFoundError(candidate))
        return loaded
    base_dir = resolve_project_root()
    for filename in CONFIG_FILENAMES:
        loaded = _load_candidate(base_dir / filename, explicit=False)
        if loaded is not None:
            return loaded
    return LoadedConfig(config=ResolverConfig(), path=None)


def apply_root_overrides(
    config: ResolverConfig,
    *,
    extension_source_root: Path | None = None,
    core_source_root: Path | None = None,
    extension_dependency_root: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ResolverConfig:
    """Layer CLI and environment root locations over a loaded configuration.

    Precedence per root: CLI argument > environment variable > config file.
    Relative values from the CLI or environment are resolved against the
    current working directory.

    Args:
        config: Configuration loaded from disk (or defaults).
        extension_source_root: CLI value for the extension source root.
        core_source_root: CLI value for the core source root.
        extension_dependency_root: CLI value for the extension dependency root.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        A new configuration with the winning root locations.
    """
    env = os.environ if environ is None else environ
    return config.with_roots(
        extension_source_root=resolve_with_precedence(
            cli_value=_optional_absolute(extension_source_root),
            env_value=_env_path(env, EXTENSION_ROOT_ENV),
            config_value=config.extension_source_root,
        ),
        core_source_root=resolve_with_precedence(
            cli_value=_optional_absolute(core_source_root),
            env_value=_env_path(env, CORE_ROOT_ENV),
            config_value=config.core_source_root,
        ),
        extension_dependency_root=resolve_with_precedence(
            cli_value=_optional_absolute(extension_dependency_root),
            env_value=_env_path(env, DEPENDENCY_ROOT_ENV),
            config_value=config.extension_dependency_root,
        ),
    )


def _absolute(candidate: Path) -> Path:
    return candidate if candidate.is_absolute() else (Path.cwd() / candidate).resolve()


def _optional_absolute(candidate: Path | None) -> Path | None:
    return None if candidate is None else _absolute(candidate)


def _env_path(env: Mapping[str, str], key: str) -> Path | None:
    raw = env.get(key, "").strip()
    return _absolute(Path(raw)) if raw else None


def _load_candidate(candidate: Path, *, explicit: bool) -> LoadedConfig | None:
    if not candidate.is_file():
        return None
    try:
        raw_map: dict[str, object] = tomllib.loads(candidate.read_text(encoding="utf-8"))
    # ignore JUSTIFIED: filesystem or parse errors depend on host configuration
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigReadError(candidate, exc) from exc

    payload = _extract_payload(candidate, raw_map)
    if payload is None:
        if explicit:
            message = f"{candidate.name} does not define shadowtree configuration"
            raise InvalidConfigFileError(candidate, ValueError(message))
        return None

    try:
        model = ResolverConfigModel.model_validate(payload)
    except ValidationError as exc:
        raise InvalidConfigFileError(candidate, exc) from exc

    root = candidate.parent.resolve()
    logger.debug(
        "Loaded configuration from %s",
        candidate,
        extra=structured_extra(LogComponent.CONFIG, path=candidate),
    )
    return LoadedConfig(config=config_from_model(model, root), path=candidate.resolve())


def _extract_payload(candidate: Path, raw_map: dict[str, object]) -> dict[str, object] | None:
    """Extract the shadowtree payload from a parsed TOML document.

    Args:
        candidate: Source configuration path.
        raw_map: Data parsed from the TOML document.

    Returns:
        Mapping to validate, or None when a ``pyproject.toml`` carries no
        ``[tool.shadowtree]`` table.

    Raises:
        InvalidConfigFileError: If ``[tool.shadowtree]`` exists but is not a table.
    """
    is_pyproject = candidate.name == "pyproject.toml"
    tool_section = raw_map.get("tool")
    if isinstance(tool_section, dict):
        section = cast("dict[str, object]", tool_section).get("shadowtree")
        if section is not None and not isinstance(section, dict):
            message = "[tool.shadowtree] must be a TOML table"
            raise InvalidConfigFileError(candidate, ValueError(message))
        if isinstance(section, dict):
            return cast("dict[str, object]", section)
    if is_pyproject:
        return None
    return {key: value for key, value in raw_map.items() if key != "tool"}


__all__ = [
    "CONFIG_FILENAMES",
    "LoadedConfig",
    "apply_root_overrides",
    "load_config",
    "load_config_with_metadata",
    "resolve_project_root",
]
