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

# ruff: noqa: ANN401

"""Argument parser helpers used across CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from shadowtree.config.loader import apply_root_overrides, load_config_with_metadata
from shadowtree.core.model_types import DataFormat
from shadowtree.registry import RootRegistry

if TYPE_CHECKING:
    import argparse


class ArgumentRegistrar(Protocol):
    """Parser or argument group that accepts ``add_argument`` calls."""

    def add_argument(
        self,
        *args: Any,
        **kwargs: Any,
    ) -> argparse.Action:
        """Expose ``ArgumentParser.add_argument`` so helpers can operate generically."""
        ...  # pragma: no cover


def register_argument(
    registrar: ArgumentRegistrar,
    *args: Any,
    **kwargs: Any,
) -> None:
    """Register an argument on a parser or argument group, discarding the action handle.

    Args:
        registrar: Parser or argument group on which to register the option.
        *args: Positional flags and option strings forwarded to ``add_argument``.
        **kwargs: Keyword options forwarded to ``add_argument``.
    """
    _ = registrar.add_argument(*args, **kwargs)


def register_root_options(parser: argparse.ArgumentParser) -> None:
    """Add ``--config`` and the three root overrides to a command parser."""
    group = parser.add_argument_group("roots")
    register_argument(
        group,
        "--config",
        type=Path,
        default=None,
        help="Explicit configuration file (default: discover shadowtree.toml or pyproject.toml).",
    )
    register_argument(
        group,
        "--extension-root",
        dest="extension_source_root",
        type=Path,
        default=None,
        help="Extension source root (overrides config and SHADOWTREE_EXTENSION_ROOT).",
    )
    register_argument(
        group,
        "--core-root",
        dest="core_source_root",
        type=Path,
        default=None,
        help="Core source root (overrides config and SHADOWTREE_CORE_ROOT).",
    )
    register_argument(
        group,
        "--dependency-root",
        dest="extension_dependency_root",
        type=Path,
        default=None,
        help="Extension dependency root (overrides config and SHADOWTREE_DEPENDENCY_ROOT).",
    )


def register_format_option(parser: argparse.ArgumentParser) -> None:
    """Add the ``--format`` output selector."""
    register_argument(
        parser,
        "--format",
        choices=[fmt.value for fmt in DataFormat],
        default=DataFormat.TEXT.value,
        help="Output format.",
    )


def registry_from_args(args: argparse.Namespace) -> tuple[RootRegistry, Path | None]:
    """Load configuration, apply root flags, and build a validated registry.

    Returns:
        The registry and the configuration file it was built from (``None``
        when only defaults, flags and environment were used).

    Raises:
        ConfigError: When configuration or roots are invalid.
    """
    loaded = load_config_with_metadata(args.config)
    config = apply_root_overrides(
        loaded.config,
        extension_source_root=args.extension_source_root,
        core_source_root=args.core_source_root,
        extension_dependency_root=args.extension_dependency_root,
    )
    return RootRegistry.initialize(config), loaded.path


__all__ = [
    "ArgumentRegistrar",
    "register_argument",
    "register_format_option",
    "register_root_options",
    "registry_from_args",
]
