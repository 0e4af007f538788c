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

"""``shadowtree init``: write a starter configuration file."""

from __future__ import annotations

import argparse
import pathlib
from textwrap import dedent
from typing import TYPE_CHECKING, Final

from shadowtree.cli.helpers import echo, register_argument

if TYPE_CHECKING:
    from collections.abc import Sequence

    from shadowtree.cli.types import SubparserCollection

CONFIG_TEMPLATE: Final[str] = dedent(
    """\
    # shadowtree configuration template
    # Save this file as shadowtree.toml next to your build configuration,
    # or move the keys under [tool.shadowtree] in pyproject.toml.
    config_version = 0

    # Relative roots are resolved against this file's directory. Each can
    # also be set with SHADOWTREE_EXTENSION_ROOT, SHADOWTREE_CORE_ROOT and
    # SHADOWTREE_DEPENDENCY_ROOT, or with --extension-root, --core-root
    # and --dependency-root on the command line.
    extension_source_root = "src"
    core_source_root = "core/src"
    extension_dependency_root = "node_modules"

    # Specifiers starting with this prefix address the core tree by logical
    # path (e.g. "@core/components/Button").
    # alias_prefix = "@core"

    # Suffixes tried, in order, after the literal path for code imports.
    # code_file_probe_order = [".tsx", ".ts", ".jsx", ".js", "/index.tsx", "/index.ts"]

    # Extensions matched exactly, never suffixed.
    # static_asset_extensions = [".css", ".scss", ".sass", ".less", ".json", ".svg", ".png", ".jpg", ".jpeg", ".gif", ".webp"]

    # File inside the extension root used as importer when redirecting bare
    # packages to the extension's dependencies.
    # redirect_entry = "index.tsx"

    # Memoise decisions between file-system changes.
    # cache = true
    """,
)


def write_config_template(path: pathlib.Path, *, force: bool) -> int:
    """Write the configuration template to ``path``.

    Args:
        path: Target file.
        force: Overwrite an existing file.

    Returns:
        int: Exit code (0 for success, 1 when the file exists and ``force`` is unset).
    """
    if path.exists() and not force:
        echo(f"[shadowtree] Refusing to overwrite existing file: {path}")
        echo("Use --force if you want to replace it.")
        return 1
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    echo(f"[shadowtree] Wrote starter config to {path}")
    return 0


def register_init_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register the ``init`` subcommand."""
    init = subparsers.add_parser(
        "init",
        help="Generate a starter configuration file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(
        init,
        "--path",
        dest="output",
        type=pathlib.Path,
        default=pathlib.Path("shadowtree.toml"),
        help="Destination for the generated configuration file.",
    )
    register_argument(
        init,
        "--force",
        action="store_true",
        help="Overwrite the output file if it already exists.",
    )


def execute_init(args: argparse.Namespace) -> int:
    return write_config_template(args.output, force=args.force)


__all__ = ["CONFIG_TEMPLATE", "execute_init", "register_init_command", "write_config_template"]
