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

"""``shadowtree check``: validate configuration and show the roots."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from shadowtree.cli.helpers import echo, register_root_options, registry_from_args

if TYPE_CHECKING:
    from collections.abc import Sequence

    from shadowtree.cli.types import SubparserCollection


def register_check_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register the ``check`` subcommand."""
    check = subparsers.add_parser(
        "check",
        help="Validate configuration and print the resolved roots",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_root_options(check)


def execute_check(args: argparse.Namespace) -> int:
    """Validate the configuration; errors propagate to ``main`` as exit code 2."""
    registry, source = registry_from_args(args)
    echo(f"[shadowtree] configuration: {source if source is not None else '<defaults>'}")
    for root in registry.roots:
        echo(f"  {root.name}: {root.absolute_path}")
    echo(f"  alias_prefix: {registry.alias_prefix}")
    echo(f"  code_file_probe_order: {', '.join(registry.suffixes.code)}")
    return 0


__all__ = ["execute_check", "register_check_command"]
