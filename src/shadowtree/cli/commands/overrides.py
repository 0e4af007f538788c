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

"""``shadowtree overrides``: list extension files that shadow core files."""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from typing import TYPE_CHECKING

from shadowtree.cli.helpers import echo, register_format_option, register_root_options, registry_from_args
from shadowtree.core.model_types import DataFormat
from shadowtree.diagnostics import scan_overrides, scan_probe_ties

if TYPE_CHECKING:
    from collections.abc import Sequence

    from shadowtree.cli.types import SubparserCollection


def register_overrides_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register the ``overrides`` subcommand."""
    overrides = subparsers.add_parser(
        "overrides",
        help="List active overrides and ambiguous probe candidates",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_format_option(overrides)
    register_root_options(overrides)


def execute_overrides(args: argparse.Namespace) -> int:
    registry, _ = registry_from_args(args)
    entries = scan_overrides(registry)
    ties = scan_probe_ties(registry)
    if DataFormat.from_str(args.format) is DataFormat.JSON:
        payload = {
            "overrides": [asdict(entry) for entry in entries],
            "ties": [{**asdict(tie), "root": str(tie.root), "shadowed": list(tie.shadowed)} for tie in ties],
        }
        echo(json.dumps(payload, indent=2))
        return 0
    if not entries:
        echo("[shadowtree] no overrides found")
    for entry in entries:
        echo(f"{entry.logical_path}: {entry.extension_path} shadows {entry.core_path}")
    for tie in ties:
        echo(f"[shadowtree] ambiguous {tie.logical_path}: {tie.winner} wins over {', '.join(tie.shadowed)}")
    return 0


__all__ = ["execute_overrides", "register_overrides_command"]
