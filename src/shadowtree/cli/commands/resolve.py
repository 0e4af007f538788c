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

"""``shadowtree resolve``: explain the decision for one import edge."""

from __future__ import annotations

import argparse
import json
from typing import TYPE_CHECKING

from shadowtree.cli.helpers import (
    echo,
    register_argument,
    register_format_option,
    register_root_options,
    registry_from_args,
)
from shadowtree.core.model_types import DataFormat
from shadowtree.pipeline import ResolutionPipeline
from shadowtree.results import Found, Redirect

if TYPE_CHECKING:
    from collections.abc import Sequence

    from shadowtree.cli.types import SubparserCollection
    from shadowtree.results import ResolutionResult


def register_resolve_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register the ``resolve`` subcommand."""
    resolve = subparsers.add_parser(
        "resolve",
        help="Show how an import specifier would be resolved",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(resolve, "specifier", help="Import specifier, e.g. ./Button or @core/App.")
    register_argument(
        resolve,
        "--importer",
        required=True,
        help="Absolute path of the importing file.",
    )
    register_format_option(resolve)
    register_root_options(resolve)


def describe_result(result: ResolutionResult) -> str:
    """One-line text rendering of a decision."""
    match result:
        case Found(path=path):
            return f"found {path}"
        case Redirect(root=root):
            return f"redirect {root}"
        case _:
            return "defer"


def result_payload(specifier: str, importer: str, result: ResolutionResult) -> dict[str, object]:
    payload: dict[str, object] = {
        "specifier": specifier,
        "importer": importer,
        "outcome": str(result.outcome),
        "rule": str(result.rule),
    }
    if isinstance(result, Found):
        payload["path"] = result.path
    elif isinstance(result, Redirect):
        payload["root"] = str(result.root)
    return payload


def execute_resolve(args: argparse.Namespace) -> int:
    registry, _ = registry_from_args(args)
    result = ResolutionPipeline(registry).resolve(args.specifier, args.importer)
    if DataFormat.from_str(args.format) is DataFormat.JSON:
        echo(json.dumps(result_payload(args.specifier, args.importer, result), indent=2))
    else:
        echo(describe_result(result))
    return 0


__all__ = ["describe_result", "execute_resolve", "register_resolve_command", "result_payload"]
