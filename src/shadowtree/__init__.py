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

"""shadowtree - module override resolution for layered source trees.

An extension source tree selectively shadows files of a core source tree
without modifying it. For every import edge the resolver decides whether
the extension supplies the file, whether a bare package should come from the
extension's own dependencies, or whether the host build tool should carry on
with its normal resolution.
"""

from __future__ import annotations

from shadowtree.exceptions import (
    ShadowtreeError,
    ShadowtreeTypeError,
    ShadowtreeValidationError,
)

from .cache import ResolutionCache, ResolutionKey
from .config import ConfigError, ResolverConfig, load_config
from .core.model_types import Namespace, Outcome, ResolutionRule, RootName, SpecifierKind
from .diagnostics import OverrideEntry, ProbeTie, scan_overrides, scan_probe_ties
from .host import OverrideResolver, create_resolver
from .pipeline import ResolutionPipeline, resolve
from .registry import OUT_OF_BOUNDS, CandidateSuffixSet, Root, RootRegistry
from .results import Defer, Found, Redirect, ResolutionResult

__all__ = [
    "OUT_OF_BOUNDS",
    "CandidateSuffixSet",
    "ConfigError",
    "Defer",
    "Found",
    "Namespace",
    "Outcome",
    "OverrideEntry",
    "OverrideResolver",
    "ProbeTie",
    "Redirect",
    "ResolutionCache",
    "ResolutionKey",
    "ResolutionPipeline",
    "ResolutionResult",
    "ResolutionRule",
    "ResolverConfig",
    "Root",
    "RootName",
    "RootRegistry",
    "ShadowtreeError",
    "ShadowtreeTypeError",
    "ShadowtreeValidationError",
    "SpecifierKind",
    "__version__",
    "create_resolver",
    "load_config",
    "resolve",
    "scan_overrides",
    "scan_probe_ties",
]

__version__ = "0.1.0"
