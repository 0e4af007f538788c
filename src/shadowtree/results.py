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

"""Tagged results produced by the resolution pipeline.

A decision is always one of three explicit variants. ``Defer`` is an ordinary
value meaning "let the host resolve this normally" and never stands in for an
error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, TypeAlias

from shadowtree.core.model_types import Outcome, ResolutionRule, RootName
from shadowtree.core.type_aliases import AbsPath


@dataclass(slots=True, frozen=True)
class Found:
    """The import is satisfied by ``path``."""

    outcome: ClassVar[Outcome] = Outcome.FOUND

    path: AbsPath
    rule: ResolutionRule


@dataclass(slots=True, frozen=True)
class Redirect:
    """Retry bare-module resolution as if the import came from inside ``root``."""

    outcome: ClassVar[Outcome] = Outcome.REDIRECT

    root: RootName
    rule: ResolutionRule = ResolutionRule.BARE_FROM_CORE


@dataclass(slots=True, frozen=True)
class Defer:
    """No override applies; the host continues its own resolution."""

    outcome: ClassVar[Outcome] = Outcome.DEFER

    rule: ResolutionRule = ResolutionRule.FALLTHROUGH


ResolutionResult: TypeAlias = Found | Redirect | Defer

__all__ = ["Defer", "Found", "Redirect", "ResolutionResult"]
