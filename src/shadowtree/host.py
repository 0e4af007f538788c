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

"""Adapter between the pipeline and a host build tool's resolve hook.

The host registers ``OverrideResolver.resolve`` to run before its default
resolution. The return value follows the host convention: a path string
satisfies the import, ``None`` lets the host continue unmodified.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Final

from shadowtree._internal.logging_utils import structured_extra
from shadowtree.cache import ResolutionCache
from shadowtree.config.loader import apply_root_overrides, load_config
from shadowtree.core.model_types import LogComponent
from shadowtree.pipeline import ResolutionPipeline
from shadowtree.registry import RootRegistry
from shadowtree.results import Found, Redirect

if TYPE_CHECKING:
    from pathlib import Path

    from shadowtree.core.model_types import RootName
    from shadowtree.probe import OverrideProbe
    from shadowtree.results import ResolutionResult

logger: logging.Logger = logging.getLogger("shadowtree.host")

HostResolve = Callable[[str, str], str | None]
"""Host callback: resolve ``specifier`` as if imported from ``importer``, skipping this resolver."""


class OverrideResolver:
    """Host-facing resolve hook backed by a ``ResolutionPipeline``.

    Args:
        registry: Validated roots and probe settings.
        cache: Optional decision cache; call ``notify_change`` from the host's
            file watcher when one is used.
        host_resolve: Default callback used to realise ``Redirect`` decisions.
        probe: Optional probe override (mainly for tests).
    """

    name: Final[str] = "override-resolver"
    order: Final[str] = "pre"

    def __init__(
        self,
        registry: RootRegistry,
        *,
        cache: ResolutionCache | None = None,
        host_resolve: HostResolve | None = None,
        probe: OverrideProbe | None = None,
    ) -> None:
        self._pipeline = ResolutionPipeline(registry, probe=probe, cache=cache)
        self._host_resolve = host_resolve

    @property
    def registry(self) -> RootRegistry:
        return self._pipeline.registry

    @property
    def pipeline(self) -> ResolutionPipeline:
        return self._pipeline

    def decide(self, specifier: str, importer: str | None) -> ResolutionResult:
        """Return the tagged decision without realising redirects."""
        return self._pipeline.resolve(specifier, importer)

    def resolve(
        self,
        specifier: str,
        importer: str | None,
        host_resolve: HostResolve | None = None,
    ) -> str | None:
        """Resolve an import edge in host terms.

        Args:
            specifier: Raw import string.
            importer: Importing module id, or ``None``.
            host_resolve: Callback overriding the one given at construction.

        Returns:
            The resolved absolute path, or ``None`` to let the host proceed.
        """
        match self.decide(specifier, importer):
            case Found(path=path):
                return path
            case Redirect(root=root):
                return self._realise_redirect(specifier, root, host_resolve or self._host_resolve)
            case _:
                return None

    def redirect_importer(self, root: RootName) -> str:
        """Synthetic importer path placed inside ``root`` for redirected lookups."""
        return os.path.join(self.registry.root(root).absolute_path, self.registry.redirect_entry)

    def notify_change(self, path: str | os.PathLike[str] | None = None) -> None:
        """Invalidate cached decisions after a file was created, deleted or renamed."""
        cache = self._pipeline.cache
        if cache is not None:
            cache.invalidate(path)

    def _realise_redirect(self, specifier: str, root: RootName, host_resolve: HostResolve | None) -> str | None:
        if host_resolve is None:
            logger.debug(
                "No host resolver available to follow redirect for %s",
                specifier,
                extra=structured_extra(LogComponent.HOST, specifier=specifier, root=root),
            )
            return None
        resolved = host_resolve(specifier, self.redirect_importer(root))
        logger.debug(
            "Redirected %s via %s -> %s",
            specifier,
            root,
            resolved,
            extra=structured_extra(LogComponent.HOST, specifier=specifier, root=root, path=resolved),
        )
        return resolved


def create_resolver(
    config_path: Path | None = None,
    *,
    host_resolve: HostResolve | None = None,
    extension_source_root: Path | None = None,
    core_source_root: Path | None = None,
    extension_dependency_root: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> OverrideResolver:
    """Load configuration, validate the roots, and build a resolver.

    Args:
        config_path: Explicit configuration file (defaults to discovery).
        host_resolve: Callback used to realise ``Redirect`` decisions.
        extension_source_root: Root override (highest precedence).
        core_source_root: Root override (highest precedence).
        extension_dependency_root: Root override (highest precedence).
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        A ready ``OverrideResolver``.

    Raises:
        ConfigError: When configuration is unreadable or the roots are invalid.
    """
    config = apply_root_overrides(
        load_config(config_path),
        extension_source_root=extension_source_root,
        core_source_root=core_source_root,
        extension_dependency_root=extension_dependency_root,
        environ=environ,
    )
    registry = RootRegistry.initialize(config)
    cache = ResolutionCache() if config.cache else None
    return OverrideResolver(registry, cache=cache, host_resolve=host_resolve)


__all__ = ["HostResolve", "OverrideResolver", "create_resolver"]
