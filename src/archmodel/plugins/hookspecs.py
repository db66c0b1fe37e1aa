"""Pluggy hook specifications for component discovery strategies.

A strategy finds components for one container and then links them.
:class:`~archmodel.analysis.component_finder.ComponentFinder` calls
``find_components`` on every strategy before it calls
``find_dependencies`` on any of them, so dependencies may point at
components found by another strategy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from archmodel.analysis.component_finder import ComponentFinder
    from archmodel.domain.elements import Component

PROJECT_NAME = "archmodel"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class DiscoveryHookSpec:
    """Hook specifications for discovery strategies."""

    @hookspec
    def find_components(self, finder: ComponentFinder) -> list[Component] | None:
        """Create or look up components via ``finder.found_component`` and return them."""

    @hookspec
    def find_dependencies(self, finder: ComponentFinder) -> None:
        """Add relationships between components found in the first phase."""
