"""ComponentFinder — the get-or-create contract offered to discovery strategies."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from archmodel.plugins.manager import PluginManager

if TYPE_CHECKING:
    from archmodel.domain.elements import Component, Container

logger = logging.getLogger(__name__)


class ComponentFinder:
    """Runs discovery strategies against one container.

    Usage::

        finder = ComponentFinder(container, "com.example", SpringStrategy(), JavadocStrategy())
        components = finder.find_components()
    """

    def __init__(
        self,
        container: Container,
        namespace: str,
        *strategies: object,
        plugin_manager: PluginManager | None = None,
    ) -> None:
        self.container = container
        self.namespace = namespace
        self._plugins = plugin_manager or PluginManager()
        self._plugins.register_strategies(list(strategies))

    @property
    def strategies(self) -> list[object]:
        return self._plugins.get_plugins()

    def found_component(
        self,
        name: str,
        type: str | None = None,
        description: str = "",
        technology: str = "",
        source_path: str | None = None,
    ) -> Component:
        """Return the component called *name* in the container, creating it if absent."""
        component = self.container.get_component_with_name(name)
        if component is not None:
            return component
        return self.container.add_component(
            name, description, technology, type=type, source_path=source_path
        )

    def find_components(self) -> list[Component]:
        """Run every strategy's component phase, then every strategy's dependency phase."""
        found: list[Component] = []
        for batch in self._plugins.hook.find_components(finder=self):
            found.extend(batch)
        self._plugins.hook.find_dependencies(finder=self)
        logger.debug(
            "Discovered %d components in %s with %d strategies",
            len(found),
            self.container.name,
            len(self.strategies),
        )
        return found
