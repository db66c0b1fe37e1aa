"""Discovery strategy registry.

Strategies come from two places: instances handed over by the caller
(manifest strategies built from ``--manifest`` files) and installed
packages advertising an ``archmodel.strategies`` entry point.
"""

from __future__ import annotations

import inspect
import logging
from importlib.metadata import EntryPoint, entry_points

import pluggy

from archmodel.plugins.hookspecs import PROJECT_NAME, DiscoveryHookSpec

ENTRY_POINT_GROUP = "archmodel.strategies"

logger = logging.getLogger(__name__)


def _installed_strategies() -> list[EntryPoint]:
    return list(entry_points(group=ENTRY_POINT_GROUP))


class PluginManager:
    """Registers discovery strategies and dispatches the discovery hooks.

    Pluggy calls implementations last-registered-first, so
    :meth:`register_strategies` registers in reverse to keep the order
    it was given.
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(DiscoveryHookSpec)

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def discover_and_load(self, *, enabled: list[str] | None = None) -> list[str]:
        """Register installed strategies, optionally only those named in *enabled*.

        An entry point that fails to import or instantiate is logged and
        skipped. Returns the names of the strategies registered here.
        """
        loaded: list[str] = []
        for ep in _installed_strategies():
            if enabled and ep.name not in enabled:
                continue
            if self._pm.has_plugin(ep.name):
                continue
            try:
                strategy = ep.load()
                if inspect.isclass(strategy):
                    strategy = strategy()
            except Exception:
                logger.warning("Skipping discovery strategy %s", ep.name, exc_info=True)
                continue
            self._pm.register(strategy, name=ep.name)
            loaded.append(ep.name)
        logger.debug("Loaded %d installed discovery strategies", len(loaded))
        return loaded

    def register_strategy(self, strategy: object, name: str | None = None) -> None:
        name = name or f"{type(strategy).__name__}-{id(strategy):x}"
        self._pm.register(strategy, name=name)
        logger.debug("Registered discovery strategy %s", name)

    def register_strategies(self, strategies: list[object]) -> None:
        for strategy in reversed(strategies):
            self.register_strategy(strategy)

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [name for name, _ in self._pm.list_name_plugin()]
