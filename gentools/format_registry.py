"""Plugins that generate serialization code for one format, and the registry of them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from gentools.sast import SASTNode


class FormatPlugin(ABC):
    """Generates serialization code in one format."""

    @abstractmethod
    def generate_code(self, node: SASTNode) -> str:
        """Return the generated code for the given node."""


class FileFormatRegistry:
    """Maps format names to the plugins that generate code for them."""

    def __init__(self) -> None:
        self._plugins: dict[str, FormatPlugin] = {}

    def register_plugin(self, format_name: str, plugin: FormatPlugin) -> None:
        """Register a plugin, replacing any earlier one for the same format."""
        self._plugins[format_name] = plugin

    def get_plugin(self, format_name: str) -> Optional[FormatPlugin]:
        """Return the plugin for a format, or None when there is none."""
        return self._plugins.get(format_name)

    def __contains__(self, format_name: object) -> bool:
        return format_name in self._plugins


_DEFAULT_REGISTRY = FileFormatRegistry()


def default_registry() -> FileFormatRegistry:
    """Return the process-wide registry."""
    return _DEFAULT_REGISTRY