"""Plugin registry and startup context."""

from .context import StartupContext
from .registry import ExtensionCallback, PluginRegistry

__all__ = ["ExtensionCallback", "PluginRegistry", "StartupContext"]
