"""Context handed to extensions and start hooks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .registry import PluginRegistry

if TYPE_CHECKING:
    from ..host import Installation


@dataclass(frozen=True)
class StartupContext:
    runtime: Any
    registry: PluginRegistry
    config: dict[str, Any]
    modules: "Installation"
