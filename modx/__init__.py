"""Dependency-ordered module startup for plugin hosts."""

from __future__ import annotations

from .errors import (
    CircularDependencyError,
    DependencyResolutionError,
    ExtensionPointError,
    ManifestError,
    ModxError,
)
from .host import Installation, install
from .modules import ByName, ByReference, Dependency, ModuleSpec, module
from .plugins import PluginRegistry, StartupContext
from .resolution import normalize, resolve, sequence

__all__ = [
    "ByName",
    "ByReference",
    "CircularDependencyError",
    "Dependency",
    "DependencyResolutionError",
    "ExtensionPointError",
    "Installation",
    "ManifestError",
    "ModuleSpec",
    "ModxError",
    "PluginRegistry",
    "StartupContext",
    "install",
    "module",
    "normalize",
    "resolve",
    "sequence",
]
