"""Extension point registry and per-module variable storage."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from ..logging_utils import get_logger

ExtensionCallback = Callable[[Any, Any], Any]


class PluginRegistry:
    def __init__(self, config: Mapping[str, Any] | None = None) -> None:
        self._extension_callbacks: dict[str, ExtensionCallback] = {}
        self._module_variables: dict[str, dict[str, Any]] = {}
        self._config: dict[str, Any] = dict(config or {})
        self._log = get_logger("registry")

    @property
    def config(self) -> dict[str, Any]:
        return self._config

    def register_extension_point(self, name: str, callback: ExtensionCallback) -> None:
        if name in self._extension_callbacks:
            self._log.debug("Extension point {} replaced", name)
        self._extension_callbacks[name] = callback

    def register_extension(self, name: str, obj: Any) -> Callable[[Any], Any] | None:
        """Bind ``obj`` to extension point ``name``.

        Returns a callable taking the startup context, or ``None`` when the
        extension point is unknown.
        """

        callback = self._extension_callbacks.get(name)
        if callback is None:
            self._log.warning("Invalid extension point: {}", name)
            return None

        def _apply(context: Any) -> Any:
            return callback(context, obj)

        return _apply

    def extension_points(self) -> list[str]:
        return sorted(self._extension_callbacks.keys())

    def module_var_append(self, module_name: str, varname: str, obj: Any) -> None:
        variables = self._ensure_module(module_name)
        if not variables.get(varname):
            variables[varname] = [obj]
        else:
            variables[varname].append(obj)

    def module_var_set(self, module_name: str, varname: str, obj: Any) -> None:
        self._ensure_module(module_name)[varname] = obj

    def module_var_get(self, module_name: str, varname: str) -> Any:
        return self._ensure_module(module_name).get(varname)

    def config_get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def _ensure_module(self, module_name: str) -> dict[str, Any]:
        return self._module_variables.setdefault(module_name, {})
