"""Install resolved modules: wire extension points, then run start hooks."""

from __future__ import annotations

from time import monotonic
from typing import Any, Iterable, Mapping

from .logging_utils import get_logger
from .modules import ModuleSpec
from .observability.metrics import start_hook_latency_ms
from .plugins.context import StartupContext
from .plugins.registry import PluginRegistry
from .resolution import resolve

_log = get_logger("host")


class Installation:
    """Result of :func:`install`; holds the resolved order and the registry."""

    def __init__(
        self,
        order: tuple[ModuleSpec, ...],
        registry: PluginRegistry,
        *,
        runtime: Any = None,
    ) -> None:
        self.order = order
        self.registry = registry
        self.runtime = runtime
        self._by_name = {spec.name: spec for spec in order}
        self.context = StartupContext(
            runtime=runtime,
            registry=registry,
            config=registry.config,
            modules=self,
        )

    @property
    def config(self) -> dict[str, Any]:
        return self.registry.config

    def modules(self) -> tuple[ModuleSpec, ...]:
        return self.order

    def names(self) -> list[str]:
        return [spec.name for spec in self.order]

    def module_by_name(self, name: str) -> ModuleSpec | None:
        return self._by_name.get(name)

    def __len__(self) -> int:
        return len(self.order)

    def __repr__(self) -> str:
        return f"<Installation modules={self.names()!r}>"


def install(
    modules: Iterable[ModuleSpec],
    *,
    runtime: Any = None,
    config: Mapping[str, Any] | None = None,
) -> Installation:
    """Resolve ``modules`` and start them in dependency order.

    Resolution errors propagate before anything is registered. Extension
    points and extensions of every module are wired before the first start
    hook runs.
    """

    order = resolve(modules)
    installation = Installation(order, PluginRegistry(config), runtime=runtime)
    context = installation.context
    for spec in order:
        _wire(spec, installation.registry, context)
    for spec in order:
        if spec.start is None:
            continue
        start = monotonic()
        try:
            spec.start(context)
        except Exception:
            _log.error("Start hook failed for module {}", spec.name)
            raise
        finally:
            start_hook_latency_ms.labels(spec.name).observe((monotonic() - start) * 1000)
    _log.info("Started {} modules", len(order))
    return installation


def _wire(spec: ModuleSpec, registry: PluginRegistry, context: StartupContext) -> None:
    for name, callback in spec.extension_points.items():
        registry.register_extension_point(name, callback)
    for name, extension in spec.extensions.items():
        try:
            value = extension(context) if callable(extension) else extension
            apply = registry.register_extension(name, value)
            if apply is not None:
                apply(context)
        except Exception:
            _log.error("Extension {} failed for module {}", name, spec.name)
            raise
