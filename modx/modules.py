"""Module specifications consumed by the startup sequencer.

Only ``name`` and ``depends_on`` are read while computing the startup order.
Extension points, extensions, the start hook and ``payload`` travel along
untouched so the host can act on them once the order is known.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Union


@dataclass(frozen=True)
class ByName:
    name: str


@dataclass(frozen=True)
class ByReference:
    module: "ModuleSpec"

    @property
    def name(self) -> str:
        return self.module.name


Dependency = Union[ByName, ByReference]


def as_dependency(entry: Any) -> Dependency:
    """Coerce a raw ``depends_on`` entry into its tagged form."""

    if isinstance(entry, (ByName, ByReference)):
        return entry
    if isinstance(entry, str):
        return ByName(entry)
    if isinstance(entry, ModuleSpec):
        return ByReference(entry)
    raise TypeError(f"Unsupported dependency entry: {entry!r}")


@dataclass(frozen=True)
class ModuleSpec:
    name: str
    depends_on: tuple[Dependency, ...] | None = None
    extension_points: dict[str, Callable[..., Any]] = field(default_factory=dict, hash=False)
    extensions: dict[str, Any] = field(default_factory=dict, hash=False)
    start: Callable[..., Any] | None = None
    payload: dict[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Module name must be a non-empty string")
        if self.depends_on is not None:
            object.__setattr__(
                self, "depends_on", tuple(as_dependency(entry) for entry in self.depends_on)
            )

    @property
    def dependency_names(self) -> tuple[str, ...]:
        return tuple(dep.name for dep in self.depends_on or ())

    @property
    def references(self) -> tuple["ModuleSpec", ...]:
        return tuple(dep.module for dep in self.depends_on or () if isinstance(dep, ByReference))

    def __repr__(self) -> str:
        if self.depends_on is None:
            return f"ModuleSpec({self.name!r})"
        return f"ModuleSpec({self.name!r}, depends_on={list(self.dependency_names)!r})"


def module(name: str, *depends_on: Union[str, ModuleSpec, Dependency], **fields: Any) -> ModuleSpec:
    """Shorthand for ``ModuleSpec(name, depends_on=[...], ...)``.

    Leaving out dependencies yields a module without a ``depends_on`` list.
    """

    return ModuleSpec(name, depends_on=depends_on or None, **fields)


def names(modules: Iterable[ModuleSpec]) -> list[str]:
    return [spec.name for spec in modules]
