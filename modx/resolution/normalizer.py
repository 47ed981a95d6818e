"""Flatten embedded module references into a name-only module list."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Iterable

from ..logging_utils import get_logger
from ..modules import ByName, ByReference, ModuleSpec
from ..observability.metrics import duplicate_modules_total

DuplicateSink = Callable[[str], None]

_log = get_logger("resolution")


def _warn_duplicate(name: str) -> None:
    _log.warning("Module name {} already exists; keeping the first definition", name)


def normalize(
    modules: Iterable[ModuleSpec],
    *,
    on_duplicate: DuplicateSink | None = None,
) -> list[ModuleSpec]:
    """Return ``modules`` flattened so every dependency is a :class:`ByName`.

    Referenced modules are emitted ahead of the module that embeds them. The
    first definition of a name wins; later ones are reported to
    ``on_duplicate`` and dropped. Nesting depth is not limited by the
    interpreter's recursion limit.
    """

    sink = on_duplicate or _warn_duplicate
    result: list[ModuleSpec] = []
    seen: set[str] = set()
    # (module, references already pushed)
    stack: list[tuple[ModuleSpec, bool]] = [(spec, False) for spec in reversed(list(modules))]
    while stack:
        spec, expanded = stack.pop()
        references = spec.references
        if references and not expanded:
            stack.append((spec, True))
            stack.extend((ref, False) for ref in reversed(references))
            continue
        if references:
            spec = _rewrite(spec)
        if spec.name in seen:
            duplicate_modules_total.inc()
            sink(spec.name)
            continue
        seen.add(spec.name)
        result.append(spec)
    return result


def _rewrite(spec: ModuleSpec) -> ModuleSpec:
    return replace(
        spec,
        depends_on=tuple(
            ByName(dep.name) if isinstance(dep, ByReference) else dep
            for dep in spec.depends_on or ()
        ),
    )
