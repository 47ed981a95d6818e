"""Layered topological sort producing the module startup order."""

from __future__ import annotations

from typing import Iterable, Sequence

from ..errors import CircularDependencyError, DependencyResolutionError
from ..logging_utils import get_logger
from ..modules import ModuleSpec
from ..observability.metrics import resolutions_total
from .normalizer import DuplicateSink, normalize

_log = get_logger("resolution")


def sequence(modules: Sequence[ModuleSpec]) -> tuple[ModuleSpec, ...]:
    """Order already-normalized ``modules`` so dependencies come first.

    Each pass walks the remaining modules in input order and appends every
    module whose dependencies are all resolved, including ones resolved
    earlier in the same pass. A pass without progress raises.
    """

    resolved: list[ModuleSpec] = []
    resolved_names: set[str] = set()
    remaining = list(modules)
    while remaining:
        progress = False
        for spec in remaining:
            if spec.name in resolved_names:
                continue
            if all(dep in resolved_names for dep in spec.dependency_names):
                resolved.append(spec)
                resolved_names.add(spec.name)
                progress = True
        remaining = [spec for spec in remaining if spec.name not in resolved_names]
        if remaining and not progress:
            raise _stuck(remaining, resolved_names)
    return tuple(resolved)


def resolve(
    modules: Iterable[ModuleSpec],
    *,
    on_duplicate: DuplicateSink | None = None,
) -> tuple[ModuleSpec, ...]:
    """Normalize ``modules`` and return them in startup order."""

    try:
        order = sequence(normalize(modules, on_duplicate=on_duplicate))
    except DependencyResolutionError as exc:
        resolutions_total.labels("failed").inc()
        _log.error("Module resolution failed: {}", exc)
        raise
    resolutions_total.labels("ok").inc()
    _log.debug("Resolved startup order: {}", ",".join(spec.name for spec in order))
    return order


def _stuck(
    remaining: list[ModuleSpec], resolved_names: set[str]
) -> DependencyResolutionError:
    remaining_names = {spec.name for spec in remaining}
    missing: list[str] = []
    for spec in remaining:
        for dep in spec.dependency_names:
            if dep in resolved_names or dep in remaining_names or dep in missing:
                continue
            missing.append(dep)
    if not missing:
        return CircularDependencyError(_cycle_members(remaining))
    base: list[str] = []
    for spec in remaining:
        if spec.name in base:
            continue
        if any(dep in missing for dep in spec.dependency_names):
            base.append(spec.name)
    return DependencyResolutionError(base, missing)


def _cycle_members(remaining: list[ModuleSpec]) -> list[str]:
    # Drop modules nothing else depends on until only the loops are left.
    members = list(remaining)
    while True:
        depended = {dep for spec in members for dep in spec.dependency_names}
        kept = [spec for spec in members if spec.name in depended]
        if len(kept) == len(members):
            return [spec.name for spec in kept]
        members = kept
