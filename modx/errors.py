"""Error types for module resolution and startup."""

from __future__ import annotations

from typing import Iterable


class ModxError(RuntimeError):
    """Base error for the module system."""


class DependencyResolutionError(ModxError):
    """Startup order could not be computed."""

    def __init__(
        self,
        base: Iterable[str],
        missing: Iterable[str],
        message: str | None = None,
    ) -> None:
        self.base = tuple(base)
        self.missing = tuple(missing)
        if message is None:
            message = (
                f"Unresolved Dependencies for {','.join(self.base)} "
                f"(missing: {','.join(self.missing)})"
            )
        super().__init__(message)


class CircularDependencyError(DependencyResolutionError):
    """Remaining modules only depend on each other."""

    def __init__(self, members: Iterable[str]) -> None:
        self.members = tuple(members)
        super().__init__(
            self.members,
            (),
            f"Circular dependency among: {','.join(self.members)}",
        )


class ManifestError(ModxError):
    """Invalid module manifest."""


class ExtensionPointError(ModxError):
    """Failed to load an entrypoint referenced by a module."""
