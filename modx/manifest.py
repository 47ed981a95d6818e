"""Module manifest models."""

from __future__ import annotations

import importlib
import re
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .errors import ExtensionPointError, ManifestError
from .modules import ModuleSpec

_MODULE_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]{0,63}$")
_ENTRYPOINT_RE = re.compile(r"^[A-Za-z_][\w.]*:[A-Za-z_][\w.]*$")


def _check_entrypoint(value: str) -> str:
    if not _ENTRYPOINT_RE.match(value):
        raise ValueError(f"Entrypoint must look like 'package.module:attr', got '{value}'")
    return value


class ExtensionDescriptor(BaseModel):
    value: Any = None
    factory: Optional[str] = Field(
        None, description="Entrypoint called with the startup context to build the value."
    )

    @model_validator(mode="after")
    def _validate_source(self) -> "ExtensionDescriptor":
        has_value = "value" in self.model_fields_set
        if has_value == (self.factory is not None):
            raise ValueError("extension requires exactly one of 'value' or 'factory'")
        if self.factory is not None:
            _check_entrypoint(self.factory)
        return self


class ModuleManifestV1(BaseModel):
    name: str
    description: Optional[str] = None
    depends_on: Optional[list[Union[str, ModuleManifestV1]]] = None
    start: Optional[str] = None
    extension_points: dict[str, str] = Field(default_factory=dict)
    extensions: dict[str, ExtensionDescriptor] = Field(default_factory=dict)
    payload: dict[str, Any] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        if not _MODULE_NAME_RE.match(value):
            raise ValueError("Module name must match [A-Za-z0-9_.-] and be <=64 chars")
        return value

    @field_validator("start")
    @classmethod
    def _validate_start(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            _check_entrypoint(value)
        return value

    @field_validator("extension_points")
    @classmethod
    def _validate_extension_points(cls, value: dict[str, str]) -> dict[str, str]:
        for entrypoint in value.values():
            _check_entrypoint(entrypoint)
        return value


ModuleManifestV1.model_rebuild()


class ManifestV1(BaseModel):
    schema_version: int = 1
    modules: list[ModuleManifestV1] = Field(default_factory=list)


def parse_manifest(payload: dict[str, Any]) -> list[ModuleSpec]:
    """Validate a manifest mapping and build the module specs it describes."""

    if not isinstance(payload, dict):
        raise ManifestError("Manifest payload must be a mapping")
    schema = payload.get("schema_version", 1)
    if schema != 1:
        raise ManifestError(f"Unsupported schema_version: {schema}")
    try:
        manifest = ManifestV1.model_validate(payload)
    except ValidationError as exc:
        raise ManifestError(str(exc)) from exc
    return [build_module(entry) for entry in manifest.modules]


def load_manifest(path: Path | str) -> list[ModuleSpec]:
    manifest_path = Path(path)
    try:
        with manifest_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        raise ManifestError(f"Cannot read manifest {manifest_path}: {exc}") from exc
    return parse_manifest(data if data is not None else {})


def build_module(entry: ModuleManifestV1) -> ModuleSpec:
    depends_on = None
    if entry.depends_on is not None:
        depends_on = [
            dep if isinstance(dep, str) else build_module(dep) for dep in entry.depends_on
        ]
    payload = dict(entry.payload)
    if entry.description:
        payload.setdefault("description", entry.description)
    extensions: dict[str, Any] = {}
    for name, descriptor in entry.extensions.items():
        if descriptor.factory is not None:
            extensions[name] = load_entrypoint(descriptor.factory)
        else:
            extensions[name] = descriptor.value
    return ModuleSpec(
        entry.name,
        depends_on=depends_on,
        extension_points={
            name: load_entrypoint(target) for name, target in entry.extension_points.items()
        },
        extensions=extensions,
        start=load_entrypoint(entry.start) if entry.start else None,
        payload=payload,
    )


def load_entrypoint(entrypoint: str) -> Any:
    module_name, _, attr = entrypoint.partition(":")
    if not module_name or not attr:
        raise ExtensionPointError(f"Invalid entrypoint '{entrypoint}'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ExtensionPointError(f"Cannot import '{module_name}': {exc}") from exc
    value: Any = module
    for part in attr.split("."):
        try:
            value = getattr(value, part)
        except AttributeError as exc:
            raise ExtensionPointError(f"Entrypoint '{entrypoint}' not found") from exc
    return value
