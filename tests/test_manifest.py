from __future__ import annotations

from pathlib import Path

import pytest

from modx.errors import ExtensionPointError, ManifestError
from modx.host import install
from modx.manifest import load_manifest, parse_manifest
from modx.modules import ModuleSpec, names
from modx.resolution import resolve

from tests.fixtures.modules import sample_module

SAMPLE = "tests.fixtures.modules.sample_module"


def _payload() -> dict:
    return {
        "schema_version": 1,
        "modules": [
            {
                "name": "web",
                "depends_on": ["core"],
                "start": f"{SAMPLE}:start_web",
                "extensions": {
                    "collect": {"factory": f"{SAMPLE}:build_greeting"},
                },
            },
            {
                "name": "core",
                "description": "Core services",
                "start": f"{SAMPLE}:start_core",
                "extension_points": {"collect": f"{SAMPLE}:collect"},
                "extensions": {"collect": {"value": [1, 2]}},
            },
        ],
    }


def test_manifest_parse_valid() -> None:
    modules = parse_manifest(_payload())
    assert names(modules) == ["web", "core"]
    assert modules[0].dependency_names == ("core",)
    assert modules[0].start is sample_module.start_web
    assert modules[1].extension_points == {"collect": sample_module.collect}
    assert modules[1].extensions == {"collect": [1, 2]}
    assert modules[1].payload == {"description": "Core services"}


def test_manifest_modules_install() -> None:
    sample_module.EVENTS.clear()
    installation = install(parse_manifest(_payload()), config={"greeting": "hi"})
    assert installation.names() == ["core", "web"]
    assert sample_module.EVENTS == [
        ("collect", [1, 2]),
        ("collect", {"greeting": "hi"}),
        ("start", "core"),
        ("start", "Core services"),
    ]


def test_nested_modules_match_named_modules() -> None:
    nested = parse_manifest(
        {"modules": [{"name": "app", "depends_on": [{"name": "lib", "depends_on": ["base"]}]}, {"name": "base"}]}
    )
    assert resolve(nested) == (
        ModuleSpec("base"),
        ModuleSpec("lib", depends_on=["base"]),
        ModuleSpec("app", depends_on=["lib"]),
    )


def test_manifest_rejects_unknown_schema() -> None:
    with pytest.raises(ManifestError):
        parse_manifest({"schema_version": 2, "modules": []})


def test_manifest_rejects_non_mapping() -> None:
    with pytest.raises(ManifestError):
        parse_manifest(["not", "a", "mapping"])  # type: ignore[arg-type]


def test_manifest_rejects_invalid_names() -> None:
    with pytest.raises(ManifestError):
        parse_manifest({"modules": [{"name": "bad name!"}]})


def test_manifest_rejects_malformed_entrypoint() -> None:
    with pytest.raises(ManifestError):
        parse_manifest({"modules": [{"name": "a", "start": "no_colon_here"}]})


def test_extension_requires_exactly_one_source() -> None:
    with pytest.raises(ManifestError):
        parse_manifest(
            {"modules": [{"name": "a", "extensions": {"x": {"value": 1, "factory": f"{SAMPLE}:collect"}}}]}
        )
    with pytest.raises(ManifestError):
        parse_manifest({"modules": [{"name": "a", "extensions": {"x": {}}}]})


def test_null_extension_value_is_allowed() -> None:
    (spec,) = parse_manifest({"modules": [{"name": "a", "extensions": {"x": {"value": None}}}]})
    assert spec.extensions == {"x": None}


def test_unknown_entrypoint_raises() -> None:
    with pytest.raises(ExtensionPointError):
        parse_manifest({"modules": [{"name": "a", "start": f"{SAMPLE}:does_not_exist"}]})
    with pytest.raises(ExtensionPointError):
        parse_manifest({"modules": [{"name": "a", "start": "tests.fixtures.no_such_module:x"}]})


def test_load_manifest_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "modules.yml"
    path.write_text(
        """
schema_version: 1
modules:
  - name: b
    depends_on: [a]
  - name: a
""",
        encoding="utf-8",
    )
    assert names(resolve(load_manifest(path))) == ["a", "b"]


def test_load_manifest_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ManifestError):
        load_manifest(tmp_path / "absent.yml")


def test_empty_manifest_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_manifest(path) == []
