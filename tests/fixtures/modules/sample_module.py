"""Entrypoints referenced by manifest tests."""

from __future__ import annotations

EVENTS: list[tuple[str, object]] = []


def collect(context, obj) -> None:
    EVENTS.append(("collect", obj))


def build_greeting(context) -> dict:
    return {"greeting": context.registry.config_get("greeting", "hello")}


def start_core(context) -> None:
    EVENTS.append(("start", "core"))


def start_web(context) -> None:
    core = context.modules.module_by_name("core")
    EVENTS.append(("start", core.payload.get("description", "")))
