"""Command-line entrypoint for inspecting and starting module manifests."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import yaml

from .config import AppConfig, LoggingConfig, load_config
from .errors import ModxError
from .host import install
from .logging_utils import configure_logging, get_logger
from .manifest import load_manifest
from .resolution import resolve

_log = get_logger("cli")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="modx")
    p.add_argument(
        "--config",
        default=os.environ.get("MODX_CONFIG"),
        help="Path to config YAML (default: MODX_CONFIG when set).",
    )
    p.add_argument("--log-level", default=None, help="Override the configured log level.")
    p.add_argument("--log-dir", type=Path, default=None, help="Write rotated logs here.")
    sub = p.add_subparsers(dest="cmd", required=True)
    for name, help_text in (
        ("order", "Print the startup order of a manifest."),
        ("check", "Validate that a manifest resolves."),
        ("start", "Install the manifest and run its start hooks."),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("manifest", nargs="?", type=Path, default=None)
    return p.parse_args(argv)


def _logging_overrides(args: argparse.Namespace, current: LoggingConfig) -> LoggingConfig:
    overrides = current.model_dump()
    if args.log_level:
        overrides["level"] = args.log_level
    if args.log_dir:
        overrides["log_dir"] = args.log_dir
    return LoggingConfig.model_validate(overrides)


def _manifest_path(args: argparse.Namespace, config: AppConfig) -> Path:
    path = args.manifest or config.host.manifest
    if path is None:
        raise ModxError("No manifest given and host.manifest is not configured")
    return Path(path)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    try:
        config = load_config(args.config) if args.config else AppConfig()
        config.logging = _logging_overrides(args, config.logging)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"error: cannot load config: {exc}", file=sys.stderr)
        return 1
    configure_logging(config.logging)
    try:
        modules = load_manifest(_manifest_path(args, config))
        if args.cmd == "order":
            for spec in resolve(modules):
                print(spec.name)
        elif args.cmd == "check":
            order = resolve(modules)
            print(f"ok ({len(order)} modules)")
        elif args.cmd == "start":
            installation = install(modules, config=config.host.settings)
            for name in installation.names():
                print(name)
    except ModxError as exc:
        _log.debug("Command {} failed", args.cmd)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
