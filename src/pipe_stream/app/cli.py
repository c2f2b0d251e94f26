from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pipe_stream.app.runtime import build_log_sink, build_registry, run_pipeline
from pipe_stream.config.loader import ConfigError, load_yaml_config, parse_config
from pipe_stream.config.models import AppConfig
from pipe_stream.domain.errors import PipeStreamError
from pipe_stream.observability.adapters.logging import StreamLogSink, emit_log

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pipe-stream",
        description="Stream newline-delimited records from a source to a sink, case-folding each record",
    )
    parser.add_argument("--config", help="Path to YAML config")
    inputs = parser.add_mutually_exclusive_group()
    inputs.add_argument("--input", help="Read from this file ('-' for stdin)")
    inputs.add_argument("--url", help="Read from this http(s) URL")
    parser.add_argument("--output", help="Write to this file ('-' for stdout)")
    parser.add_argument("--strategy", choices=["pump", "readline"], help="Override pipeline strategy")
    parser.add_argument("--log-level", choices=["debug", "info", "warning", "error"], help="Override log level")
    parser.add_argument("--log-path", help="Write JSONL logs to this file instead of stderr")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def apply_cli_overrides(raw: dict[str, Any], args: argparse.Namespace) -> None:
    # CLI flags take precedence over the config file.
    if args.input is not None:
        if args.input == "-":
            _set_adapter(raw, "source", "stdin", {})
        else:
            _set_adapter(raw, "source", "file", {"path": args.input})
    if args.url is not None:
        _set_adapter(raw, "source", "http", {"url": args.url})
    if args.output is not None:
        if args.output == "-":
            _set_adapter(raw, "sink", "stdout", {})
        else:
            _set_adapter(raw, "sink", "file", {"path": args.output})
    if args.strategy is not None:
        _section(raw, "pipeline")["strategy"] = args.strategy
    if args.log_level is not None:
        _section(raw, "logging")["level"] = args.log_level
    if args.log_path is not None:
        _section(raw, "logging")["sink"] = {"kind": "jsonl", "path": args.log_path}


def load_app_config(args: argparse.Namespace) -> AppConfig:
    raw = load_yaml_config(Path(args.config)) if args.config else {}
    apply_cli_overrides(raw, args)
    return parse_config(raw)


def run(argv: Sequence[str] | None = None) -> int:
    # Thin orchestration wrapper: config -> log sink -> one pipeline run -> exit code.
    args = parse_args(argv)
    try:
        config = load_app_config(args)
        registry = build_registry()
        log = build_log_sink(config.logging, registry)
    except (ConfigError, OSError) as exc:
        emit_log(StreamLogSink(), "error", "config.invalid", error=str(exc))
        return EXIT_CONFIG
    try:
        run_pipeline(config, registry=registry, log=log)
    except ConfigError as exc:
        emit_log(log, "error", "config.invalid", error=str(exc))
        return EXIT_CONFIG
    except (PipeStreamError, OSError) as exc:
        emit_log(log, "error", "pipeline.failed", error_type=type(exc).__name__, error=str(exc))
        return EXIT_FAILED
    finally:
        log.close()
    return EXIT_OK


def _set_adapter(raw: dict[str, Any], role: str, kind: str, settings: dict[str, object]) -> None:
    # Settings of the configured adapter are kept only when the kind stays the same.
    entry = raw.get(role)
    if entry is not None and not isinstance(entry, dict):
        raise ConfigError(f"{role} must be a mapping")
    merged: dict[str, object] = {}
    if entry is not None and entry.get("kind") == kind:
        existing = entry.get("settings", {})
        if not isinstance(existing, dict):
            raise ConfigError(f"{role}.settings must be a mapping")
        merged.update(existing)
    merged.update(settings)
    raw[role] = {"kind": kind, "settings": merged}


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw.setdefault(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"{name} must be a mapping")
    return section
