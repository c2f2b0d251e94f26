from .cli import apply_cli_overrides, build_parser, load_app_config, parse_args, run
from .runtime import build_log_sink, build_registry, run_pipeline

# app package exports CLI helpers for reuse in tests and entrypoints.
__all__ = [
    "apply_cli_overrides",
    "build_log_sink",
    "build_parser",
    "build_registry",
    "load_app_config",
    "parse_args",
    "run",
    "run_pipeline",
]
