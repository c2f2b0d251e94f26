from __future__ import annotations

from pipe_stream import adapters, observability
from pipe_stream.adapters.registry import AdapterRegistry
from pipe_stream.adapters.streams import StreamChunkSource, StreamSink
from pipe_stream.config.loader import ConfigError
from pipe_stream.config.models import AppConfig, LoggingConfig
from pipe_stream.kernel.line_reader import LineCopyReport, copy_lines
from pipe_stream.kernel.pump import Pump, RunReport
from pipe_stream.observability.adapters.logging import LevelFilterLogSink, emit_log
from pipe_stream.ports.log_sink import LogSink


def default_discovery_modules() -> list[str]:
    return [*adapters.discovery_modules(), *observability.discovery_modules()]


def build_registry(discovery_modules: list[str] | None = None) -> AdapterRegistry:
    modules = discovery_modules if discovery_modules is not None else default_discovery_modules()
    return AdapterRegistry.from_modules(modules)


def build_log_sink(config: LoggingConfig, registry: AdapterRegistry) -> LevelFilterLogSink:
    settings: dict[str, object] = {}
    if config.sink.path is not None:
        settings["path"] = config.sink.path
    inner = _build(registry, "log", {"kind": config.sink.kind, "settings": settings})
    return LevelFilterLogSink(inner, config.level)  # type: ignore[arg-type]


def run_pipeline(
    config: AppConfig,
    *,
    registry: AdapterRegistry | None = None,
    log: LogSink | None = None,
) -> RunReport | LineCopyReport:
    # Build source first; if the sink cannot be built the source is released again.
    registry = registry if registry is not None else build_registry()
    source = _build(registry, "source", config.source.as_registry_entry())
    try:
        sink = _build(registry, "sink", config.sink.as_registry_entry())
    except BaseException:
        source.close()  # type: ignore[attr-defined]
        raise
    try:
        emit_log(
            log,
            "info",
            "pipeline.start",
            strategy=config.pipeline.strategy,
            source_kind=config.source.kind,
            sink_kind=config.sink.kind,
        )
        pump = None
        if config.pipeline.strategy != "readline":
            pump = Pump(source, sink, delimiter=config.pipeline.delimiter_bytes, log=log)  # type: ignore[arg-type]
    except BaseException:
        _close_both(source, sink)
        raise
    # From here on the chosen strategy owns both collaborators and closes them.
    if pump is None:
        return _run_readline(source, sink, log)
    return pump.run()


def _run_readline(source: object, sink: object, log: LogSink | None) -> LineCopyReport:
    try:
        if not isinstance(source, StreamChunkSource) or not isinstance(sink, StreamSink):
            raise ConfigError("pipeline.strategy 'readline' requires stream-backed source and sink adapters")
        return copy_lines(source.stream, sink.stream, log=log)
    finally:
        _close_both(source, sink)


def _close_both(source: object, sink: object) -> None:
    try:
        source.close()  # type: ignore[attr-defined]
    finally:
        sink.close()  # type: ignore[attr-defined]


def _build(registry: AdapterRegistry, role: str, entry: dict[str, object]) -> object:
    # Factory setting errors are configuration errors; I/O errors (missing file, refused connection) are not.
    try:
        return registry.build(role, entry)
    except ConfigError:
        raise
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc
