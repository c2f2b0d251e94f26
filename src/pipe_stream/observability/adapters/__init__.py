from .logging import JsonlLogSink, LevelFilterLogSink, StreamLogSink, emit_log, log_jsonl, log_stderr, log_stdout

__all__ = [
    "JsonlLogSink",
    "LevelFilterLogSink",
    "StreamLogSink",
    "emit_log",
    "log_jsonl",
    "log_stderr",
    "log_stdout",
]
