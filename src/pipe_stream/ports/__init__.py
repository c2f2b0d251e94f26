from .byte_sink import ByteSink
from .chunk_source import ChunkSource
from .log_sink import LogSink

# Public port exports keep wiring explicit at composition time.
__all__ = ["ByteSink", "ChunkSource", "LogSink"]
