from .contracts import AdapterMeta, adapter, get_adapter_meta
from .discovery import AdapterDiscoveryError, discover_adapters
from .registry import AdapterRegistry, AdapterRegistryError
from .streams import DEFAULT_CHUNK_SIZE, StreamChunkSource, StreamSink


def discovery_modules() -> list[str]:
    # Modules contributing @adapter factories for the source and sink roles.
    return [
        "pipe_stream.adapters.file_io",
        "pipe_stream.adapters.console",
        "pipe_stream.adapters.http_source",
    ]


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "AdapterDiscoveryError",
    "AdapterMeta",
    "AdapterRegistry",
    "AdapterRegistryError",
    "StreamChunkSource",
    "StreamSink",
    "adapter",
    "discover_adapters",
    "discovery_modules",
    "get_adapter_meta",
]
