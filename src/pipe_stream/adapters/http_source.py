from __future__ import annotations

from typing import BinaryIO
from urllib import request as urllib_request

from pipe_stream.adapters.contracts import adapter
from pipe_stream.adapters.settings import optional_float, optional_int, require_str
from pipe_stream.adapters.streams import DEFAULT_CHUNK_SIZE, StreamChunkSource

DEFAULT_TIMEOUT_SECONDS = 30.0
USER_AGENT = "pipe-stream/0.1"


def open_url(url: str, *, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> BinaryIO:
    # Streaming GET: the response body is pulled chunk by chunk, never read whole.
    if not url.startswith(("http://", "https://")):
        raise ValueError("source.settings.url must be an http(s) URL")
    request = urllib_request.Request(url, method="GET", headers={"User-Agent": USER_AGENT})
    return urllib_request.urlopen(request, timeout=timeout_seconds)  # noqa: S310 - scheme checked above


@adapter(role="source", kind="http")
def http_source(settings: dict[str, object]) -> StreamChunkSource:
    url = require_str(settings, "url", "source")
    timeout_seconds = optional_float(settings, "timeout_seconds", "source", DEFAULT_TIMEOUT_SECONDS)
    chunk_size = optional_int(settings, "chunk_size", "source", DEFAULT_CHUNK_SIZE)
    assert chunk_size is not None
    return StreamChunkSource(open_url(url, timeout_seconds=timeout_seconds), chunk_size=chunk_size)
