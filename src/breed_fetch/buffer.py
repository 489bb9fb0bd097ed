import json
import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Optional

from .errors import BufferOverflowError, ClosedBufferError, JSONParseError
from .logging import LogCallback, LogEvent, LogLevel, _log

# Buffer size constants
MAX_BUFFER_SIZE = 1024 * 1024  # 1MB
DEFAULT_CHUNK_SIZE = 4096  # 4KB

logger = logging.getLogger(__name__)


@dataclass
class BufferConfig:
    """Configuration for response buffer management."""

    max_buffer_size: int = MAX_BUFFER_SIZE
    chunk_size: int = DEFAULT_CHUNK_SIZE


class ResponseBuffer:
    """Buffer for accumulating response body chunks until the stream ends."""

    def __init__(self, config: Optional[BufferConfig] = None):
        self._buffer = BytesIO()
        self._config = config or BufferConfig()
        self._buffer_size = 0
        self._chunk_count = 0
        self._closed = False

    @property
    def size(self) -> int:
        """Get the current size of the buffer in bytes."""
        return self._buffer_size

    @property
    def chunk_count(self) -> int:
        """Get the number of chunks written so far."""
        return self._chunk_count

    @property
    def config(self) -> BufferConfig:
        """Get the buffer configuration."""
        return self._config

    @property
    def closed(self) -> bool:
        """Whether the buffer has been closed."""
        return self._closed

    def write(self, chunk: bytes) -> None:
        """Append a chunk, raising appropriate error if cannot write."""
        if self._closed:
            logger.debug("Attempting to write to closed buffer")
            raise ClosedBufferError("Cannot write to a closed buffer")

        if self._buffer_size + len(chunk) > self._config.max_buffer_size:
            logger.debug(
                "Buffer size limit exceeded: %d > %d",
                self._buffer_size + len(chunk),
                self._config.max_buffer_size,
            )
            raise BufferOverflowError(
                "Response exceeded buffer size limit",
                limit=self._config.max_buffer_size,
            )

        self._buffer.write(chunk)
        self._buffer_size += len(chunk)
        self._chunk_count += 1

    def process_chunk(
        self, chunk: bytes, on_log: Optional[LogCallback] = None
    ) -> None:
        """Write a chunk received from the transport and report it."""
        self.write(chunk)
        _log(
            on_log,
            LogLevel.DEBUG,
            LogEvent.RESPONSE_CHUNK,
            {
                "chunk_index": self._chunk_count - 1,
                "chunk_bytes": len(chunk),
                "size_bytes": self._buffer_size,
            },
        )

    def getvalue(self) -> bytes:
        """Get current buffer content."""
        return self._buffer.getvalue()

    def reset(self) -> None:
        """Reset the buffer content and size."""
        self._buffer = BytesIO()
        self._buffer_size = 0
        self._chunk_count = 0

    def close(self) -> None:
        """Close and cleanup buffer."""
        self._closed = True
        self.reset()

    def parse_json(self) -> Any:
        """Parse the accumulated body as JSON.

        Decode and parse failures are both reported as ``JSONParseError``
        carrying the underlying parser's message.
        """
        content = self.getvalue()
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise JSONParseError(str(e)) from e
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise JSONParseError(str(e), content=text[:200]) from e
