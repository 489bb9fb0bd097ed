"""Output file persistence."""

import asyncio
import logging
import os
from typing import Optional, Union

from .errors import FileWriteError
from .logging import LogCallback, LogEvent, LogLevel, _log

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def write_output(
    path: PathLike, content: str, on_log: Optional[LogCallback] = None
) -> int:
    """Replace the whole file at ``path`` with ``content``.

    The file is created if absent and truncated if present. Content is
    written as UTF-8 bytes with nothing added. The write is not atomic.

    Returns:
        Number of bytes written

    Raises:
        FileWriteError: If the file cannot be opened or written
    """
    data = content.encode("utf-8")
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        logger.debug("Write to %s failed: %s", path, e)
        raise FileWriteError(os.fspath(path), e.strerror or str(e)) from e

    _log(
        on_log,
        LogLevel.INFO,
        LogEvent.FILE_WRITE,
        {"path": os.fspath(path), "bytes": len(data)},
    )
    return len(data)


async def async_write_output(
    path: PathLike, content: str, on_log: Optional[LogCallback] = None
) -> int:
    """Run :func:`write_output` in a worker thread."""
    return await asyncio.to_thread(write_output, path, content, on_log)
