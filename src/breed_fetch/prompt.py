"""Single-use interactive prompt."""

import asyncio
import logging
import sys
import threading
from typing import Optional, TextIO

from .errors import PromptError

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "Enter a dog breed: "


class PromptSession:
    """Scoped input handle that serves exactly one prompt.

    The session is released after the first read, whether it succeeded or
    not, so a second ``ask`` raises ``PromptError``. Streams passed in are
    not closed; the session only stops using them.
    """

    def __init__(
        self,
        prompt: str = DEFAULT_PROMPT,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
    ):
        self.prompt = prompt
        self._input = input_stream
        self._output = output_stream
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True
        self._input = None
        self._output = None

    def __enter__(self) -> "PromptSession":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    async def __aenter__(self) -> "PromptSession":
        return self

    async def __aexit__(self, *args) -> None:
        self.close()

    def ask_sync(self) -> str:
        """Show the prompt and block until one line is read."""
        if self._closed:
            raise PromptError("Prompt session is closed")

        input_stream = self._input or sys.stdin
        output_stream = self._output or sys.stdout
        try:
            output_stream.write(self.prompt)
            output_stream.flush()
            line = input_stream.readline()
        finally:
            self.close()

        if not line:
            raise PromptError("No input received")
        if line.endswith("\r\n"):
            return line[:-2]
        if line.endswith("\n"):
            return line[:-1]
        return line

    async def ask(self) -> str:
        """Show the prompt and wait for one line without blocking the loop.

        The read runs on a daemon thread, so an interrupt while waiting
        cancels the caller without waiting for the line to arrive.
        """
        if self._closed:
            raise PromptError("Prompt session is closed")

        loop = asyncio.get_running_loop()
        future: "asyncio.Future[str]" = loop.create_future()

        def _resolve(result: Optional[str], error: Optional[BaseException]) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(result)

        def _read() -> None:
            try:
                result = self.ask_sync()
            except Exception as e:
                args = (None, e)
            else:
                args = (result, None)
            try:
                loop.call_soon_threadsafe(_resolve, *args)
            except RuntimeError:
                # The loop is already closed after an interrupt
                logger.debug("Prompt finished after the event loop closed")

        threading.Thread(target=_read, name="breed-fetch-prompt", daemon=True).start()
        return await future
