"""Client for the breed image API.

This module builds the request URL, performs the single GET and turns the
response into a parsed JSON payload. Two transports are available and give
identical results:

    Transport.CLIENT    the aiohttp response decodes the body itself
    Transport.BUFFERED  body chunks are appended to a ResponseBuffer as they
                        arrive and parsed once the stream is complete

Every failure is raised as a ``BreedFetchError`` subclass:

    status != 200           RemoteFetchError ("Failed to retrieve image")
    body is not JSON        JSONParseError (parser message)
    transport failure       NetworkError (transport message)
    opt-in timeout expired  ConnectionTimeoutError

Example:
    payload = await async_fetch_json(build_url("hound"))
    message = extract_message(payload)

No retries are attempted.
"""

# Standard library imports
import asyncio
import json
import logging
from contextlib import asynccontextmanager
from enum import Enum
from typing import Any, AsyncIterator, Optional

# Third-party imports
import aiohttp
from pydantic import ValidationError

# Local imports
from .buffer import BufferConfig, ResponseBuffer
from .errors import (
    BreedFetchError,
    ConnectionTimeoutError,
    InvalidResponseFormatError,
    JSONParseError,
    MissingFieldError,
    NetworkError,
    RemoteFetchError,
)
from .logging import LogCallback, LogEvent, LogLevel, _log, _log_error
from .schemas import ImageResponse

__all__ = [
    "DEFAULT_URL_TEMPLATE",
    "Transport",
    "build_url",
    "fetch_json",
    "fetch_json_buffered",
    "async_fetch_json",
    "fetch_json_sync",
    "extract_message",
]

logger = logging.getLogger(__name__)

DEFAULT_URL_TEMPLATE = "https://dog.ceo/api/breed/{breed}/images/random"
HTTP_OK = 200


class Transport(str, Enum):
    """How the response body is collected."""

    CLIENT = "client"
    BUFFERED = "buffered"


def build_url(breed: str, template: str = DEFAULT_URL_TEMPLATE) -> str:
    """Substitute the breed into the URL template.

    The breed is inserted as typed: no escaping and no validation.
    """
    return template.replace("{breed}", breed)


def _parse_json_text(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise JSONParseError(str(e), content=text[:200]) from e


def _check_status(response: aiohttp.ClientResponse, url: str) -> None:
    if response.status != HTTP_OK:
        logger.debug("Remote returned status %s for %s", response.status, url)
        raise RemoteFetchError(status_code=response.status, url=url)


def _request_kwargs(timeout: Optional[float]) -> dict[str, Any]:
    if timeout is None:
        return {}
    return {"timeout": aiohttp.ClientTimeout(total=timeout)}


async def fetch_json(
    session: aiohttp.ClientSession,
    url: str,
    *,
    timeout: Optional[float] = None,
    on_log: Optional[LogCallback] = None,
) -> Any:
    """GET ``url`` and let the aiohttp response decode the JSON body."""
    async with session.get(url, **_request_kwargs(timeout)) as response:
        _check_status(response, url)
        try:
            payload = await response.json(content_type=None)
        except UnicodeDecodeError as e:
            raise JSONParseError(str(e)) from e
        except json.JSONDecodeError as e:
            text = await response.text()
            raise JSONParseError(str(e), content=text[:200]) from e
        if payload is None:
            # aiohttp returns None for a blank body instead of raising
            payload = _parse_json_text(await response.text())
        _log(
            on_log,
            LogLevel.DEBUG,
            LogEvent.REQUEST_COMPLETE,
            {"url": url, "status": response.status, "transport": "client"},
        )
        return payload


async def fetch_json_buffered(
    session: aiohttp.ClientSession,
    url: str,
    *,
    timeout: Optional[float] = None,
    buffer_config: Optional[BufferConfig] = None,
    on_log: Optional[LogCallback] = None,
) -> Any:
    """GET ``url`` and accumulate the body chunk by chunk before parsing."""
    buffer = ResponseBuffer(buffer_config)
    try:
        async with session.get(url, **_request_kwargs(timeout)) as response:
            _check_status(response, url)
            async for chunk in response.content.iter_chunked(
                buffer.config.chunk_size
            ):
                buffer.process_chunk(chunk, on_log)
            payload = buffer.parse_json()
            _log(
                on_log,
                LogLevel.DEBUG,
                LogEvent.REQUEST_COMPLETE,
                {
                    "url": url,
                    "status": response.status,
                    "transport": "buffered",
                    "chunks": buffer.chunk_count,
                    "size_bytes": buffer.size,
                },
            )
            return payload
    finally:
        buffer.close()


@asynccontextmanager
async def _session_scope(
    session: Optional[aiohttp.ClientSession],
) -> AsyncIterator[aiohttp.ClientSession]:
    if session is not None:
        yield session
        return
    # No session-wide timeout; a per-request one is applied when requested
    async with aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=None)
    ) as owned:
        yield owned


async def async_fetch_json(
    url: str,
    *,
    transport: Transport = Transport.CLIENT,
    session: Optional[aiohttp.ClientSession] = None,
    timeout: Optional[float] = None,
    buffer_config: Optional[BufferConfig] = None,
    on_log: Optional[LogCallback] = None,
) -> Any:
    """Fetch and parse the JSON payload at ``url``.

    Args:
        url: Fully built request URL
        transport: Which body collection strategy to use
        session: Optional aiohttp session; one is created and closed if omitted
        timeout: Optional total timeout in seconds; ``None`` waits forever
        buffer_config: Buffer limits for the buffered transport
        on_log: Optional callback for structured logging

    Returns:
        The parsed JSON payload

    Raises:
        RemoteFetchError: If the status code is not 200
        JSONParseError: If the body is not valid JSON
        ConnectionTimeoutError: If ``timeout`` expired
        NetworkError: For any other transport failure
    """
    transport = Transport(transport)
    _log(
        on_log,
        LogLevel.INFO,
        LogEvent.REQUEST_START,
        {"url": url, "transport": transport.value, "timeout": timeout},
    )
    try:
        async with _session_scope(session) as active:
            if transport is Transport.BUFFERED:
                return await fetch_json_buffered(
                    active,
                    url,
                    timeout=timeout,
                    buffer_config=buffer_config,
                    on_log=on_log,
                )
            return await fetch_json(
                active, url, timeout=timeout, on_log=on_log
            )
    except BreedFetchError as e:
        _log_error(on_log, e, url=url)
        raise
    except asyncio.TimeoutError as e:
        _log_error(on_log, e, url=url)
        raise ConnectionTimeoutError(timeout=timeout, url=url) from e
    except aiohttp.ClientError as e:
        _log_error(on_log, e, url=url)
        raise NetworkError(str(e) or type(e).__name__, url=url) from e
    except OSError as e:
        _log_error(on_log, e, url=url)
        raise NetworkError(str(e) or type(e).__name__, url=url) from e


def fetch_json_sync(url: str, **kwargs: Any) -> Any:
    """Blocking wrapper around :func:`async_fetch_json`."""
    return asyncio.run(async_fetch_json(url, **kwargs))


def extract_message(payload: Any, *, allow_missing: bool = False) -> str:
    """Return the ``message`` field of a parsed payload.

    A missing field raises ``MissingFieldError`` unless ``allow_missing`` is
    set, in which case the empty string is returned.
    """
    if not isinstance(payload, dict):
        raise InvalidResponseFormatError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )
    try:
        response = ImageResponse.model_validate(payload)
    except ValidationError as e:
        raise InvalidResponseFormatError(
            f"Response validation failed: {e}"
        ) from e
    if response.message is None:
        if allow_missing:
            logger.warning("Response has no 'message' field; writing empty value")
            return ""
        raise MissingFieldError("message")
    return response.message
