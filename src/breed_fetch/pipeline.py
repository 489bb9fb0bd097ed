"""Prompt, fetch, extract, persist: the breed-fetch run in order."""

import logging
from dataclasses import dataclass
from typing import Optional

import aiohttp

from .buffer import BufferConfig
from .client import async_fetch_json, build_url, extract_message
from .config import Settings
from .logging import LogCallback
from .prompt import PromptSession
from .storage import async_write_output

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of a completed run."""

    breed: str
    url: str
    message: str
    output_path: str


async def run_pipeline(
    settings: Settings,
    prompt_session: PromptSession,
    *,
    session: Optional[aiohttp.ClientSession] = None,
    on_log: Optional[LogCallback] = None,
) -> PipelineResult:
    """Run the four stages, each awaiting the previous one.

    Any ``BreedFetchError`` aborts the remaining stages and propagates to
    the caller unchanged. Nothing is retried.
    """
    async with prompt_session:
        breed = await prompt_session.ask()
    logger.debug("Read breed %r", breed)

    url = build_url(breed, settings.url_template)
    payload = await async_fetch_json(
        url,
        transport=settings.transport,
        session=session,
        timeout=settings.timeout,
        buffer_config=BufferConfig(
            max_buffer_size=settings.max_buffer_size,
            chunk_size=settings.chunk_size,
        ),
        on_log=on_log,
    )

    message = extract_message(payload, allow_missing=settings.allow_missing)

    await async_write_output(settings.output_path, message, on_log)
    logger.debug("Wrote %d characters to %s", len(message), settings.output_path)

    return PipelineResult(
        breed=breed,
        url=url,
        message=message,
        output_path=settings.output_path,
    )
