# src/breed_fetch/__init__.py
"""
breed-fetch
===========

Prompt for a dog breed, fetch a random image URL for it and save the URL
to a file.

:noindex:
"""
from importlib.metadata import version

try:
    __version__ = version("breed-fetch")
except Exception:
    __version__ = "unknown"

from .buffer import BufferConfig, ResponseBuffer
from .client import (
    DEFAULT_URL_TEMPLATE,
    Transport,
    async_fetch_json,
    build_url,
    extract_message,
    fetch_json_sync,
)
from .config import Settings, load_settings
from .errors import (
    BreedFetchError,
    BufferOverflowError,
    ClosedBufferError,
    ConfigError,
    ConnectionTimeoutError,
    FileWriteError,
    InvalidResponseFormatError,
    JSONParseError,
    MissingFieldError,
    NetworkError,
    PromptError,
    RemoteFetchError,
    ResponseBufferError,
    ResponseError,
)
from .pipeline import PipelineResult, run_pipeline
from .prompt import PromptSession
from .storage import async_write_output, write_output

__all__ = [
    # Main functions
    "run_pipeline",
    "async_fetch_json",
    "fetch_json_sync",
    "build_url",
    "extract_message",
    "write_output",
    "async_write_output",
    # Configuration
    "Settings",
    "load_settings",
    "Transport",
    "BufferConfig",
    "DEFAULT_URL_TEMPLATE",
    # Types
    "PipelineResult",
    "PromptSession",
    "ResponseBuffer",
    # Exceptions
    "BreedFetchError",
    "ConfigError",
    "PromptError",
    "RemoteFetchError",
    "NetworkError",
    "ConnectionTimeoutError",
    "ResponseError",
    "JSONParseError",
    "InvalidResponseFormatError",
    "MissingFieldError",
    "ResponseBufferError",
    "ClosedBufferError",
    "BufferOverflowError",
    "FileWriteError",
]
