"""Testing utilities for breed-fetch.

This module provides a local stand-in for the breed image API so that code
using breed-fetch can be tested without network access.
"""

from .server_helpers import (
    FakeBreedAPI,
    breed_api_server,
    create_breed_api_app,
    success_body,
)

__all__ = [
    "FakeBreedAPI",
    "breed_api_server",
    "create_breed_api_app",
    "success_body",
]
