"""Command-line interface for fetching a breed image URL."""

from .cli import ExitCode, create_argument_parser, exit_code_for, main

__all__ = [
    "ExitCode",
    "create_argument_parser",
    "exit_code_for",
    "main",
]
