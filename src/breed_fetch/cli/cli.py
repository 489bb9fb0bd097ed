"""Fetch a random image URL for a dog breed and save it to a file."""

import argparse
import asyncio
import logging
import sys
from enum import IntEnum
from importlib.metadata import version
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from ..client import Transport
from ..config import load_settings
from ..errors import (
    BreedFetchError,
    ConfigError,
    ConnectionTimeoutError,
    FileWriteError,
    NetworkError,
    PromptError,
    RemoteFetchError,
    ResponseBufferError,
    ResponseError,
)
from ..logging import logger_callback
from ..pipeline import run_pipeline
from ..prompt import PromptSession
from .progress import OutputContext

# Set up logging
logger = logging.getLogger("breed_fetch")

SUCCESS_MESSAGE = "Saved image"

# Get package version
try:
    __version__ = version("breed-fetch")
except Exception:
    __version__ = "unknown"


class ExitCode(IntEnum):
    """Exit codes for the CLI following standard Unix conventions.

    Categories:
    - Success (0-1)
    - User Interruption (2-3)
    - Input/Validation (64-69)
    - I/O and File Access (70-79)
    - API and External Services (80-89)
    - Internal Errors (90-99)
    """

    # Success codes
    SUCCESS = 0

    # User interruption
    INTERRUPTED = 2

    # Input/Validation errors (64-69)
    USAGE_ERROR = 64
    DATA_ERROR = 65

    # I/O and File Access errors (70-79)
    IO_ERROR = 70

    # API and External Service errors (80-89)
    API_ERROR = 80
    API_TIMEOUT = 81

    # Internal errors (90-99)
    INTERNAL_ERROR = 90


def exit_code_for(error: BreedFetchError) -> ExitCode:
    """Map a pipeline failure to its exit code."""
    if isinstance(error, (ConfigError, PromptError)):
        return ExitCode.USAGE_ERROR
    if isinstance(error, ConnectionTimeoutError):
        return ExitCode.API_TIMEOUT
    if isinstance(error, (RemoteFetchError, NetworkError)):
        return ExitCode.API_ERROR
    if isinstance(error, (ResponseError, ResponseBufferError)):
        return ExitCode.DATA_ERROR
    if isinstance(error, FileWriteError):
        return ExitCode.IO_ERROR
    return ExitCode.INTERNAL_ERROR


def create_argument_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="breed-fetch",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Request options
    parser.add_argument(
        "--url-template",
        help="URL template containing {breed} (default: dog.ceo random image)",
    )
    parser.add_argument(
        "--transport",
        choices=[t.value for t in Transport],
        help="How to collect the response body (default: client)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds (default: wait indefinitely)",
    )

    # Output options
    parser.add_argument(
        "--output",
        "-o",
        dest="output_path",
        help="File to write the image URL to (default: img.txt)",
    )
    parser.add_argument(
        "--allow-missing",
        action="store_true",
        default=None,
        help="Write an empty file when the response has no message field",
    )
    parser.add_argument(
        "--echo-breed",
        action="store_true",
        default=None,
        help="Print the breed that was entered",
    )

    # Other options
    parser.add_argument(
        "--config",
        help="YAML file with default settings",
    )
    parser.add_argument(
        "--log-file",
        help="Also write logs to this file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable detailed logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def configure_logging(verbose: bool, log_file: Optional[str] = None) -> None:
    handlers: List[logging.Handler] = [
        RichHandler(console=Console(file=sys.stderr), show_path=False)
        if verbose
        else logging.NullHandler()
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
        )
        handlers.append(file_handler)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=handlers,
    )


async def _main(argv: Optional[List[str]] = None) -> ExitCode:
    """Main CLI function."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose, args.log_file)
    logger.debug("Starting breed-fetch %s", __version__)

    with OutputContext() as output:
        try:
            settings = load_settings(
                args.config,
                overrides={
                    "url_template": args.url_template,
                    "transport": args.transport,
                    "timeout": args.timeout,
                    "output_path": args.output_path,
                    "allow_missing": args.allow_missing,
                    "echo_breed": args.echo_breed,
                },
            )
        except ConfigError as e:
            logger.debug("[_main] Caught ConfigError: %s", e)
            output.print_output(e.message)
            return exit_code_for(e)

        try:
            result = await run_pipeline(
                settings,
                PromptSession(settings.prompt),
                on_log=logger_callback(logger),
            )
        except BreedFetchError as e:
            logger.debug(
                "[_main] Caught %s: %s", type(e).__name__, e.message
            )
            output.print_output(e.message)
            return exit_code_for(e)
        except Exception as e:
            logger.error(f"Unexpected error: {e}")
            output.print_output(str(e))
            return ExitCode.INTERNAL_ERROR

        if settings.echo_breed:
            output.print_output(f"Breed: {result.breed}")
        output.print_output(result.message)
        output.print_output(SUCCESS_MESSAGE)

    return ExitCode.SUCCESS


def main() -> None:
    """CLI entry point that handles all errors."""
    try:
        logger.debug("[main] Starting main execution")
        exit_code = asyncio.run(_main())
        sys.exit(exit_code.value)
    except KeyboardInterrupt:
        logger.error("Operation cancelled by user")
        sys.exit(ExitCode.INTERRUPTED.value)


if __name__ == "__main__":
    main()
