"""Console output for CLI operations."""

from typing import Optional, TextIO


class OutputContext:
    """Context manager for user-facing console lines.

    Text is written exactly as given, one line per call, so extracted values
    reach the terminal byte for byte.
    """

    def __init__(self, file: Optional[TextIO] = None):
        self._file = file

    def __enter__(self) -> "OutputContext":
        return self

    def __exit__(self, *args) -> None:
        pass

    def print_output(self, text: str) -> None:
        """Print one line to stdout or the configured stream.

        Args:
            text: Text to print
        """
        print(text, file=self._file, flush=True)
