"""Tests for the single-use prompt."""

import asyncio
import io
import os
from typing import Callable

import pytest

from breed_fetch.errors import PromptError
from breed_fetch.prompt import DEFAULT_PROMPT, PromptSession


def test_ask_strips_newline() -> None:
    output = io.StringIO()
    session = PromptSession(input_stream=io.StringIO("hound\n"), output_stream=output)
    assert session.ask_sync() == "hound"
    assert output.getvalue() == DEFAULT_PROMPT


@pytest.mark.parametrize(
    "line, expected",
    [
        ("hound\r\n", "hound"),
        ("hound", "hound"),
        ("\n", ""),
        ("  spaced out  \n", "  spaced out  "),
    ],
)
def test_ask_keeps_everything_but_the_line_ending(
    make_prompt: Callable[[str], PromptSession], line: str, expected: str
) -> None:
    """No trimming or validation beyond removing the newline."""
    assert make_prompt(line).ask_sync() == expected


def test_ask_reads_only_one_line(make_prompt: Callable[[str], PromptSession]) -> None:
    assert make_prompt("first\nsecond\n").ask_sync() == "first"


def test_session_closes_after_read(make_prompt: Callable[[str], PromptSession]) -> None:
    session = make_prompt("hound\n")
    session.ask_sync()
    assert session.closed
    with pytest.raises(PromptError) as exc_info:
        session.ask_sync()
    assert exc_info.value.message == "Prompt session is closed"


def test_end_of_input(make_prompt: Callable[[str], PromptSession]) -> None:
    session = make_prompt("")
    with pytest.raises(PromptError) as exc_info:
        session.ask_sync()
    assert exc_info.value.message == "No input received"
    assert session.closed


def test_custom_prompt_text() -> None:
    output = io.StringIO()
    session = PromptSession(
        "Breed? ", input_stream=io.StringIO("pug\n"), output_stream=output
    )
    session.ask_sync()
    assert output.getvalue() == "Breed? "


def test_context_manager_releases_unused_session(
    make_prompt: Callable[[str], PromptSession],
) -> None:
    with make_prompt("hound\n") as session:
        pass
    assert session.closed


@pytest.mark.asyncio
async def test_async_ask(make_prompt: Callable[[str], PromptSession]) -> None:
    async with make_prompt("beagle\n") as session:
        assert await session.ask() == "beagle"
    with pytest.raises(PromptError):
        await session.ask()


@pytest.mark.asyncio
async def test_async_ask_defaults_to_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("boxer\n"))
    assert await PromptSession().ask() == "boxer"
    assert capsys.readouterr().out == DEFAULT_PROMPT


@pytest.mark.asyncio
async def test_async_ask_end_of_input(
    make_prompt: Callable[[str], PromptSession],
) -> None:
    session = make_prompt("")
    with pytest.raises(PromptError) as exc_info:
        await session.ask()
    assert exc_info.value.message == "No input received"
    assert session.closed


@pytest.mark.asyncio
async def test_async_ask_can_be_cancelled_while_waiting() -> None:
    """A pending read does not keep the caller waiting once cancelled."""
    read_fd, write_fd = os.pipe()
    with os.fdopen(read_fd) as input_stream, os.fdopen(write_fd, "w") as feed:
        session = PromptSession(input_stream=input_stream, output_stream=io.StringIO())
        task = asyncio.create_task(session.ask())
        await asyncio.sleep(0.1)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await asyncio.wait_for(task, timeout=2)
        # Unblock the reader thread
        feed.write("\n")
        feed.flush()
