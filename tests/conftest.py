"""Shared fixtures: a scripted streaming chat model and a recording output channel."""

import json
from unittest.mock import MagicMock

import pytest
from langchain_core.messages import AIMessageChunk

from design_lm.models import CatalogEntry


class RecordingOutput:
    """Output channel that records every write separately."""

    def __init__(self):
        self.writes: list[str] = []

    def write(self, fragment: str) -> None:
        self.writes.append(fragment)

    @property
    def text(self) -> str:
        return "".join(self.writes)


def args_chunk(args: str, index: int = 0) -> AIMessageChunk:
    """A streamed chunk carrying tool-call argument text."""
    return AIMessageChunk(
        content="",
        tool_call_chunks=[{"name": None, "args": args, "id": None, "index": index}],
    )


def finish_chunk(reason: str = "tool_calls") -> AIMessageChunk:
    """The final chunk of a completed stream."""
    return AIMessageChunk(content="", response_metadata={"finish_reason": reason})


def scripted_llm(fragments, error: Exception | None = None, finish: bool = True) -> MagicMock:
    """
    Mock chat model whose bound tool stream yields the given fragments.

    After the fragments it raises `error` if given, otherwise it ends with a
    finish chunk unless `finish` is False (a silent disconnect).
    """
    async def astream(messages):
        for fragment in fragments:
            yield args_chunk(fragment)
        if error is not None:
            raise error
        if finish:
            yield finish_chunk()

    llm = MagicMock()
    llm.bind_tools.return_value.astream = astream
    return llm


def split_fragments(text: str, size: int = 7) -> list[str]:
    """Split text into fixed-size fragments."""
    return [text[i:i + size] for i in range(0, len(text), size)]


@pytest.fixture
def catalog() -> list[CatalogEntry]:
    return [
        CatalogEntry(name="Button", description="Displays a button."),
        CatalogEntry(name="Card", description="Displays a card with header, content, and footer."),
        CatalogEntry(name="Switch", description="A control that toggles between on and off."),
    ]


@pytest.fixture
def output() -> RecordingOutput:
    return RecordingOutput()


@pytest.fixture
def valid_completion() -> str:
    return json.dumps({
        "new_component_description": "A pricing card with a billing period switch",
        "use_library_components": [
            {"library_component_name": "Card", "library_component_usage_reason": "Container"},
            {"library_component_name": "Switch", "library_component_usage_reason": "Monthly/yearly toggle"},
            {"library_component_name": "Button", "library_component_usage_reason": "Call to action"},
        ],
    })


@pytest.fixture
def make_llm():
    return scripted_llm


@pytest.fixture
def fragments_of():
    return split_fragments


@pytest.fixture
def make_args_chunk():
    return args_chunk


@pytest.fixture
def make_finish_chunk():
    return finish_chunk
