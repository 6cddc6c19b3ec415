"""Streaming tool-call completion and fragment forwarding.

The completion stream yields the tool call's JSON arguments as raw text
fragments. Fragments mean nothing on their own: only their concatenation,
in arrival order, is parseable.
"""

import logging
from contextlib import aclosing
from typing import AsyncGenerator, Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage

from design_lm.errors import TransportError
from design_lm.models import OutputChannel

logger = logging.getLogger(__name__)


async def stream_tool_call_fragments(
    llm: BaseChatModel,
    messages: Sequence[BaseMessage],
    tool: dict,
) -> AsyncGenerator[str, None]:
    """
    Open a streamed tool-call completion and yield argument fragments.

    Fragments are yielded as soon as each chunk arrives. The stream counts as
    done only once a chunk reports a finish reason; running out of chunks
    before that is a disconnect.

    Raises:
        TransportError: The provider call failed, or the stream ended early
    """
    bound = llm.bind_tools([tool], tool_choice=tool["function"]["name"])
    finished = False

    try:
        async with aclosing(bound.astream(messages)) as chunks:
            async for chunk in chunks:
                if chunk.response_metadata.get("finish_reason"):
                    finished = True
                for tool_chunk in chunk.tool_call_chunks:
                    # Only the first tool call carries the design
                    if tool_chunk.get("index") not in (0, None):
                        continue
                    if tool_chunk.get("args"):
                        yield tool_chunk["args"]
    except Exception as e:
        logger.error(f"Completion stream failed: {e}")
        raise TransportError(f"Completion stream failed: {e}") from e

    if not finished:
        logger.error("Completion stream ended without a finish reason")
        raise TransportError("Completion stream ended before its terminal event")


async def forward_fragments(
    fragments: AsyncGenerator[str, None],
    output: OutputChannel,
) -> str:
    """
    Buffer each fragment and write it straight through to the caller.

    Append and write happen back to back for every fragment, with no
    suspension in between, so the caller sees fragments in arrival order
    while the model is still generating. Writes are never retracted: if the
    stream or a write fails, the error propagates, the buffer is dropped
    and the fragment stream is closed.

    Args:
        fragments: Live fragment stream
        output: Caller's output channel

    Returns:
        The full completion (all fragments joined in arrival order)
    """
    buffer: list[str] = []
    flush = getattr(output, "flush", None)

    # The fragment stream is closed on every exit, success or not
    async with aclosing(fragments):
        async for fragment in fragments:
            buffer.append(fragment)
            output.write(fragment)
            if flush is not None:
                flush()

    logger.debug(f"Forwarded {len(buffer)} fragments")
    return "".join(buffer)
