"""Node implementations for the design agent graph.

The caller's output channel, the request context and an optional chat model
are not graph state: they are passed per run through
`config["configurable"]` under the keys "output", "context" and "llm".
"""

import logging

from langchain_core.runnables import RunnableConfig
from langchain_openai import ChatOpenAI

from design_lm.config import load_settings
from design_lm.models import DESIGN_TASK_SLOT, DesignState, DesignTask, RequestContext
from .prompts import build_design_messages
from .schemas import build_design_tool, build_output_model
from .streaming import forward_fragments, stream_tool_call_fragments
from .validation import decode_design_task

logger = logging.getLogger(__name__)


def _get_llm():
    """Get the streaming chat model for the design call."""
    settings = load_settings()
    return ChatOpenAI(model=settings.model, temperature=settings.temperature, streaming=True)


def attach_design_task(context: RequestContext, design_task: DesignTask) -> None:
    """Write the design task to the request context, replacing any prior value."""
    context[DESIGN_TASK_SLOT] = design_task


def prepare_node(state: DesignState) -> dict:
    """
    Build the output model, tool declaration and conversation.

    Runs once per invocation, from the catalog supplied with this run.
    """
    output_model = build_output_model(state["catalog"])
    return {
        "output_model": output_model,
        "tool": build_design_tool(output_model),
        "messages": build_design_messages(state["catalog"], state["user_request"]),
    }


async def stream_node(state: DesignState, config: RunnableConfig) -> dict:
    """Stream the tool call, forwarding every fragment to the caller as it arrives."""
    configurable = config["configurable"]
    llm = configurable.get("llm") or _get_llm()

    fragments = stream_tool_call_fragments(llm, state["messages"], state["tool"])
    completion = await forward_fragments(fragments, configurable["output"])

    logger.info(f"Completion stream done ({len(completion)} chars)")
    return {"completion": completion}


def decode_node(state: DesignState) -> dict:
    """Decode the full completion; raises MalformedOutputError on bad output."""
    design_task = decode_design_task(
        state["completion"],
        state["output_model"],
        state["user_request"],
    )
    logger.info(f"Decoded design task with {len(design_task.components)} library component(s)")
    return {"design_task": design_task}


def attach_node(state: DesignState, config: RunnableConfig) -> dict:
    """Attach the decoded design task to the request context."""
    attach_design_task(config["configurable"]["context"], state["design_task"])
    return {}
