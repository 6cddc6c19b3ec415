"""Entry point for the design agent."""

import asyncio
import logging
import sys
from typing import Sequence

from design_lm.catalog import load_catalog
from design_lm.config import configure_logging, load_settings
from design_lm.models import CatalogEntry, DesignTask, OutputChannel, RequestContext
from design_lm.agents.design import compile_design_graph

logger = logging.getLogger(__name__)


async def design_new_component(
    user_request: str,
    output: OutputChannel,
    context: RequestContext,
    catalog: Sequence[CatalogEntry] | None = None,
    llm=None,
) -> DesignTask:
    """
    Design a new component from a free-text request.

    The model's raw tool-call output is written to `output` fragment by
    fragment while it is generated. Once the stream completes the output is
    decoded and attached to `context` under DESIGN_TASK_SLOT.

    Args:
        user_request: The user's component request
        output: Caller's output channel for the raw stream
        context: Per-request context receiving the DesignTask
        catalog: Library components; defaults to the configured catalog
        llm: Chat model to use instead of the configured one

    Returns:
        The decoded DesignTask

    Raises:
        TransportError: The completion stream failed; nothing is decoded
        MalformedOutputError: The streamed output did not match the schema
    """
    logger.info("init : design new component")
    if catalog is None:
        catalog = load_catalog(load_settings().catalog_path)

    app = compile_design_graph()
    final_state = await app.ainvoke(
        {"user_request": user_request, "catalog": list(catalog)},
        config={"configurable": {"output": output, "context": context, "llm": llm}},
    )
    return final_state["design_task"]


def run_design_agent(
    prompt: str,
    output: OutputChannel = sys.stdout,
    catalog: Sequence[CatalogEntry] | None = None,
) -> dict:
    """
    Run the design agent synchronously.

    Returns:
        The design task as a plain dict
    """
    context: RequestContext = {}
    design_task = asyncio.run(design_new_component(prompt, output, context, catalog=catalog))
    return design_task.model_dump()


if __name__ == "__main__":
    # Example usage
    configure_logging(load_settings().log_level)
    result = run_design_agent(
        "A pricing card with a monthly/yearly switch and a call-to-action button",
    )

    print("\n\nDesign task:")
    print(f"  {result['description']['llm']}")
    for component in result["components"]:
        print(f"  - {component['name']}: {component['usage']}")
