"""Design agent: streamed, schema-bound design of a new UI component."""

from .graph import create_design_graph, compile_design_graph
from .nodes import (
    # Node functions (for direct testing)
    prepare_node,
    stream_node,
    decode_node,
    attach_node,
    attach_design_task,
)
from .prompts import build_design_messages
from .schemas import TOOL_NAME, build_output_model, build_design_tool
from .streaming import stream_tool_call_fragments, forward_fragments
from .validation import decode_design_task

__all__ = [
    # Main API
    "create_design_graph",
    "compile_design_graph",
    # Node functions
    "prepare_node",
    "stream_node",
    "decode_node",
    "attach_node",
    "attach_design_task",
    # Pipeline stages
    "TOOL_NAME",
    "build_output_model",
    "build_design_tool",
    "build_design_messages",
    "stream_tool_call_fragments",
    "forward_fragments",
    "decode_design_task",
]
