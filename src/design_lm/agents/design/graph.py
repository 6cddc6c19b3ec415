"""LangGraph definition for the design agent."""

from langgraph.graph import StateGraph, START, END

from design_lm.models import DesignState
from .nodes import (
    prepare_node,
    stream_node,
    decode_node,
    attach_node,
)


def create_design_graph() -> StateGraph:
    """
    Create the design agent graph.

    Graph structure:
        START -> prepare -> stream -> decode -> attach -> END

    A stream or decode failure raises out of the run, so attach only ever
    sees a fully decoded task.
    """
    graph = StateGraph(DesignState)

    # Add nodes
    graph.add_node("prepare", prepare_node)
    graph.add_node("stream", stream_node)
    graph.add_node("decode", decode_node)
    graph.add_node("attach", attach_node)

    # Add edges
    graph.add_edge(START, "prepare")
    graph.add_edge("prepare", "stream")
    graph.add_edge("stream", "decode")
    graph.add_edge("decode", "attach")
    graph.add_edge("attach", END)

    return graph


def compile_design_graph():
    """Compile the graph for execution."""
    graph = create_design_graph()
    return graph.compile()
