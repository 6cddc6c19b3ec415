"""Core data models for the design agent."""

from .core import (
    DESIGN_TASK_SLOT,
    RequestContext,
    CatalogEntry,
    ComponentDescription,
    ComponentUsage,
    DesignTask,
    OutputChannel,
    DesignState,
)

__all__ = [
    "DESIGN_TASK_SLOT",
    "RequestContext",
    "CatalogEntry",
    "ComponentDescription",
    "ComponentUsage",
    "DesignTask",
    "OutputChannel",
    "DesignState",
]
