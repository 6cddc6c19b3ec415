"""Core Pydantic models for the component design agent."""

from typing import Any, MutableMapping, Protocol

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypedDict


# Well-known request context slot holding the decoded DesignTask
DESIGN_TASK_SLOT = "component_design_task"

RequestContext = MutableMapping[str, Any]


class CatalogEntry(BaseModel):
    """A reusable library component the model may pick from."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Component name as exposed by the library (e.g., 'Button')")
    description: str = Field(description="What the component is for")
    usage: str | None = Field(default=None, description="Optional usage snippet")


class ComponentDescription(BaseModel):
    """The user's request alongside the model's rewritten description."""
    user: str = Field(description="Verbatim user request")
    llm: str = Field(description="Design description written by the model")


class ComponentUsage(BaseModel):
    """A library component selected for the new component, with the reason."""
    name: str = Field(description="Library component name (always a catalog name)")
    usage: str = Field(description="Why and how the component is used")


class DesignTask(BaseModel):
    """
    Decoded design decision for a new UI component.

    Created once per successful decode and attached to the request context
    under DESIGN_TASK_SLOT.
    """
    description: ComponentDescription
    components: list[ComponentUsage] = Field(
        default_factory=list,
        description="Selected library components, in the model's order"
    )


class OutputChannel(Protocol):
    """Write-only text sink belonging to the caller."""

    def write(self, fragment: str) -> Any: ...


class DesignState(TypedDict, total=False):
    """
    State that flows through the design graph.

    Output channel and request context are not part of the state: they
    travel in the run config so the state stays plain data.
    """
    # Input
    user_request: str
    catalog: list[CatalogEntry]

    # Built once by the prepare node
    messages: list
    tool: dict
    output_model: type[BaseModel]

    # Raw tool-call arguments reassembled from the stream
    completion: str

    # Final output
    design_task: DesignTask
