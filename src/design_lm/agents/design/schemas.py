"""Output schema for the component design tool call.

The schema is rebuilt from the catalog on every call: the set of legal
library component names is only known at request time, so it is a closed
set validator parameterized over the catalog rather than a static Enum.
"""

from typing import Annotated, Sequence

from langchain_core.utils.function_calling import convert_to_openai_tool
from pydantic import AfterValidator, BaseModel, Field, create_model

from design_lm.models import CatalogEntry


TOOL_NAME = "design_new_component_api"
TOOL_DESCRIPTION = "generate the required design details to create a new component"

DESCRIPTION_FIELD_HELP = (
    "Write a description for Vue component design task based on the user query. "
    "Stick strictly to what the user wants in their request - do not go off track"
)


def closed_set(names: Sequence[str]):
    """Build a validator accepting only the given strings."""
    allowed = frozenset(names)

    def check(value: str) -> str:
        if value not in allowed:
            raise ValueError(f"'{value}' is not an available library component")
        return value

    return check


def build_output_model(catalog: Sequence[CatalogEntry]) -> type[BaseModel]:
    """
    Build the tool-call output model for the given catalog.

    Args:
        catalog: Library components the model may reference

    Returns:
        A pydantic model with `new_component_description` and an ordered
        `use_library_components` list whose names are restricted to the
        catalog. An empty catalog rejects every component name.
    """
    names = [entry.name for entry in catalog]

    component_name = Annotated[
        str,
        AfterValidator(closed_set(names)),
        Field(json_schema_extra={"enum": names}),
    ]

    usage_model = create_model(
        "LibraryComponentUsageOutput",
        __doc__="A library component to use in the new component.",
        library_component_name=(component_name, ...),
        library_component_usage_reason=(str, ...),
    )

    return create_model(
        "DesignNewComponentOutput",
        __doc__=TOOL_DESCRIPTION,
        new_component_description=(str, Field(description=DESCRIPTION_FIELD_HELP)),
        use_library_components=(list[usage_model], ...),
    )


def build_design_tool(output_model: type[BaseModel]) -> dict:
    """Convert the output model to an OpenAI function tool declaration."""
    tool = convert_to_openai_tool(output_model)
    tool["function"]["name"] = TOOL_NAME
    tool["function"]["description"] = TOOL_DESCRIPTION
    return tool
