"""Conversation prompts for the component design call."""

from typing import Sequence

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from design_lm.models import CatalogEntry


SYSTEM_PROMPT = """Your task is to design a new Vue component for a web app, according to the user's request.
If you judge it is relevant to do so, you can specify pre-made library components to use in the task.
You can also specify the use of icons if you see that the user's request requires it."""


CATALOG_PROMPT = """Multiple library components can be used while creating a new component in order to help you do a better design job, faster.

AVAILABLE LIBRARY COMPONENTS:
```
{components}
```"""


USER_QUERY_PROMPT = """USER QUERY :
```
{prompt}
```

Design the new Vue web component task for the user as the creative genius you are"""


def format_catalog(catalog: Sequence[CatalogEntry]) -> str:
    """Render every catalog entry as `name : description;`, one per line."""
    return "\n".join(f"{entry.name} : {entry.description};" for entry in catalog)


def build_design_messages(
    catalog: Sequence[CatalogEntry],
    user_request: str,
) -> list[BaseMessage]:
    """
    Build the conversation for the design call.

    Order is fixed: system instruction, catalog listing, then the user's
    request, so the model weighs the catalog before the user's words.
    """
    return [
        SystemMessage(content=SYSTEM_PROMPT),
        HumanMessage(content=CATALOG_PROMPT.format(components=format_catalog(catalog))),
        HumanMessage(content=USER_QUERY_PROMPT.format(prompt=user_request)),
    ]
