"""Decoding of the streamed tool-call output into a DesignTask.

Decoding runs once the stream is complete:

1. Parse: the concatenated fragments must be valid JSON
2. Validate: the parsed value must match the catalog-bound output schema
3. Map: tool-call field names are renamed onto the DesignTask record
"""

import json
import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from design_lm.errors import MalformedOutputError
from design_lm.models import ComponentDescription, ComponentUsage, DesignTask

logger = logging.getLogger(__name__)


def parse_completion(completion: str) -> Any:
    """
    Parse the accumulated completion as JSON.

    Raises:
        MalformedOutputError: The completion is empty, truncated or not JSON
    """
    try:
        return json.loads(completion)
    except json.JSONDecodeError as e:
        logger.warning(f"Model output is not valid JSON: {e}")
        raise MalformedOutputError(f"invalid JSON ({e})") from e


def validate_completion(parsed: Any, output_model: type[BaseModel]) -> BaseModel:
    """
    Validate parsed output against the output model.

    Any value that is not a conforming object fails, including `null`.

    Raises:
        MalformedOutputError: Missing field, wrong type or unknown component name
    """
    try:
        return output_model.model_validate(parsed)
    except ValidationError as e:
        logger.warning(f"Model output failed schema validation: {e.error_count()} error(s)")
        raise MalformedOutputError(f"schema mismatch ({e.error_count()} error(s))") from e


def decode_design_task(
    completion: str,
    output_model: type[BaseModel],
    user_request: str,
) -> DesignTask:
    """
    Decode the full completion into a DesignTask.

    Args:
        completion: All fragments joined in arrival order
        output_model: Model from build_output_model for the current catalog
        user_request: Verbatim user request, copied into description.user

    Returns:
        The decoded DesignTask, components in the model's order

    Raises:
        MalformedOutputError: The completion does not parse or validate
    """
    output = validate_completion(parse_completion(completion), output_model)

    return DesignTask(
        description=ComponentDescription(
            user=user_request,
            llm=output.new_component_description,
        ),
        components=[
            ComponentUsage(
                name=item.library_component_name,
                usage=item.library_component_usage_reason,
            )
            for item in output.use_library_components
        ],
    )
