"""Shared pipeline of the generation tools.

One call runs: build upstream payload -> upstream call -> normalize ->
render -> truncate. Any failure after validation is classified and returned
as an error result; nothing is retried.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from mcp.types import CallToolResult
from pydantic import ValidationError

from gpt_mcp.context import ServerContext
from gpt_mcp.llm.errors import classify_error
from gpt_mcp.llm.truncate import truncate
from gpt_mcp.llm.types import GenerationRequest
from gpt_mcp.llm.variants import build_upstream_request, normalize
from gpt_mcp.tools.base import GenerateInput, MessagesInput, error_result, tool_result, validation_message
from gpt_mcp.tools.formatting import render

logger = logging.getLogger(__name__)


def parse_arguments(
    context: ServerContext,
    model: type[GenerateInput] | type[MessagesInput],
    arguments: dict[str, Any],
) -> GenerationRequest:
    """Validate raw tool arguments into a GenerationRequest.

    Raises:
        pydantic.ValidationError: If the arguments do not match the schema.
    """
    params = model.model_validate(
        arguments,
        context={"reasoning_efforts": context.variant.reasoning_efforts},
    )
    return params.to_generation_request()


async def generate(context: ServerContext, request: GenerationRequest) -> CallToolResult:
    """Run one generation request against the upstream API.

    Args:
        context: Server context (config, active model, client).
        request: Validated request.

    Returns:
        CallToolResult with the rendered (possibly truncated) text and a
        structured echo, or an error result carrying the classified message.
    """
    variant = context.variant
    payload = build_upstream_request(
        request,
        active_model=context.model_state.active_id,
        default_effort=context.config.GPT_REASONING_EFFORT,
        variant=variant,
    )

    try:
        raw = await context.client.create(variant, payload)
        result = normalize(raw, request, payload["model"], variant)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        classified = classify_error(exc)
        logger.warning("Upstream %s call failed (%s): %s", variant.name, classified.kind.value, classified.message)
        return error_result(classified.message)

    clipped = truncate(render(result, request.output_format), context.config.CHARACTER_LIMIT)
    result = dataclasses.replace(result, truncated=clipped.truncated)
    if clipped.truncated:
        logger.info("Truncated %s response to %d characters", result.model_used, context.config.CHARACTER_LIMIT)
    return tool_result(clipped.text, result.to_dict())


async def run_tool(
    context: ServerContext,
    model: type[GenerateInput] | type[MessagesInput],
    arguments: dict[str, Any],
) -> CallToolResult:
    """Validate ``arguments`` and run the generation pipeline.

    Validation failures are reported as input errors and never reach the
    upstream API or the error classifier.
    """
    try:
        request = parse_arguments(context, model, arguments)
    except ValidationError as exc:
        return error_result(validation_message(exc))
    return await generate(context, request)
