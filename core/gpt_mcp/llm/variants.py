"""Request/response adapters for the supported OpenAI endpoint families.

Two upstream variants are supported, selected by configuration:

``chat``
    Chat Completions. Flat ``messages`` list in, ``choices[0].message`` out,
    usage counted as ``prompt_tokens``/``completion_tokens``.

``responses``
    Responses API. ``input`` string or item list in, nested ``output`` items
    out, usage counted as ``input_tokens``/``output_tokens``.

Each variant is a plain record of functions (``to_upstream``,
``from_upstream``, ``invoke``); the rest of the server only ever talks to
the ``ApiVariant`` it was configured with.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from gpt_mcp.llm.exceptions import LLMConfigError
from gpt_mcp.llm.types import GenerationRequest, LLMResponse, Message, NormalizedResult, TokenUsage

ToUpstream = Callable[[GenerationRequest, str, str], dict[str, Any]]
FromUpstream = Callable[[Any], LLMResponse]
Invoke = Callable[[Any, dict[str, Any]], Awaitable[Any]]


@dataclass(frozen=True)
class ApiVariant:
    """One upstream endpoint family.

    Attributes:
        name: Configuration name ("chat" or "responses").
        reasoning_efforts: Effort values accepted for this variant.
        to_upstream: Builds the request payload from (request, model, effort).
        from_upstream: Reduces a raw response to an LLMResponse.
        invoke: Sends a payload with an ``openai.AsyncOpenAI`` client.
    """

    name: str
    reasoning_efforts: tuple[str, ...]
    to_upstream: ToUpstream
    from_upstream: FromUpstream
    invoke: Invoke


def _field(obj: Any, name: str) -> Any:
    """Read ``name`` from an SDK model or a plain mapping."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _as_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def normalize_usage(usage: Any) -> TokenUsage | None:
    """Map either usage naming convention onto TokenUsage.

    Args:
        usage: Usage block using ``input_tokens``/``output_tokens`` or
            ``prompt_tokens``/``completion_tokens``.

    Returns:
        TokenUsage, or None when the response carried no usage.
    """
    if usage is None:
        return None

    input_tokens = _as_int(_field(usage, "input_tokens"))
    if input_tokens is None:
        input_tokens = _as_int(_field(usage, "prompt_tokens"))
    output_tokens = _as_int(_field(usage, "output_tokens"))
    if output_tokens is None:
        output_tokens = _as_int(_field(usage, "completion_tokens"))
    if input_tokens is None and output_tokens is None:
        return None

    input_tokens = input_tokens or 0
    output_tokens = output_tokens or 0
    total_tokens = _as_int(_field(usage, "total_tokens"))
    if total_tokens is None:
        total_tokens = input_tokens + output_tokens
    return TokenUsage(input_tokens=input_tokens, output_tokens=output_tokens, total_tokens=total_tokens)


def _conversation(request: GenerationRequest) -> list[dict[str, str]]:
    """Message list with the optional developer instruction in front."""
    out: list[dict[str, str]] = []
    if request.instructions:
        out.append({"role": "developer", "content": request.instructions})
    messages: tuple[Message, ...] = request.prompt if not isinstance(request.prompt, str) else ()
    for msg in messages:
        out.append({"role": msg["role"], "content": msg["content"]})
    return out


def _copy_sampling(payload: dict[str, Any], request: GenerationRequest, max_tokens_key: str) -> None:
    """Copy only the sampling fields the caller actually supplied."""
    if request.max_output_tokens is not None:
        payload[max_tokens_key] = request.max_output_tokens
    if request.temperature is not None:
        payload["temperature"] = request.temperature
    if request.top_p is not None:
        payload["top_p"] = request.top_p


# ---- chat completions ----

def to_chat_request(request: GenerationRequest, model: str, effort: str) -> dict[str, Any]:
    """Build a ``chat.completions.create`` payload."""
    messages = _conversation(request)
    if isinstance(request.prompt, str):
        messages.append({"role": "user", "content": request.prompt})

    payload: dict[str, Any] = {"model": model, "messages": messages}
    _copy_sampling(payload, request, "max_completion_tokens")
    if effort != "none":
        payload["reasoning_effort"] = effort
    return payload


def from_chat_response(raw: Any) -> LLMResponse:
    """Reduce a chat completion to text, model and usage."""
    choices = _field(raw, "choices") or []
    message = _field(choices[0], "message") if choices else None
    content = _field(message, "content")
    return LLMResponse(
        text=content if isinstance(content, str) else "",
        model=_field(raw, "model") or None,
        usage=normalize_usage(_field(raw, "usage")),
        raw=raw,
    )


async def _invoke_chat(client: Any, payload: dict[str, Any]) -> Any:
    return await client.chat.completions.create(**payload)


# ---- responses ----

def to_responses_request(request: GenerationRequest, model: str, effort: str) -> dict[str, Any]:
    """Build a ``responses.create`` payload."""
    payload: dict[str, Any] = {"model": model}
    if isinstance(request.prompt, str):
        payload["input"] = request.prompt
        if request.instructions:
            payload["instructions"] = request.instructions
    else:
        payload["input"] = _conversation(request)

    _copy_sampling(payload, request, "max_output_tokens")
    if effort != "none":
        payload["reasoning"] = {"effort": effort}
    return payload


def extract_output_text(output: Any) -> str:
    """Join the ``output_text`` parts of a Responses API ``output`` list.

    Parts within one item are concatenated as-is; items are separated by a
    blank line. Items without any output text (e.g. reasoning) are skipped.
    """
    chunks: list[str] = []
    for item in output or []:
        parts = [
            str(_field(part, "text") or "")
            for part in _field(item, "content") or []
            if _field(part, "type") == "output_text"
        ]
        text = "".join(parts)
        if text:
            chunks.append(text)
    return "\n\n".join(chunks)


def from_responses_response(raw: Any) -> LLMResponse:
    """Reduce a Responses API payload to text, model and usage."""
    return LLMResponse(
        text=extract_output_text(_field(raw, "output")),
        model=_field(raw, "model") or None,
        usage=normalize_usage(_field(raw, "usage")),
        raw=raw,
    )


async def _invoke_responses(client: Any, payload: dict[str, Any]) -> Any:
    return await client.responses.create(**payload)


CHAT = ApiVariant(
    name="chat",
    reasoning_efforts=("none", "low", "medium", "high"),
    to_upstream=to_chat_request,
    from_upstream=from_chat_response,
    invoke=_invoke_chat,
)

RESPONSES = ApiVariant(
    name="responses",
    reasoning_efforts=("none", "minimal", "low", "medium", "high"),
    to_upstream=to_responses_request,
    from_upstream=from_responses_response,
    invoke=_invoke_responses,
)

_VARIANT_MAP: dict[str, ApiVariant] = {
    CHAT.name: CHAT,
    RESPONSES.name: RESPONSES,
}


def get_variant(name: str) -> ApiVariant:
    """Look up an API variant by configuration name.

    Raises:
        LLMConfigError: If ``name`` is not a supported variant.
    """
    variant = _VARIANT_MAP.get(name)
    if variant is None:
        raise LLMConfigError(
            f"Unknown GPT_API_TYPE: {name!r} (expected one of: {', '.join(sorted(_VARIANT_MAP))})"
        )
    return variant


def build_upstream_request(
    request: GenerationRequest,
    active_model: str,
    default_effort: str,
    variant: ApiVariant,
) -> dict[str, Any]:
    """Translate a validated request into the variant's payload.

    Args:
        request: Validated generation request.
        active_model: Model used when the request does not name one.
        default_effort: Effort used when the request does not set one.
        variant: Upstream endpoint family.

    Returns:
        Keyword arguments for the variant's create call.
    """
    model = request.model or active_model
    effort = request.reasoning_effort or default_effort
    return variant.to_upstream(request, model, effort)


def normalize(raw: Any, request: GenerationRequest, requested_model: str, variant: ApiVariant) -> NormalizedResult:
    """Turn a raw upstream response into the stable NormalizedResult.

    Args:
        raw: Upstream response object or mapping.
        request: The request that produced ``raw``.
        requested_model: Model sent upstream; used when no model is echoed.
        variant: Upstream endpoint family that produced ``raw``.

    Returns:
        NormalizedResult (not yet truncated).
    """
    parsed = variant.from_upstream(raw)
    return NormalizedResult(
        text=parsed.text,
        model_used=parsed.model or requested_model,
        usage=parsed.usage,
        message_count=request.message_count,
    )
