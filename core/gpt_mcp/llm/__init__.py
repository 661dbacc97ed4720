"""LLM package exports."""

from gpt_mcp.llm.errors import ClassifiedError, ErrorKind, classify_error
from gpt_mcp.llm.selector import ActiveModelState, resolve_active_model
from gpt_mcp.llm.truncate import TruncationResult, truncate
from gpt_mcp.llm.types import GenerationRequest, LLMResponse, Message, NormalizedResult, TokenUsage
from gpt_mcp.llm.variants import ApiVariant, build_upstream_request, get_variant, normalize

__all__ = [
    "ActiveModelState",
    "ApiVariant",
    "ClassifiedError",
    "ErrorKind",
    "GenerationRequest",
    "LLMResponse",
    "Message",
    "NormalizedResult",
    "TokenUsage",
    "TruncationResult",
    "build_upstream_request",
    "classify_error",
    "get_variant",
    "normalize",
    "resolve_active_model",
    "truncate",
]
