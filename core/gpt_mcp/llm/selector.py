"""Startup-time model selection with fallback."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ListModelsFn = Callable[[], Awaitable[Iterable[str]]]


@dataclass(frozen=True)
class ActiveModelState:
    """Which model requests use when the caller does not name one.

    Built once during startup and read-only afterwards. ``fallback_used``
    implies ``active_id == fallback_id`` and that ``configured_id`` was set
    but not offered by the upstream API.
    """

    configured_id: str | None
    active_id: str
    fallback_id: str
    fallback_used: bool = False


async def resolve_active_model(
    configured_id: str | None,
    fallback_id: str,
    list_models: ListModelsFn,
) -> ActiveModelState:
    """Validate the configured model against the upstream model list.

    Args:
        configured_id: Model override from the environment, if any.
        fallback_id: Hardcoded model used when no override is usable.
        list_models: Async callable returning the available model ids.

    Returns:
        The resolved ActiveModelState.
    """
    if not configured_id:
        return ActiveModelState(configured_id=None, active_id=fallback_id, fallback_id=fallback_id)

    try:
        available = set(await list_models())
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.warning(
            'Could not validate model "%s". API error: %s. Using configured model anyway.',
            configured_id,
            exc,
        )
        return ActiveModelState(configured_id=configured_id, active_id=configured_id, fallback_id=fallback_id)

    if configured_id in available:
        return ActiveModelState(configured_id=configured_id, active_id=configured_id, fallback_id=fallback_id)

    logger.warning(
        'Model "%s" not found in available models. Falling back to: %s',
        configured_id,
        fallback_id,
    )
    return ActiveModelState(
        configured_id=configured_id,
        active_id=fallback_id,
        fallback_id=fallback_id,
        fallback_used=True,
    )
