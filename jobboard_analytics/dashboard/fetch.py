"""Fan-out/join helper for the independent fetches that feed a dashboard."""

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any

logger = logging.getLogger(__name__)


async def gather_inputs(**fetches: Awaitable[Any]) -> dict[str, Any]:
    """Await every fetch concurrently and return results keyed by name.

    The fetches have no ordering dependency on each other. The first failure
    propagates to the caller; retries and timeouts belong to the fetchers.

    Usage::

        data = await gather_inputs(users=repo.users(), jobs=repo.jobs())
        dashboard = compose_admin(AdminInputs(**data), today)
    """
    names = list(fetches)
    results = await asyncio.gather(*fetches.values())
    logger.debug("gather_inputs: resolved %d fetches", len(names))
    return dict(zip(names, results))
