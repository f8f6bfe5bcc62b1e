import asyncio
import logging
from datetime import datetime, timezone
from typing import List

from ..schemas.relay import HealthReport

logger = logging.getLogger(__name__)

PROBE_PROMPT = "Hello"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


async def check_health(adapters: List) -> HealthReport:
    """Probe every adapter at once and wait for all of them to settle."""
    results = await asyncio.gather(
        *(a.complete(PROBE_PROMPT) for a in adapters),
        return_exceptions=True,
    )

    providers = {}
    for adapter, result in zip(adapters, results):
        if isinstance(result, BaseException):
            logger.error("Health probe for %s raised: %s", adapter.name, result)
            providers[adapter.name] = "unhealthy"
        elif result.success:
            providers[adapter.name] = "healthy"
        else:
            providers[adapter.name] = "unhealthy"

    return HealthReport(timestamp=utc_timestamp(), providers=providers)
