import logging
from typing import List, Optional

from ..schemas.relay import AggregateOutcome

logger = logging.getLogger(__name__)

NO_PROVIDER = "None"


class FailoverOrchestrator:
    """Tries adapters one after another, in list order, until one succeeds.

    Only the most recent error is kept when everything fails.
    """

    def __init__(self, adapters: List):
        if not adapters:
            raise ValueError("FailoverOrchestrator needs at least one adapter")
        names = [a.name for a in adapters]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate provider names: {names}")
        self.adapters = list(adapters)

    @property
    def provider_names(self) -> List[str]:
        return [a.name for a in self.adapters]

    async def run(self, prompt: str) -> AggregateOutcome:
        last_error: Optional[str] = None
        for adapter in self.adapters:
            logger.info("Trying %s...", adapter.name)
            result = await adapter.complete(prompt)
            if result.success:
                logger.info("Success with %s", result.provider)
                return AggregateOutcome(success=True, data=result.data, provider=result.provider)
            logger.warning("%s failed: %s", adapter.name, result.error)
            last_error = result.error

        return AggregateOutcome(
            success=False,
            error=f"All API providers failed. Last error: {last_error}",
            provider=NO_PROVIDER,
        )
