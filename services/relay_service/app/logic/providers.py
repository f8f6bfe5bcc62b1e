import logging
from typing import Callable, Dict, List, Optional, Tuple

from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from .. import config
from ..schemas.relay import ProviderResult

logger = logging.getLogger(__name__)

# Generation parameters shared by the OpenAI-style vendors
_COMPLETION_PARAMS = {
    "temperature": 0,
    "max_tokens": 3000,
    "top_p": 1,
    "frequency_penalty": 0.5,
    "presence_penalty": 0,
}


class ProviderAdapter:
    """Wraps one vendor chat model behind ``complete(prompt) -> ProviderResult``.

    The model is built by ``factory`` on the first call, inside the same error
    boundary as the request, so a missing credential is reported like any
    other provider failure instead of stopping the server.
    """

    def __init__(self, name: str, factory: Callable[[], BaseChatModel], model: str = ""):
        self.name = name
        self.model = model
        self._factory = factory
        self._llm = None

    def _get_llm(self):
        if self._llm is None:
            self._llm = self._factory()
        return self._llm

    async def complete(self, prompt: str) -> ProviderResult:
        try:
            msg = await self._get_llm().ainvoke(prompt)
            content = msg.content if hasattr(msg, "content") else str(msg)
            logger.info("%s returned %d characters", self.name, len(content))
            return ProviderResult(success=True, data=content, provider=self.name)
        except Exception as exc:
            logger.error("%s API Error: %s", self.name, exc)
            return ProviderResult(success=False, error=str(exc), provider=self.name)


def _openai() -> ChatOpenAI:
    return ChatOpenAI(
        model=config.OPENAI_MODEL,
        api_key=config.OPENAI_API_KEY,
        max_retries=0,
        **_COMPLETION_PARAMS,
    )


def _groq() -> ChatOpenAI:
    return ChatOpenAI(
        base_url=config.GROQ_BASE_URL,
        model=config.GROQ_MODEL,
        api_key=config.GROQ_API_KEY,
        max_retries=0,
        **_COMPLETION_PARAMS,
    )


def _gemini() -> ChatOpenAI:
    return ChatOpenAI(
        base_url=config.GEMINI_BASE_URL,
        model=config.GEMINI_MODEL,
        api_key=config.GEMINI_API_KEY,
        max_retries=0,
    )


# name -> (factory, model id)
PROVIDERS: Dict[str, Tuple[Callable[[], BaseChatModel], str]] = {
    "OpenAI": (_openai, config.OPENAI_MODEL),
    "Groq": (_groq, config.GROQ_MODEL),
    "Gemini": (_gemini, config.GEMINI_MODEL),
}


def build_adapters(names: Optional[List[str]] = None) -> List[ProviderAdapter]:
    """Build adapters in the given priority order.

    Names are matched case-insensitively against ``PROVIDERS``. Raises
    ``ValueError`` for an unknown or repeated name, or an empty list.
    """
    if names is None:
        names = config.RELAY_PROVIDERS
    if not names:
        raise ValueError("At least one provider must be configured")

    lookup = {key.lower(): key for key in PROVIDERS}
    adapters = []
    seen = set()
    for raw in names:
        key = lookup.get(raw.strip().lower())
        if key is None:
            raise ValueError(f"Unknown provider '{raw}'. Available: {list(PROVIDERS)}")
        if key in seen:
            raise ValueError(f"Provider '{key}' is configured more than once")
        seen.add(key)
        factory, model = PROVIDERS[key]
        adapters.append(ProviderAdapter(key, factory, model))
    return adapters
