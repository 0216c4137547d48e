"""
Completion-service access: provider interface, OpenAI implementation and the
FastAPI dependency that hands the orchestrators a provider factory; the
provider itself is only built once a request actually needs the completion
service.
"""
import logging
from typing import Callable, Optional

from interview_coach.core.errors import UpstreamFailureError
from interview_coach.llm.provider import LLMProvider, LLMResponse

logger = logging.getLogger(__name__)

_provider: Optional[LLMProvider] = None

ProviderFactory = Callable[[], LLMProvider]


def get_llm_provider() -> LLMProvider:
    """
    Lazily build the process-wide provider.
    
    Raises:
        UpstreamFailureError: if no API key is configured
    """
    global _provider
    if _provider is None:
        from interview_coach.llm.openai_provider import OpenAIProvider
        try:
            _provider = OpenAIProvider()
        except ValueError as e:
            logger.warning(f"Completion service not available: {e}")
            raise UpstreamFailureError("AI service is not configured") from e
    return _provider


def get_provider_factory() -> ProviderFactory:
    """Dependency returning get_llm_provider uncalled."""
    return get_llm_provider


__all__ = ["LLMProvider", "LLMResponse", "ProviderFactory", "get_llm_provider", "get_provider_factory"]
