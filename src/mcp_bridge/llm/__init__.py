"""Language model service providers and the factory selecting one from settings."""

from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from .base import LanguageModelService
from .anthropic_api import AnthropicModelService
from .openai_api import OpenAIModelService
from ..config import BridgeSettings
from ..exceptions import ConfigurationError


def create_model_service(settings: BridgeSettings) -> LanguageModelService:
    """Build the model service selected by ``settings.provider``.

    Raises:
        ConfigurationError: If the provider is unknown or its API key is missing.
    """
    api_key = settings.require_api_key()
    if settings.provider == "anthropic":
        return AnthropicModelService(
            client=AsyncAnthropic(api_key=api_key),
            model=settings.model_id,
            max_tokens=settings.max_tokens,
        )
    if settings.provider == "openai":
        return OpenAIModelService(
            client=AsyncOpenAI(api_key=api_key, base_url=settings.openai_base_url),
            model=settings.model_id,
            max_tokens=settings.max_tokens,
        )
    raise ConfigurationError(f"Unknown model provider: {settings.provider!r}")


__all__ = [
    "LanguageModelService",
    "AnthropicModelService",
    "OpenAIModelService",
    "create_model_service",
]
