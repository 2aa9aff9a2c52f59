"""Runtime settings for the bridge, read from the environment and an optional ``.env`` file."""

import os
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .exceptions import ConfigurationError

DEFAULT_MODELS = {
    "anthropic": "claude-3-5-sonnet-20241022",
    "openai": "gpt-4o-mini",
}


class BridgeSettings(BaseModel):
    """
    Settings shared by the model service and the CLI.

    Attributes:
        provider: Which language model service to talk to.
        model: Model identifier; falls back to the provider default when unset.
        max_tokens: Upper bound of generated tokens per model call.
        anthropic_api_key: API key for the Anthropic provider.
        openai_api_key: API key for the OpenAI provider.
        openai_base_url: Optional base URL for OpenAI-compatible endpoints.
        log_level: Level name passed to ``setup_logging``.
    """

    provider: Literal["anthropic", "openai"] = "anthropic"
    model: Optional[str] = None
    max_tokens: int = Field(default=1000, gt=0)
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    log_level: str = "INFO"

    @property
    def model_id(self) -> str:
        return self.model or DEFAULT_MODELS[self.provider]

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "BridgeSettings":
        """Build settings from environment variables.

        Args:
            dotenv_path: Optional explicit ``.env`` file. Without it, ``load_dotenv``
                searches from the current directory upwards.

        Returns:
            The loaded settings.

        Raises:
            ConfigurationError: If a variable holds an invalid value.
        """
        load_dotenv(dotenv_path)

        provider = os.getenv("MCP_BRIDGE_PROVIDER", "anthropic").strip().lower()
        if provider not in DEFAULT_MODELS:
            raise ConfigurationError(f"Unknown model provider: {provider!r}")

        max_tokens_raw = os.getenv("MCP_BRIDGE_MAX_TOKENS", "1000")
        try:
            max_tokens = int(max_tokens_raw)
        except ValueError as e:
            raise ConfigurationError(f"MCP_BRIDGE_MAX_TOKENS must be an integer, got {max_tokens_raw!r}") from e
        if max_tokens <= 0:
            raise ConfigurationError("MCP_BRIDGE_MAX_TOKENS must be positive")

        return cls(
            provider=provider,  # type: ignore[arg-type]
            model=os.getenv("MCP_BRIDGE_MODEL") or None,
            max_tokens=max_tokens,
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
            log_level=os.getenv("MCP_BRIDGE_LOG_LEVEL", "INFO"),
        )

    def require_api_key(self) -> str:
        """Return the API key of the selected provider.

        Raises:
            ConfigurationError: If the key is not set.
        """
        if self.provider == "anthropic":
            key, var = self.anthropic_api_key, "ANTHROPIC_API_KEY"
        else:
            key, var = self.openai_api_key, "OPENAI_API_KEY"
        if not key:
            raise ConfigurationError(f"{var} is not set")
        return key
