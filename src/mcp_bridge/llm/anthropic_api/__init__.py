"""Expose the Anthropic Messages API model service."""

from .core import AnthropicModelService

__all__ = ["AnthropicModelService"]
