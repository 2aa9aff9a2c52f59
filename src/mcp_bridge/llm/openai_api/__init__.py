"""Expose the OpenAI chat completions model service."""

from .core import OpenAIModelService

__all__ = ["OpenAIModelService"]
