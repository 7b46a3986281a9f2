"""AI provider adapters."""

from menubot.infrastructure.ai.openai_client import OpenAIClient

__all__ = ["OpenAIClient"]
