"""Provider factory for menu AI services.

Environment-based provider selection with stub as the safe default.
Strategy:
- .env (runtime): MENU_PROVIDER=openai, OPENAI_API_KEY=sk-...
- tests and offline demos: MENU_PROVIDER=stub
- Default: stub

Usage:
    from menubot.infrastructure.providers.factory import get_menu_provider

    provider = get_menu_provider()
"""

from typing import Optional

from menubot.domain.menu.ports import IMenuVisionProvider
from menubot.domain.shared.errors import ConfigurationError
from menubot.infrastructure.ai.openai_client import OpenAIClient
from menubot.infrastructure.config import MenuBotSettings, load_settings
from menubot.infrastructure.providers.stub_menu_provider import StubMenuProvider


def create_menu_provider(settings: Optional[MenuBotSettings] = None) -> IMenuVisionProvider:
    """Create menu provider based on MENU_PROVIDER.

    Values:
        - "openai": OpenAI chat + TTS (requires OPENAI_API_KEY)
        - "stub": Stub provider (default)

    Args:
        settings: Resolved settings (loaded from environment if None)

    Returns:
        IMenuVisionProvider instance

    Raises:
        ConfigurationError: Unknown provider, or openai without API key
    """
    settings = settings or load_settings()
    mode = settings.menu_provider

    if mode == "openai":
        if not settings.openai_api_key:
            raise ConfigurationError(
                "MENU_PROVIDER=openai but OPENAI_API_KEY not set. "
                "Set OPENAI_API_KEY in .env or use MENU_PROVIDER=stub"
            )
        return OpenAIClient(
            api_key=settings.openai_api_key,
            model=settings.vision_models[0],
            tts_model=settings.tts_model,
            tts_voice=settings.tts_voice,
        )

    if mode == "stub":
        return StubMenuProvider()

    raise ConfigurationError(f"Unknown MENU_PROVIDER: {mode!r} (expected openai or stub)")


# Singleton instance (lazy initialization)
_menu_provider: Optional[IMenuVisionProvider] = None


def get_menu_provider() -> IMenuVisionProvider:
    """Get singleton menu provider instance."""
    global _menu_provider
    if _menu_provider is None:
        _menu_provider = create_menu_provider()
    return _menu_provider


def reset_providers() -> None:
    """Reset singleton provider so the next call re-reads settings."""
    global _menu_provider
    _menu_provider = None
