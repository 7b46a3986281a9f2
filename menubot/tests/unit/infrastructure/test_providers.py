"""
Unit tests for provider factory and stub provider.
"""

import pytest

from menubot.domain.menu.validation import validate_analysis
from menubot.domain.shared.errors import ConfigurationError
from menubot.infrastructure.ai.openai_client import OpenAIClient
from menubot.infrastructure.config import MenuBotSettings
from menubot.infrastructure.providers import (
    StubMenuProvider,
    create_menu_provider,
    get_menu_provider,
    reset_providers,
)
from menubot.infrastructure.providers.stub_menu_provider import STUB_AUDIO, STUB_MENU


class TestCreateMenuProvider:
    """Test provider selection."""

    def test_stub_default(self) -> None:
        """Test stub is the default provider."""
        assert isinstance(create_menu_provider(MenuBotSettings()), StubMenuProvider)

    def test_openai_with_key(self) -> None:
        """Test openai provider is configured from settings."""
        settings = MenuBotSettings(
            menu_provider="openai",
            openai_api_key="sk-test",
            vision_models=("gpt-4o-mini", "gpt-4o"),
            tts_voice="nova",
        )

        provider = create_menu_provider(settings)

        assert isinstance(provider, OpenAIClient)
        assert provider.api_key == "sk-test"
        assert provider.model == "gpt-4o-mini"
        assert provider.tts_voice == "nova"

    def test_openai_without_key_raises(self) -> None:
        """Test openai provider requires a key."""
        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY not set"):
            create_menu_provider(MenuBotSettings(menu_provider="openai"))

    def test_unknown_provider_raises(self) -> None:
        """Test unknown provider name is rejected."""
        with pytest.raises(ConfigurationError, match="Unknown MENU_PROVIDER"):
            create_menu_provider(MenuBotSettings(menu_provider="gemini"))


class TestProviderSingleton:
    """Test lazy singleton."""

    def test_singleton_and_reset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test same instance until reset."""
        monkeypatch.setenv("MENU_PROVIDER", "stub")

        first = get_menu_provider()
        assert get_menu_provider() is first

        reset_providers()
        assert get_menu_provider() is not first


class TestStubMenuProvider:
    """Test stub provider behaviour."""

    async def test_analyze_menu_returns_copy(self, stub_provider: StubMenuProvider) -> None:
        """Test callers cannot mutate the demo menu."""
        raw = await stub_provider.analyze_menu([], "gpt-4o")
        raw["items"].clear()

        again = await stub_provider.analyze_menu([], "gpt-4o-mini")

        assert len(again["items"]) == len(STUB_MENU["items"])
        assert stub_provider.requested_models == ["gpt-4o", "gpt-4o-mini"]

    async def test_demo_menu_is_consistent(self, stub_provider: StubMenuProvider) -> None:
        """Test the demo menu needs no repairs."""
        raw = await stub_provider.analyze_menu([], "gpt-4o")

        analysis = validate_analysis(raw)

        assert [item.calories for item in analysis.items] == [
            item["calories"] for item in STUB_MENU["items"]
        ]
        assert analysis.health_rank == STUB_MENU["health_rank"]

    async def test_synthesize_speech(self, stub_provider: StubMenuProvider) -> None:
        """Test fixed audio payload."""
        async with stub_provider as provider:
            assert await provider.synthesize_speech("hello") == STUB_AUDIO
