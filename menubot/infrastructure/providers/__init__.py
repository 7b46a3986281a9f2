"""Menu provider selection."""

from menubot.infrastructure.providers.factory import (
    create_menu_provider,
    get_menu_provider,
    reset_providers,
)
from menubot.infrastructure.providers.stub_menu_provider import StubMenuProvider

__all__ = [
    "StubMenuProvider",
    "create_menu_provider",
    "get_menu_provider",
    "reset_providers",
]
