"""Port (interface) for menu vision and speech providers.

The domain defines the contract; infrastructure supplies OpenAI and
stub adapters.
"""

from typing import Any, Dict, List, Protocol


class IMenuVisionProvider(Protocol):
    """
    Interface for AI providers that read menus and speak summaries.

    Implementations can be:
    - OpenAI chat completions + TTS (production)
    - Stub provider (offline demos, tests)
    """

    async def analyze_menu(self, messages: List[Dict[str, Any]], model: str) -> Dict[str, Any]:
        """
        Extract a raw menu analysis from a photo.

        Args:
            messages: Chat messages with the menu image attached
            model: Vision model to use for this attempt

        Returns:
            Parsed JSON object (untrusted, validate before use)

        Raises:
            Exception: Implementation-specific errors (network, API, parsing)
        """
        ...

    async def synthesize_speech(self, text: str) -> bytes:
        """
        Convert narration text into audio.

        Args:
            text: Text to speak

        Returns:
            Encoded audio bytes (mp3)
        """
        ...
