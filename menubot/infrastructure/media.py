"""Base64 data URLs for menu photos and narration audio."""

from __future__ import annotations

import base64

from menubot.domain.shared.errors import InvalidImageError

IMAGE_MIME = "image/jpeg"
AUDIO_MIME = "audio/mpeg"


def to_base64(data: bytes) -> str:
    """Standard base64 text for raw bytes ("" for empty input)."""
    return base64.b64encode(data).decode("ascii")


def encode_image_data_url(data: bytes, mime: str = IMAGE_MIME) -> str:
    """
    Menu photo as a data URL for the vision model.

    Raises:
        InvalidImageError: If no image bytes were captured

    Example:
        >>> encode_image_data_url(b"hi")
        'data:image/jpeg;base64,aGk='
    """
    if not data:
        raise InvalidImageError("No image data found. Capture the menu again.")
    return f"data:{mime};base64,{to_base64(data)}"


def encode_audio_data_uri(data: bytes, mime: str = AUDIO_MIME) -> str:
    """Narration audio as a playable data URI."""
    return f"data:{mime};base64,{to_base64(data)}"
