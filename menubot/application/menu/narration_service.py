"""
Narration Service.

Turns the explanation of a recommendation into playable audio.
"""

from typing import Optional, Union

import structlog
from pydantic import BaseModel, ConfigDict

from menubot.domain.menu.explanation import compose_explanation
from menubot.domain.menu.models import Analysis, MenuRecommendation
from menubot.domain.menu.ports import IMenuVisionProvider
from menubot.domain.shared.errors import ExternalServiceError, NarrationError
from menubot.infrastructure.media import encode_audio_data_uri

logger = structlog.get_logger(__name__)


class Narration(BaseModel):
    """Spoken explanation.

    Attributes:
        text: Narrated text
        audio: mp3 bytes
        data_uri: ``data:audio/mpeg;base64,...`` for direct playback
    """

    model_config = ConfigDict(frozen=True)

    text: str
    audio: bytes
    data_uri: str


class NarrationService:
    """Speaks recommendations through the provider's TTS."""

    def __init__(self, provider: IMenuVisionProvider) -> None:
        self.provider = provider

    async def narrate(
        self, source: Union[MenuRecommendation, Analysis, str, None]
    ) -> Optional[Narration]:
        """Synthesize speech for a recommendation, analysis or raw text.

        Args:
            source: What to speak

        Returns:
            Narration, or None when there is nothing to say

        Raises:
            NarrationError: If speech synthesis failed
        """
        if isinstance(source, MenuRecommendation):
            text = source.explanation
        elif isinstance(source, Analysis):
            text = compose_explanation(source)
        else:
            text = source or ""

        if not text.strip():
            logger.info("Nothing to narrate")
            return None

        try:
            audio = await self.provider.synthesize_speech(text)
        except ExternalServiceError as e:
            logger.warning("Speech synthesis failed", error=str(e))
            raise NarrationError(f"TTS failed: {e}") from e

        logger.info("Narration ready", characters=len(text), audio_bytes=len(audio))
        return Narration(text=text, audio=audio, data_uri=encode_audio_data_uri(audio))
