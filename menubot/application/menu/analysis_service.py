"""
Menu Analysis Service.

Photo in, validated recommendation out. Walks the configured vision
models in order until one returns a usable JSON payload.
"""

from typing import Any, Optional

import structlog

from menubot.domain.menu.dietary import summarize_menu
from menubot.domain.menu.explanation import compose_explanation
from menubot.domain.menu.models import Analysis, HungerLevel, MenuRecommendation
from menubot.domain.menu.ports import IMenuVisionProvider
from menubot.domain.menu.prompts import build_menu_messages
from menubot.domain.menu.validation import MenuValidator
from menubot.domain.shared.errors import ExternalServiceError, MenuAnalysisError
from menubot.infrastructure.config import MenuBotSettings
from menubot.infrastructure.media import IMAGE_MIME, encode_image_data_url

logger = structlog.get_logger(__name__)


class MenuAnalysisService:
    """Orchestrates menu extraction, validation and narration text.

    Flow:
    1. Encode photo as data URL
    2. Ask each vision model in turn for the raw analysis
    3. Validate and repair the first usable answer
    4. Derive dietary summary and explanation

    Example:
        >>> service = MenuAnalysisService(StubMenuProvider())
        >>> recommendation = await service.analyze(photo_bytes, HungerLevel.LIGHT)
        >>> print(recommendation.explanation)
    """

    def __init__(
        self,
        provider: IMenuVisionProvider,
        settings: Optional[MenuBotSettings] = None,
    ) -> None:
        """Initialize service.

        Args:
            provider: Vision provider (OpenAI or stub)
            settings: Runtime settings (defaults if None)
        """
        self.provider = provider
        self.settings = settings or MenuBotSettings()
        self.validator = MenuValidator(self.settings.thresholds)

    async def analyze(
        self,
        image: bytes,
        hunger_level: Any = HungerLevel.MODERATE,
        mime: str = IMAGE_MIME,
    ) -> MenuRecommendation:
        """Analyse a menu photo.

        Args:
            image: Photo bytes
            hunger_level: Diner's hunger level
            mime: Photo MIME type

        Returns:
            MenuRecommendation for the first model that answered

        Raises:
            InvalidImageError: If image is empty
            MenuAnalysisError: If every vision model failed
        """
        data_url = encode_image_data_url(image, mime)
        level = HungerLevel.coerce(hunger_level)
        messages = build_menu_messages(data_url, level)

        last_error: Optional[Exception] = None
        for model in self.settings.vision_models:
            logger.info("Trying vision model", model=model, hunger_level=level.value)
            try:
                raw = await self.provider.analyze_menu(messages, model)
            except ExternalServiceError as e:
                logger.warning("Vision model failed", model=model, error=str(e))
                last_error = e
                continue

            recommendation = self.analyze_raw(raw, level, model=model)
            logger.info(
                "Menu analysed",
                model=model,
                items=len(recommendation.analysis.items),
                combos=len(recommendation.analysis.combos),
            )
            return recommendation

        raise MenuAnalysisError(
            f"All vision models failed ({', '.join(self.settings.vision_models)})"
        ) from last_error

    def analyze_raw(
        self,
        raw: Any,
        hunger_level: Any = HungerLevel.MODERATE,
        model: str = "",
    ) -> MenuRecommendation:
        """Run validation and derivations on an already extracted payload.

        Never raises on malformed payloads.
        """
        analysis = self.validator.validate(raw)
        return self.recommend(analysis, hunger_level, model=model)

    def recommend(
        self,
        analysis: Analysis,
        hunger_level: Any = HungerLevel.MODERATE,
        model: str = "",
    ) -> MenuRecommendation:
        """Derive summary and explanation from a validated analysis."""
        level = HungerLevel.coerce(hunger_level)
        symbol = self.settings.currency_symbol
        return MenuRecommendation(
            analysis=analysis,
            summary=summarize_menu(
                analysis.items,
                level,
                thresholds=self.settings.thresholds,
                currency_symbol=symbol,
            ),
            explanation=compose_explanation(analysis, currency_symbol=symbol),
            hunger_level=level,
            model=model,
        )
