"""Menu analysis use cases."""

from menubot.application.menu.analysis_service import MenuAnalysisService
from menubot.application.menu.narration_service import Narration, NarrationService

__all__ = [
    "MenuAnalysisService",
    "Narration",
    "NarrationService",
]
