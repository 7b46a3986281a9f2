"""Configuration for the MenuBot runtime.

Settings are read from environment variables (``.env`` is loaded first).
The domain never reads the environment: services receive these values.

Example .env:
    MENU_PROVIDER=openai
    OPENAI_API_KEY=sk-...
    MENUBOT_VISION_MODELS=gpt-4o,gpt-4o-mini
    MENUBOT_CALORIE_TOLERANCE_KCAL=100
"""

from __future__ import annotations

import os
from typing import Dict, Mapping, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from menubot.domain.menu.formatting import DEFAULT_CURRENCY_SYMBOL
from menubot.domain.menu.thresholds import MenuThresholds
from menubot.domain.shared.errors import ConfigurationError

DEFAULT_VISION_MODELS: Tuple[str, ...] = ("gpt-4o", "gpt-4-vision-preview", "gpt-4o-mini")
DEFAULT_TTS_MODEL = "gpt-4o-mini-tts"
DEFAULT_TTS_VOICE = "alloy"

# env var -> MenuThresholds field
THRESHOLD_ENV_VARS = {
    "MENUBOT_CALORIE_TOLERANCE_KCAL": "calorie_tolerance_kcal",
    "MENUBOT_BUDGET_FRIENDLY_MAX": "budget_friendly_max",
    "MENUBOT_MID_RANGE_MAX": "mid_range_max",
}


class MenuBotSettings(BaseModel):
    """
    Resolved runtime settings.

    Attributes:
        menu_provider: "stub" (default) or "openai"
        openai_api_key: API key, required for the openai provider
        vision_models: Models tried in order until one answers
        tts_model: Speech synthesis model
        tts_voice: Speech synthesis voice
        currency_symbol: Symbol used when narrating prices
        thresholds: Heuristic constants for validation and summaries
    """

    model_config = ConfigDict(frozen=True)

    menu_provider: str = "stub"
    openai_api_key: Optional[str] = None
    vision_models: Tuple[str, ...] = Field(DEFAULT_VISION_MODELS, min_length=1)
    tts_model: str = DEFAULT_TTS_MODEL
    tts_voice: str = DEFAULT_TTS_VOICE
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    thresholds: MenuThresholds = Field(default_factory=MenuThresholds)


def _float_env(environ: Mapping[str, str], name: str) -> Optional[float]:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e


def load_settings(environ: Optional[Mapping[str, str]] = None) -> MenuBotSettings:
    """
    Build settings from environment variables.

    Args:
        environ: Variables to read (defaults to ``os.environ`` after
            loading ``.env``)

    Returns:
        MenuBotSettings

    Raises:
        ConfigurationError: If a numeric variable is not a valid threshold
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    models = tuple(
        model.strip()
        for model in environ.get("MENUBOT_VISION_MODELS", "").split(",")
        if model.strip()
    )

    threshold_values: Dict[str, float] = {}
    for env_name, field_name in THRESHOLD_ENV_VARS.items():
        value = _float_env(environ, env_name)
        if value is not None:
            threshold_values[field_name] = value

    try:
        thresholds = MenuThresholds(**threshold_values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid menu thresholds: {e}") from e

    api_key = environ.get("OPENAI_API_KEY", "").strip()

    return MenuBotSettings(
        menu_provider=environ.get("MENU_PROVIDER", "stub").strip().lower() or "stub",
        openai_api_key=api_key or None,
        vision_models=models or DEFAULT_VISION_MODELS,
        tts_model=environ.get("MENUBOT_TTS_MODEL", DEFAULT_TTS_MODEL),
        tts_voice=environ.get("MENUBOT_TTS_VOICE", DEFAULT_TTS_VOICE),
        currency_symbol=environ.get("MENUBOT_CURRENCY_SYMBOL", DEFAULT_CURRENCY_SYMBOL),
        thresholds=thresholds,
    )
