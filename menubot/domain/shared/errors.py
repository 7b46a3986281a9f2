"""
Domain exceptions.

Typed exceptions for the boundary of the menu pipeline.
The pure menu core never raises: it repairs. These types are raised
only by application services and infrastructure adapters.
"""

from __future__ import annotations


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class DomainError(Exception):
    """
    Base exception for all MenuBot errors.

    Allows catching all domain errors with single except clause.
    """

    pass


# ═══════════════════════════════════════════════════════════
# MENU DOMAIN EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class MenuDomainError(DomainError):
    """Base exception for menu domain."""

    pass


class InvalidImageError(MenuDomainError):
    """
    Menu image payload unusable.

    Raised when:
    - Image bytes are empty
    - Image was captured without base64 data

    Example:
        >>> raise InvalidImageError("No image data found")
    """

    pass


class MenuAnalysisError(MenuDomainError):
    """
    Menu analysis failed for every vision model.

    The last provider failure is chained as ``__cause__``.

    Example:
        >>> raise MenuAnalysisError("All vision models failed")
    """

    pass


class NarrationError(MenuDomainError):
    """
    Speech synthesis of the explanation failed.

    Example:
        >>> raise NarrationError("TTS error 500")
    """

    pass


# ═══════════════════════════════════════════════════════════
# CONFIGURATION EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ConfigurationError(DomainError):
    """
    Runtime configuration invalid.

    Raised when:
    - MENU_PROVIDER=openai without OPENAI_API_KEY
    - Unknown provider name

    Example:
        >>> raise ConfigurationError("OPENAI_API_KEY not set")
    """

    pass


# ═══════════════════════════════════════════════════════════
# EXTERNAL SERVICE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ExternalServiceError(DomainError):
    """
    External service call failed.

    Base class for all AI provider errors.

    Example:
        >>> raise ExternalServiceError("OpenAI API failed: timeout")
    """

    pass


class InvalidResponseError(ExternalServiceError):
    """
    Provider answered with something that is not a JSON object.

    Example:
        >>> raise InvalidResponseError("Invalid JSON response: 'Sorry...'")
    """

    pass


class RateLimitError(ExternalServiceError):
    """
    API rate limit exceeded.

    Example:
        >>> raise RateLimitError("OpenAI rate limit: 60 requests/minute")
    """

    pass


class ServiceUnavailableError(ExternalServiceError):
    """
    External service unavailable.

    Example:
        >>> raise ServiceUnavailableError("OpenAI service unavailable")
    """

    pass
