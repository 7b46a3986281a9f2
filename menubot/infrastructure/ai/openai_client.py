"""
OpenAI API client for menu analysis and narration.

Async client with JSON output, rate limiting, retries on transient
connection failures, and speech synthesis.
"""

from __future__ import annotations

import asyncio
import json
import os
import time
from typing import Any, Dict, List, Optional, TYPE_CHECKING

import openai
import structlog
from openai import AsyncOpenAI
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from menubot.domain.shared.errors import (
    ExternalServiceError,
    InvalidResponseError,
    RateLimitError,
    ServiceUnavailableError,
)

if TYPE_CHECKING:
    from openai.types.chat import ChatCompletion

logger = structlog.get_logger(__name__)


class OpenAIClient:
    """
    Async OpenAI client implementing IMenuVisionProvider.

    Features:
    - JSON object output mode for menu extraction
    - Per-call model override (the analysis service walks a fallback list)
    - Retry with exponential backoff on connection errors and timeouts
    - Rate limiting (60 RPM default)
    - Speech synthesis for narration
    - Context manager for resource cleanup

    Example:
        >>> async with OpenAIClient() as client:
        ...     raw = await client.analyze_menu(messages, model="gpt-4o")
        ...     audio = await client.synthesize_speech("Top pairing: ...")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o",
        tts_model: str = "gpt-4o-mini-tts",
        tts_voice: str = "alloy",
        max_retries: int = 3,
        retry_backoff_s: float = 1.0,
        timeout: int = 60,
        rpm_limit: int = 60,
        client: Optional[AsyncOpenAI] = None,
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (reads OPENAI_API_KEY if None)
            model: Default vision model
            tts_model: Speech synthesis model
            tts_voice: Speech synthesis voice
            max_retries: Attempts on connection failures
            retry_backoff_s: Backoff multiplier between attempts
            timeout: Request timeout in seconds
            rpm_limit: Requests per minute limit
            client: Optional pre-configured AsyncOpenAI client (for testing)

        Raises:
            ValueError: If API key not found and client not provided
        """
        if client is not None:
            self.api_key: str = api_key or "test-key"
        else:
            resolved_key = api_key or os.getenv("OPENAI_API_KEY")
            if not resolved_key:
                raise ValueError(
                    "OPENAI_API_KEY not found in environment. "
                    "Set it in .env file or pass as parameter."
                )
            self.api_key = resolved_key
            # Retries are handled here, not inside the SDK
            client = AsyncOpenAI(api_key=self.api_key, timeout=timeout, max_retries=0)
        self._client: AsyncOpenAI = client

        self.model = model
        self.tts_model = tts_model
        self.tts_voice = tts_voice
        self.max_retries = max_retries
        self.retry_backoff_s = retry_backoff_s
        self.timeout = timeout
        self.rpm_limit = rpm_limit

        # Rate limiting state
        self._request_times: List[float] = []
        self._lock = asyncio.Lock()

    async def __aenter__(self) -> OpenAIClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self._client.close()

    async def _rate_limit(self) -> None:
        """
        Enforce rate limiting.

        Tracks request timestamps over a sliding 60s window and sleeps
        when the window is full.
        """
        async with self._lock:
            now = time.time()

            cutoff = now - 60.0
            self._request_times = [t for t in self._request_times if t > cutoff]

            if len(self._request_times) >= self.rpm_limit:
                oldest = self._request_times[0]
                wait_time = 60.0 - (now - oldest)
                if wait_time > 0:
                    await asyncio.sleep(wait_time)
                    now = time.time()
                    cutoff = now - 60.0
                    self._request_times = [t for t in self._request_times if t > cutoff]

            self._request_times.append(now)

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(max(self.max_retries, 1)),
            wait=wait_exponential(multiplier=self.retry_backoff_s, max=10),
            retry=retry_if_exception_type(openai.APIConnectionError),
            reraise=True,
        )

    @staticmethod
    def _translate_error(error: openai.OpenAIError) -> ExternalServiceError:
        """Map SDK errors onto domain error types."""
        if isinstance(error, openai.RateLimitError):
            return RateLimitError(f"OpenAI rate limit: {error}")
        if isinstance(error, (openai.InternalServerError, openai.APIConnectionError)):
            return ServiceUnavailableError(f"OpenAI unavailable: {error}")
        return ExternalServiceError(f"OpenAI API failed: {error}")

    async def complete(
        self,
        messages: List[Dict[str, Any]],
        model: Optional[str] = None,
        response_format: Optional[Dict[str, str]] = None,
        temperature: float = 0.3,
        max_tokens: int = 4000,
    ) -> Dict[str, Any]:
        """
        Complete chat and return content with usage stats.

        Args:
            messages: Chat messages (system, user with image)
            model: Model override for this call
            response_format: {"type": "json_object"} for JSON mode
            temperature: Sampling temperature
            max_tokens: Max tokens in response

        Returns:
            Dict with content, finish_reason, model and usage

        Raises:
            RateLimitError: On HTTP 429
            ServiceUnavailableError: On 5xx or persistent connection failure
            ExternalServiceError: On any other API failure
        """
        params: Dict[str, Any] = {
            "model": model or self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if response_format:
            params["response_format"] = response_format

        try:
            async for attempt in self._retrying():
                with attempt:
                    await self._rate_limit()
                    completion: ChatCompletion = await self._client.chat.completions.create(
                        **params
                    )
        except openai.OpenAIError as e:
            raise self._translate_error(e) from e

        choice = completion.choices[0]
        return {
            "content": choice.message.content or "",
            "finish_reason": choice.finish_reason,
            "model": params["model"],
            "usage": {
                "prompt_tokens": (completion.usage.prompt_tokens if completion.usage else 0),
                "completion_tokens": (
                    completion.usage.completion_tokens if completion.usage else 0
                ),
                "total_tokens": (completion.usage.total_tokens if completion.usage else 0),
            },
        }

    async def analyze_menu(
        self, messages: List[Dict[str, Any]], model: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Extract a raw menu analysis from a photo.

        Args:
            messages: Menu messages (system + user with image)
            model: Vision model for this attempt

        Returns:
            Parsed JSON object (untrusted)

        Raises:
            InvalidResponseError: If the response is not a JSON object
            ExternalServiceError: On API failure
        """
        response = await self.complete(
            messages=messages,
            model=model,
            response_format={"type": "json_object"},
        )

        content = response["content"] or "{}"
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise InvalidResponseError(f"Invalid JSON response: {content[:200]}") from e

        if not isinstance(data, dict):
            raise InvalidResponseError(f"Expected JSON object, got {type(data).__name__}")

        logger.debug(
            "Menu extracted",
            model=response["model"],
            total_tokens=response["usage"]["total_tokens"],
        )
        return data

    async def synthesize_speech(self, text: str) -> bytes:
        """
        Convert narration text to mp3 audio.

        Args:
            text: Text to speak

        Returns:
            mp3 bytes

        Raises:
            ExternalServiceError: On API failure
        """
        try:
            async for attempt in self._retrying():
                with attempt:
                    await self._rate_limit()
                    response = await self._client.audio.speech.create(
                        model=self.tts_model,
                        voice=self.tts_voice,
                        input=text,
                        response_format="mp3",
                    )
        except openai.OpenAIError as e:
            raise self._translate_error(e) from e

        return response.content

    def get_stats(self) -> Dict[str, Any]:
        """
        Get client statistics.

        Returns:
            Dict with model, rpm_limit and requests_last_minute
        """
        now = time.time()
        cutoff = now - 60.0
        recent = [t for t in self._request_times if t > cutoff]

        return {
            "model": self.model,
            "rpm_limit": self.rpm_limit,
            "requests_last_minute": len(recent),
        }
