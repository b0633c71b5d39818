"""OpenAI-compatible completion provider.

Talks to any chat-completions style endpoint (OpenAI, or a compatible
proxy set via OPENAI_BASE_URL) and hides transient failures behind a single
awaitable call.

Failure classification:
- 2xx: content returned, or an empty reply when there is none
- 429: retried after Retry-After (capped at 10s) or backoff; once retries
  run out the reply is flagged as rate limited
- 5xx and transport errors: retried with backoff, then ProviderUnavailableError
- any other status: InvalidProviderRequestError, no retry
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from portfolio_ai.config import settings
from portfolio_ai.entities import PromptPair, ProviderReply
from portfolio_ai.errors import (
    ConfigurationError,
    InvalidProviderRequestError,
    ProviderUnavailableError,
)

logger = logging.getLogger(__name__)

COMPLETIONS_PATH = "/chat/completions"
CONNECT_TIMEOUT = 10.0
REQUEST_TIMEOUT = 40.0
MAX_RETRY_AFTER = 10.0

BACKOFF_BASE_MS = 900
BACKOFF_MIN_MS = 300
BACKOFF_MAX_MS = 8000


def backoff_delay(attempt: int) -> float:
    """Delay in seconds before retrying after the 0-based ``attempt``.

    Example:
        ```python
        [backoff_delay(n) for n in range(3)]  # [0.9, 3.6, 8.0]
        ```
    """
    millis = min(BACKOFF_MAX_MS, BACKOFF_BASE_MS * (attempt + 1) ** 2)
    return max(BACKOFF_MIN_MS, millis) / 1000


def retry_after_delay(header: str | None, attempt: int) -> float:
    """Delay for a 429 response: Retry-After seconds capped at 10, else backoff."""
    value = (header or "").strip()
    if value:
        try:
            seconds = int(value)
        except ValueError:
            seconds = 0
        if seconds > 0:
            return min(float(seconds), MAX_RETRY_AFTER)
    return backoff_delay(attempt)


class OpenAICompletionProvider:
    """OpenAI-compatible implementation of CompletionProvider protocol.

    This class satisfies the CompletionProvider protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        provider = OpenAICompletionProvider.create()
        reply = await provider.complete(PromptPair(system="...", user="..."))
        if reply.rate_limited:
            ...
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model_name: str | None = None,
        max_retries: int | None = None,
        temperature: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Initialize the provider.

        Args:
            api_key: Bearer credential. Defaults to settings.
            base_url: API base URL. Defaults to settings.
            model_name: Model identifier. Defaults to settings.
            max_retries: Retries after the first attempt. Defaults to settings.
            temperature: Sampling temperature. Defaults to settings.
            transport: Optional httpx transport (used by tests).
            sleep: Coroutine used for backoff waits.
        """
        self._api_key = (api_key if api_key is not None else settings.openai_api_key or "").strip()
        self._base_url = (base_url or settings.openai_base_url).strip().rstrip("/")
        self._model_name = model_name or settings.openai_model
        retries = settings.openai_max_retries if max_retries is None else max_retries
        self._max_retries = max(0, retries)
        self._temperature = settings.openai_temperature if temperature is None else temperature
        self._transport = transport
        self._sleep = sleep
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        base_url: str | None = None,
        model_name: str | None = None,
        max_retries: int | None = None,
    ) -> "OpenAICompletionProvider":
        """Factory method to create OpenAICompletionProvider with defaults.

        Args:
            api_key: Bearer credential. If None, uses settings.
            base_url: API base URL. If None, uses settings.
            model_name: Model identifier. If None, uses settings.
            max_retries: Retry budget. If None, uses settings.

        Returns:
            Configured OpenAICompletionProvider
        """
        return cls(
            api_key=api_key,
            base_url=base_url,
            model_name=model_name,
            max_retries=max_retries,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(REQUEST_TIMEOUT, connect=CONNECT_TIMEOUT),
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
                transport=self._transport,
            )
        return self._client

    @property
    def model_name(self) -> str:
        """Get the model identifier."""
        return self._model_name

    @property
    def max_retries(self) -> int:
        """Get the retry budget."""
        return self._max_retries

    @property
    def endpoint(self) -> str:
        """Full URL of the completions endpoint."""
        return f"{self._base_url}{COMPLETIONS_PATH}"

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def ensure_configured(self) -> None:
        if not self._api_key:
            raise ConfigurationError("OPENAI_API_KEY is not configured on backend.")

    def build_payload(self, prompts: PromptPair) -> dict[str, Any]:
        return {
            "model": self._model_name,
            "temperature": self._temperature,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": prompts.system},
                {"role": "user", "content": prompts.user},
            ],
        }

    async def complete(self, prompts: PromptPair) -> ProviderReply:
        """Call the provider with retries.

        Args:
            prompts: System and user messages

        Returns:
            ProviderReply with the message content (None when empty),
            or flagged ``rate_limited`` when 429 retries ran out

        Raises:
            ConfigurationError: If no API key is configured
            ProviderUnavailableError: On persistent 5xx or transport failures
            InvalidProviderRequestError: On any other non-2xx status
        """
        self.ensure_configured()

        payload = self.build_payload(prompts)
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        attempts = self._max_retries + 1
        last_error = ""

        for attempt in range(attempts):
            can_retry = attempt < self._max_retries

            try:
                start_time = time.time()
                response = await asyncio.wait_for(
                    self.client.post(self.endpoint, json=payload, headers=headers),
                    timeout=REQUEST_TIMEOUT,
                )
                elapsed_ms = (time.time() - start_time) * 1000
                logger.debug(
                    "Provider responded %d in %.0fms (attempt %d/%d)",
                    response.status_code, elapsed_ms, attempt + 1, attempts,
                )
                if response.is_success:
                    content = self._extract_content(response)
                    return ProviderReply(content=content, attempts=attempt + 1)
            except (httpx.RequestError, asyncio.TimeoutError, ValueError) as e:
                # ValueError covers an undecodable 2xx envelope
                last_error = str(e) or type(e).__name__
                if not can_retry:
                    break
                delay = backoff_delay(attempt)
                logger.warning(
                    "Provider call failed (attempt %d/%d), retrying in %.1fs: %s",
                    attempt + 1, attempts, delay, last_error[:200],
                )
                await self._sleep(delay)
                continue

            status = response.status_code

            if status == 429:
                if not can_retry:
                    logger.warning("Provider rate limit persisted after %d attempts", attempts)
                    return ProviderReply(content=None, rate_limited=True, attempts=attempt + 1)
                delay = retry_after_delay(response.headers.get("retry-after"), attempt)
                logger.warning(
                    "Provider rate limited (attempt %d/%d), retrying in %.1fs",
                    attempt + 1, attempts, delay,
                )
                await self._sleep(delay)
                continue

            message = self._error_message(response)

            if status >= 500:
                if not can_retry:
                    logger.error("%s Giving up after %d attempts.", message, attempts)
                    raise ProviderUnavailableError(message)
                delay = backoff_delay(attempt)
                logger.warning(
                    "Provider returned %d (attempt %d/%d), retrying in %.1fs",
                    status, attempt + 1, attempts, delay,
                )
                await self._sleep(delay)
                continue

            logger.error(message)
            raise InvalidProviderRequestError(message, status_code=status)

        logger.error("Provider unreachable after %d attempts: %s", attempts, last_error[:200])
        raise ProviderUnavailableError(
            f"Failed to reach AI provider after {attempts} attempts: {last_error}"
        )

    @staticmethod
    def _extract_content(response: httpx.Response) -> str | None:
        """Pull ``choices[0].message.content`` out of the envelope.

        Raises:
            ValueError: If the body is not JSON
        """
        data = response.json()
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return None
        if not isinstance(content, str) or not content.strip():
            return None
        return content

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        message = f"AI provider request failed with status {response.status_code}."
        try:
            detail = response.json()["error"]["message"]
        except (ValueError, KeyError, IndexError, TypeError):
            return message
        if isinstance(detail, str) and detail.strip():
            return f"{message} {detail.strip()}"
        return message

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
