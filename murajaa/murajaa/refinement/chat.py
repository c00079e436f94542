"""
Chat-completions semantic analyzer.

Sends the transcript and the expected text to an OpenAI-compatible
chat-completions endpoint and asks for a JSON verdict (score, errors,
short analysis). Any failure is returned as a tagged outcome so the caller
can keep the raw alignment result.
"""

import json
import math
import re
import threading
import time
from typing import Any, Callable, Optional

import httpx
from pydantic import ValidationError

from murajaa._logging import log_error, log_refinement_usage, log_warning
from murajaa.config import MurajaaSettings, get_settings
from murajaa.exceptions import RefinementError
from murajaa.models import (
    RefinedError,
    RefinementMalformed,
    RefinementOk,
    RefinementOutcome,
    RefinementUnavailable,
    RefinementUsage,
)
from murajaa.refinement.base import BaseAnalyzer, describe_strictness


# USD per 1M tokens: (input, output)
MODEL_PRICING: dict[str, tuple[float, float]] = {
    "gpt-4o-mini": (0.15, 0.60),
}

CODE_FENCE_PATTERN = re.compile(r"```(?:json)?\s*")

SYSTEM_PROMPT = """You are an expert in Quran recitation. Compare a speech-to-text transcript with the expected Quran text.

RULES:
1. Uthmani script and modern Arabic spelling of the same word are the SAME word:
   - الرحمان = الرحمن
   - العالمين = العلمين
   - الصراط = السراط
2. A definite article dropped in connected speech is NOT an error (the engine often misses hamzat al-wasl).
3. Minor phonetic differences that keep the meaning are not critical at the lenient level.
4. Strictness level: {strictness}

Reply with valid JSON only, no markdown:
{{
  "score": <number 0-100>,
  "errors": [
    {{"word": "<word>", "issue": "<short description>", "type": "missing|wrong|extra"}}
  ],
  "analysis": "<short analysis, 1-2 sentences>"
}}"""


def estimate_cost(model: str, prompt_tokens: int, completion_tokens: int) -> float:
    """Estimated USD cost of one request (0 for models without known pricing)."""
    input_price, output_price = MODEL_PRICING.get(model, (0.0, 0.0))
    return (prompt_tokens / 1_000_000) * input_price + (completion_tokens / 1_000_000) * output_price


def parse_analysis(
    content: str,
    usage: Optional[RefinementUsage] = None,
) -> RefinementOk | RefinementMalformed:
    """
    Parse the analyzer's reply.

    Markdown code fences are stripped. The reply must be a JSON object with a
    numeric ``score`` and an ``errors`` array whose items carry a ``word``
    and a ``type`` of missing, wrong or extra.

    Args:
        content: Raw message content
        usage: Token usage to attach to a successful result

    Returns:
        RefinementOk, or RefinementMalformed describing what was wrong
    """
    cleaned = CODE_FENCE_PATTERN.sub("", content).replace("```", "").strip()

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        return RefinementMalformed(reason=f"invalid JSON: {e.msg}", raw=content)

    if not isinstance(data, dict):
        return RefinementMalformed(reason="expected a JSON object", raw=content)

    score = data.get("score")
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not math.isfinite(score):
        return RefinementMalformed(reason="score is not numeric", raw=content)

    raw_errors = data.get("errors")
    if not isinstance(raw_errors, list):
        return RefinementMalformed(reason="errors is not an array", raw=content)

    try:
        errors = [RefinedError.model_validate(item) for item in raw_errors]
    except ValidationError as e:
        return RefinementMalformed(
            reason=f"invalid error entry: {e.error_count()} problem(s)",
            raw=content,
        )

    analysis = data.get("analysis")
    return RefinementOk(
        score=min(100, max(0, math.floor(score + 0.5))),
        errors=errors,
        analysis=analysis if isinstance(analysis, str) else None,
        usage=usage,
    )


class AnalyzerConfig:
    """
    Connection settings for the chat-completions analyzer.

    The API key comes either from a fixed value or from ``credential_provider``
    (for example a lookup in a settings table). Provided keys are cached for
    ``credential_ttl`` seconds, measured with ``clock``. Build one instance per
    process and pass it to every analyzer.

    Example:
        config = AnalyzerConfig(
            credential_provider=lambda: settings_repo.get("OPENAI_API_KEY"),
            credential_ttl=300,
        )
        analyzer = ChatCompletionAnalyzer(config)
    """

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 30.0,
        api_key: Optional[str] = None,
        credential_provider: Optional[Callable[[], Optional[str]]] = None,
        credential_ttl: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self.credential_ttl = credential_ttl
        self._api_key = api_key
        self._credential_provider = credential_provider
        self._clock = clock

        self._lock = threading.Lock()
        self._cached_key: Optional[str] = None
        self._expires_at = 0.0

    @classmethod
    def from_settings(
        cls,
        settings: Optional[MurajaaSettings] = None,
        credential_provider: Optional[Callable[[], Optional[str]]] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> "AnalyzerConfig":
        """Build a config from library settings."""
        settings = settings or get_settings()
        api_key = settings.openai_api_key.get_secret_value() if settings.openai_api_key else None
        return cls(
            model=settings.openai_model,
            base_url=settings.openai_base_url,
            timeout=settings.refinement_timeout,
            api_key=api_key,
            credential_provider=credential_provider,
            credential_ttl=settings.credential_ttl,
            clock=clock,
        )

    @property
    def endpoint(self) -> str:
        """Chat-completions URL."""
        return f"{self.base_url.rstrip('/')}/chat/completions"

    def get_api_key(self) -> Optional[str]:
        """
        Current API key.

        The provider is consulted at most once per TTL window; an empty
        answer is not cached so a newly configured key is picked up on the
        next call.
        """
        if self._credential_provider is None:
            return self._api_key

        with self._lock:
            now = self._clock()
            if self._cached_key and now < self._expires_at:
                return self._cached_key

            key = self._credential_provider() or self._api_key
            if key:
                self._cached_key = key
                self._expires_at = now + self.credential_ttl
            return key

    def invalidate(self) -> None:
        """Drop the cached key (e.g. after the provider's value changed)."""
        with self._lock:
            self._cached_key = None
            self._expires_at = 0.0


class ChatCompletionAnalyzer(BaseAnalyzer):
    """
    Semantic analyzer backed by an OpenAI-compatible chat-completions API.

    Example:
        analyzer = ChatCompletionAnalyzer(AnalyzerConfig(api_key="sk-..."))

        with analyzer:
            outcome = analyzer.analyze(transcript, expected_text, strictness=2)

    Or using environment variables:
        export MURAJAA_OPENAI_API_KEY="sk-..."

        analyzer = ChatCompletionAnalyzer()
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the analyzer.

        Args:
            config: Connection settings (built from library settings when omitted)
            transport: httpx transport for the sync client (tests, proxies)
            async_transport: httpx transport for the async client
        """
        self.config = config or AnalyzerConfig.from_settings()
        self._transport = transport
        self._async_transport = async_transport
        self._client: Optional[httpx.Client] = None

    def _timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.config.timeout, connect=min(10.0, self.config.timeout))

    def open(self) -> None:
        """Create the HTTP client (no-op when already open)."""
        if self._client is not None:
            return
        self._client = httpx.Client(timeout=self._timeout(), transport=self._transport)

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def build_payload(
        self,
        transcript: str,
        expected_text: str,
        strictness: int = 1,
        context: Optional[str] = None,
    ) -> dict[str, Any]:
        """Request body for one analysis."""
        user_prompt = f"Expected text (Uthmani):\n{expected_text}\n\nTranscript:\n{transcript}\n"
        if context:
            user_prompt += f"\nContext: {context}"

        return {
            "model": self.config.model,
            "messages": [
                {
                    "role": "system",
                    "content": SYSTEM_PROMPT.format(strictness=describe_strictness(strictness)),
                },
                {"role": "user", "content": user_prompt},
            ],
            "temperature": 0.1,
            "max_tokens": 500,
        }

    def analyze(
        self,
        transcript: str,
        expected_text: str,
        strictness: int = 1,
        context: Optional[str] = None,
    ) -> RefinementOutcome:
        api_key = self.config.get_api_key()
        if not api_key:
            return RefinementUnavailable(reason="API key not configured")

        if self._client is None:
            self.open()

        payload = self.build_payload(transcript, expected_text, strictness, context)
        try:
            response = self._client.post(
                self.config.endpoint,
                json=payload,
                headers={"Authorization": f"Bearer {api_key}"},
            )
        except httpx.TimeoutException as e:
            log_error("Refinement request timed out", timeout=self.config.timeout)
            return RefinementUnavailable(reason=f"timeout: {e}")
        except httpx.HTTPError as e:
            log_error("Refinement request failed", error=type(e).__name__)
            return RefinementUnavailable(reason=f"request failed: {e}")

        return self._interpret(response)

    async def analyze_async(
        self,
        transcript: str,
        expected_text: str,
        strictness: int = 1,
        context: Optional[str] = None,
    ) -> RefinementOutcome:
        api_key = self.config.get_api_key()
        if not api_key:
            return RefinementUnavailable(reason="API key not configured")

        payload = self.build_payload(transcript, expected_text, strictness, context)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout(),
                transport=self._async_transport,
            ) as client:
                response = await client.post(
                    self.config.endpoint,
                    json=payload,
                    headers={"Authorization": f"Bearer {api_key}"},
                )
        except httpx.TimeoutException as e:
            log_error("Refinement request timed out", timeout=self.config.timeout)
            return RefinementUnavailable(reason=f"timeout: {e}")
        except httpx.HTTPError as e:
            log_error("Refinement request failed", error=type(e).__name__)
            return RefinementUnavailable(reason=f"request failed: {e}")

        return self._interpret(response)

    def _interpret(self, response: httpx.Response) -> RefinementOutcome:
        try:
            content, usage = self._extract_content(response)
        except RefinementError as e:
            log_error("Refinement response rejected", **e.context)
            if e.status_code is not None:
                return RefinementUnavailable(reason=e.message)
            return RefinementMalformed(reason=e.message, raw=response.text)

        return parse_analysis(content, usage)

    def _extract_content(self, response: httpx.Response) -> tuple[str, RefinementUsage]:
        """
        Pull the message content and token usage out of a response.

        Raises:
            RefinementError: With ``status_code`` set for non-200 responses,
                without it for an unusable response body
        """
        if response.status_code != 200:
            raise RefinementError(
                f"Analyzer API error: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
            content = body["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError):
            raise RefinementError("Unexpected response envelope") from None

        if not isinstance(content, str) or not content.strip():
            raise RefinementError("Empty response content")

        usage = self._parse_usage(body.get("usage"))
        log_refinement_usage(usage.model, usage.prompt_tokens, usage.completion_tokens, usage.cost_usd)

        return content, usage

    def _parse_usage(self, raw_usage: Any) -> RefinementUsage:
        """Token usage from a response body; missing or unusable usage counts as zero."""
        if raw_usage is None:
            return RefinementUsage(model=self.config.model)

        try:
            if not isinstance(raw_usage, dict):
                raise TypeError("usage is not an object")
            usage = RefinementUsage(
                model=self.config.model,
                prompt_tokens=raw_usage.get("prompt_tokens") or 0,
                completion_tokens=raw_usage.get("completion_tokens") or 0,
            )
        except (TypeError, ValidationError):
            log_warning("Ignoring invalid token usage", usage=repr(raw_usage))
            return RefinementUsage(model=self.config.model)

        usage.cost_usd = estimate_cost(self.config.model, usage.prompt_tokens, usage.completion_tokens)
        return usage
