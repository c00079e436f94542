"""Unit tests for the chat-completions analyzer."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from murajaa.config import MurajaaSettings
from murajaa.models import ErrorType, RefinementMalformed, RefinementOk, RefinementUnavailable
from murajaa.refinement import (
    AnalyzerConfig,
    ChatCompletionAnalyzer,
    describe_strictness,
    estimate_cost,
    parse_analysis,
)

EXPECTED = "بِسْمِ اللَّهِ الرَّحْمَنِ الرَّحِيمِ"
TRANSCRIPT = "بسم الله الرحمن"


def _completion(content: str, status_code: int = 200, usage: dict | None = None) -> httpx.Response:
    body = {
        "choices": [{"message": {"role": "assistant", "content": content}}],
        "usage": usage or {"prompt_tokens": 1000, "completion_tokens": 200},
    }
    return httpx.Response(status_code, json=body)


def _verdict(**overrides) -> str:
    data = {
        "score": 74.6,
        "errors": [{"word": "الرحيم", "issue": "not recited", "type": "missing"}],
        "analysis": "Last word missing.",
    }
    data.update(overrides)
    return json.dumps(data, ensure_ascii=False)


def _analyzer(handler, api_key: str | None = "sk-test") -> ChatCompletionAnalyzer:
    transport = httpx.MockTransport(handler)
    return ChatCompletionAnalyzer(
        AnalyzerConfig(api_key=api_key, base_url="https://llm.test/v1"),
        transport=transport,
        async_transport=transport,
    )


def test_analyze_returns_ok_with_usage() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return _completion(_verdict())

    with _analyzer(handler) as analyzer:
        outcome = analyzer.analyze(TRANSCRIPT, EXPECTED, strictness=2)

    assert isinstance(outcome, RefinementOk)
    assert outcome.is_ok
    assert outcome.score == 75
    assert outcome.errors[0].word == "الرحيم"
    assert outcome.errors[0].type == ErrorType.MISSING
    assert outcome.analysis == "Last word missing."
    assert outcome.usage.prompt_tokens == 1000
    assert outcome.usage.cost_usd == pytest.approx(0.00027)

    request = seen[0]
    assert str(request.url) == "https://llm.test/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"
    payload = json.loads(request.content)
    assert payload["model"] == "gpt-4o-mini"
    assert payload["temperature"] == 0.1
    assert payload["max_tokens"] == 500
    assert "medium" in payload["messages"][0]["content"]
    assert TRANSCRIPT in payload["messages"][1]["content"]


def test_analyze_async_uses_async_client() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return _completion(_verdict(score=90))

    analyzer = _analyzer(handler)
    outcome = asyncio.run(analyzer.analyze_async(TRANSCRIPT, EXPECTED))

    assert isinstance(outcome, RefinementOk)
    assert outcome.score == 90


def test_missing_api_key_is_unavailable_without_a_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    outcome = _analyzer(handler, api_key=None).analyze(TRANSCRIPT, EXPECTED)

    assert isinstance(outcome, RefinementUnavailable)
    assert not outcome.is_ok


def test_non_200_response_is_unavailable() -> None:
    analyzer = _analyzer(lambda request: httpx.Response(500, text="boom"))

    outcome = analyzer.analyze(TRANSCRIPT, EXPECTED)

    assert isinstance(outcome, RefinementUnavailable)
    assert "500" in outcome.reason


def test_timeout_is_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    outcome = _analyzer(handler).analyze(TRANSCRIPT, EXPECTED)

    assert isinstance(outcome, RefinementUnavailable)
    assert outcome.reason.startswith("timeout")


def test_connection_error_is_unavailable_in_async_path() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    outcome = asyncio.run(_analyzer(handler).analyze_async(TRANSCRIPT, EXPECTED))

    assert isinstance(outcome, RefinementUnavailable)


def test_unexpected_envelope_is_malformed() -> None:
    analyzer = _analyzer(lambda request: httpx.Response(200, json={"id": "x"}))

    outcome = analyzer.analyze(TRANSCRIPT, EXPECTED)

    assert isinstance(outcome, RefinementMalformed)


@pytest.mark.parametrize(
    "usage",
    ["n/a", {"prompt_tokens": -3}, {"prompt_tokens": "many", "completion_tokens": 5}, [1, 2]],
)
def test_invalid_usage_counts_as_zero(usage, caplog) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = {
            "choices": [{"message": {"role": "assistant", "content": _verdict(score=80, errors=[])}}],
            "usage": usage,
        }
        return httpx.Response(200, json=body)

    with caplog.at_level("WARNING", logger="murajaa"):
        outcome = _analyzer(handler).analyze(TRANSCRIPT, EXPECTED)

    assert isinstance(outcome, RefinementOk)
    assert outcome.score == 80
    assert outcome.usage.prompt_tokens == 0
    assert outcome.usage.completion_tokens == 0
    assert outcome.usage.cost_usd == 0.0
    assert "Ignoring invalid token usage" in caplog.text


def test_missing_usage_counts_as_zero() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = {"choices": [{"message": {"role": "assistant", "content": _verdict(score=80)}}]}
        return httpx.Response(200, json=body)

    outcome = _analyzer(handler).analyze(TRANSCRIPT, EXPECTED)

    assert isinstance(outcome, RefinementOk)
    assert outcome.usage.model == "gpt-4o-mini"
    assert outcome.usage.prompt_tokens == 0


def test_fenced_reply_is_parsed() -> None:
    outcome = parse_analysis(f"```json\n{_verdict(score=60)}\n```")

    assert isinstance(outcome, RefinementOk)
    assert outcome.score == 60


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        "[1, 2]",
        json.dumps({"errors": []}),
        json.dumps({"score": "high", "errors": []}),
        json.dumps({"score": True, "errors": []}),
        json.dumps({"score": 80, "errors": "none"}),
        json.dumps({"score": 80, "errors": [{"word": "x", "type": "tajweed"}]}),
        json.dumps({"score": 80, "errors": [{"type": "wrong"}]}),
    ],
)
def test_invalid_replies_are_malformed(content: str) -> None:
    outcome = parse_analysis(content)

    assert isinstance(outcome, RefinementMalformed)
    assert outcome.raw == content


@pytest.mark.parametrize(("score", "expected"), [(140, 100), (-5, 0), (69.5, 70), (0, 0)])
def test_score_is_clamped_and_rounded(score: float, expected: int) -> None:
    outcome = parse_analysis(json.dumps({"score": score, "errors": []}))

    assert outcome.score == expected


def test_extra_errors_keep_their_type() -> None:
    outcome = parse_analysis(_verdict(errors=[{"word": "و", "type": "extra", "position": 2}]))

    assert outcome.errors[0].type == ErrorType.EXTRA
    assert outcome.errors[0].position == 2


def test_estimate_cost() -> None:
    assert estimate_cost("gpt-4o-mini", 1_000_000, 1_000_000) == pytest.approx(0.75)
    assert estimate_cost("unknown-model", 1000, 1000) == 0.0


def test_describe_strictness() -> None:
    assert "strict" in describe_strictness(3)
    assert describe_strictness(9) == describe_strictness(1)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_credential_provider_is_cached_for_ttl() -> None:
    clock = FakeClock()
    calls: list[int] = []

    def provider() -> str:
        calls.append(1)
        return f"sk-{len(calls)}"

    config = AnalyzerConfig(credential_provider=provider, credential_ttl=300, clock=clock)

    assert config.get_api_key() == "sk-1"
    clock.now = 299
    assert config.get_api_key() == "sk-1"
    clock.now = 300
    assert config.get_api_key() == "sk-2"

    config.invalidate()
    assert config.get_api_key() == "sk-3"
    assert len(calls) == 3


def test_empty_provider_answer_is_not_cached() -> None:
    answers = [None, "sk-late"]
    config = AnalyzerConfig(credential_provider=lambda: answers.pop(0), clock=FakeClock())

    assert config.get_api_key() is None
    assert config.get_api_key() == "sk-late"


def test_config_from_settings() -> None:
    settings = MurajaaSettings(
        _env_file=None,
        openai_api_key="sk-env",
        openai_model="gpt-test",
        openai_base_url="https://llm.test/v1/",
        refinement_timeout=5,
    )

    config = AnalyzerConfig.from_settings(settings)

    assert config.get_api_key() == "sk-env"
    assert config.model == "gpt-test"
    assert config.timeout == 5
    assert config.endpoint == "https://llm.test/v1/chat/completions"
