"""Tests for the Gemini advisory client."""

import asyncio
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from src.application.use_cases.constants import (
    ANALYSIS_EMPTY_MESSAGE,
    ANALYSIS_UNAVAILABLE_MESSAGE,
    ANALYSIS_UNCONFIGURED_MESSAGE,
)
from src.domain.services.advisory import build_advisory_snapshot
from src.domain.sample_data import build_sample_aggregate
from src.infrastructure import gemini_advisory
from src.infrastructure.gemini_advisory import GeminiAdvisoryClient


class _FakeModel:
    def __init__(self, response=None, error=None) -> None:
        self.response = response
        self.error = error
        self.prompts: list[str] = []

    async def generate_content_async(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


class _BlockedResponse:
    @property
    def text(self):
        raise ValueError("no text part")


def _client(monkeypatch, model):
    fake_genai = SimpleNamespace(
        configure=MagicMock(),
        GenerativeModel=MagicMock(return_value=model),
    )
    monkeypatch.setattr(gemini_advisory, "genai", fake_genai)
    client = GeminiAdvisoryClient(
        api_key="key",
        model_name="gemini-test",
        logger=MagicMock(),
    )
    return client, fake_genai


def _snapshot():
    return build_advisory_snapshot(
        build_sample_aggregate(today=date(2024, 5, 1))
    )


def test_client_configures_model(monkeypatch) -> None:
    client, fake_genai = _client(monkeypatch, _FakeModel())

    assert client.configured is True
    fake_genai.configure.assert_called_once_with(api_key="key")
    fake_genai.GenerativeModel.assert_called_once_with(
        model_name="gemini-test"
    )


def test_unconfigured_client_returns_fallbacks(monkeypatch) -> None:
    fake_genai = SimpleNamespace(configure=MagicMock(),
                                 GenerativeModel=MagicMock())
    monkeypatch.setattr(gemini_advisory, "genai", fake_genai)
    logger = MagicMock()

    client = GeminiAdvisoryClient(api_key=None, logger=logger)

    assert client.configured is False
    assert asyncio.run(client.analyze(_snapshot())) == (
        ANALYSIS_UNCONFIGURED_MESSAGE
    )
    assert asyncio.run(client.suggest_category("Taxi")) == "Other"
    fake_genai.configure.assert_not_called()
    logger.warning.assert_called_once()


def test_analyze_embeds_snapshot_in_prompt(monkeypatch) -> None:
    model = _FakeModel(response=SimpleNamespace(text="  Diversify.  "))
    client, _ = _client(monkeypatch, model)

    result = asyncio.run(client.analyze(_snapshot()))

    assert result == "Diversify."
    assert '"totalCash": 43500.0' in model.prompts[0]
    assert '"topHoldings"' in model.prompts[0]


def test_analyze_handles_empty_and_blocked_responses(monkeypatch) -> None:
    empty, _ = _client(monkeypatch, _FakeModel(SimpleNamespace(text="")))
    blocked, _ = _client(monkeypatch, _FakeModel(_BlockedResponse()))

    assert asyncio.run(empty.analyze(_snapshot())) == ANALYSIS_EMPTY_MESSAGE
    assert asyncio.run(blocked.analyze(_snapshot())) == ANALYSIS_EMPTY_MESSAGE


def test_analyze_errors_return_unavailable_message(monkeypatch) -> None:
    client, _ = _client(monkeypatch, _FakeModel(error=RuntimeError("quota")))

    assert asyncio.run(client.analyze(_snapshot())) == (
        ANALYSIS_UNAVAILABLE_MESSAGE
    )


def test_suggest_category_returns_trimmed_text(monkeypatch) -> None:
    model = _FakeModel(response=SimpleNamespace(text="Transport\n"))
    client, _ = _client(monkeypatch, model)

    assert asyncio.run(client.suggest_category("MRT")) == "Transport"
    assert '"MRT"' in model.prompts[0]
    assert "Food, Transport" in model.prompts[0]


def test_suggest_category_errors_fall_back(monkeypatch) -> None:
    client, _ = _client(monkeypatch, _FakeModel(error=TimeoutError()))

    assert asyncio.run(client.suggest_category("MRT")) == "Other"


def test_snapshot_amounts_are_plain_floats() -> None:
    payload = _snapshot().to_dict()

    assert payload["accounts"][1] == {
        "name": "Main Credit Card",
        "balance": float(Decimal("-8500")),
    }
