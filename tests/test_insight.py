import json
import logging

import pytest

from popuviz.data import CountryArchetype
from popuviz.insight import (
    FALLBACK_INSIGHT,
    GeminiInsightProvider,
    Insight,
    StaticInsightProvider,
    build_insight_prompt,
    clean_llm_json,
    default_provider,
    get_demographic_insight,
    parse_insight,
)

VALID = {
    "title": "An Ageing Society",
    "content": "Fewer workers support more retirees.",
    "keyStats": ["Median age: 48", "TFR: 1.3", "65+: 30%"],
}


class FailingProvider:
    def __init__(self, error):
        self.error = error
        self.calls = 0

    def fetch_insight(self, year, archetype):
        self.calls += 1
        raise self.error


class RawTextProvider:
    """Runs the real parser over a canned response."""

    def __init__(self, text):
        self.text = text

    def fetch_insight(self, year, archetype):
        return parse_insight(self.text)


def test_parse_valid_insight():
    insight = parse_insight(json.dumps(VALID))
    assert insight.title == "An Ageing Society"
    assert insight.key_stats == ("Median age: 48", "TFR: 1.3", "65+: 30%")


def test_parse_fenced_insight():
    text = "```json\n" + json.dumps(VALID) + "\n```"
    assert parse_insight(text).content == VALID["content"]


def test_clean_llm_json_rejects_empty():
    with pytest.raises(ValueError):
        clean_llm_json("   ")
    with pytest.raises(ValueError):
        clean_llm_json(None)


@pytest.mark.parametrize("payload", [
    {**VALID, "keyStats": ["one", "two"]},
    {**VALID, "keyStats": "one, two, three"},
    {**VALID, "title": ""},
    {"content": "x", "keyStats": ["a", "b", "c"]},
    ["not", "an", "object"],
])
def test_parse_rejects_wrong_shape(payload):
    with pytest.raises(ValueError):
        parse_insight(json.dumps(payload))


def test_parse_rejects_non_json():
    with pytest.raises(ValueError):
        parse_insight("The population is ageing.")


def test_prompt_mentions_year_and_archetype():
    prompt = build_insight_prompt(2050, CountryArchetype.DEVELOPING)
    assert "2050" in prompt
    assert "Developing country" in prompt
    assert "keyStats" in prompt


def test_static_provider_passes_through():
    insight = Insight("T", "C", ("a", "b", "c"))
    result = get_demographic_insight(2000, CountryArchetype.DEVELOPED, StaticInsightProvider(insight))
    assert result == insight


@pytest.mark.parametrize("error", [
    RuntimeError("provider down"),
    ConnectionError("network"),
    TimeoutError(),
])
def test_failures_fall_back(error, caplog):
    provider = FailingProvider(error)
    with caplog.at_level(logging.WARNING, logger="popuviz.insight"):
        result = get_demographic_insight(1990, CountryArchetype.DEVELOPED, provider)
    assert result == FALLBACK_INSIGHT
    assert provider.calls == 1
    assert "Failed to fetch insight" in caplog.text


def test_malformed_response_falls_back():
    result = get_demographic_insight(1990, CountryArchetype.DEVELOPING, RawTextProvider("{not json"))
    assert result == FALLBACK_INSIGHT


def test_unusable_insight_falls_back():
    provider = StaticInsightProvider(Insight("T", "C", ("only one",)))
    assert get_demographic_insight(1990, CountryArchetype.DEVELOPED, provider) == FALLBACK_INSIGHT


def test_gemini_without_key_falls_back(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    provider = GeminiInsightProvider()
    assert get_demographic_insight(2024, CountryArchetype.DEVELOPED, provider) == FALLBACK_INSIGHT


def test_fallback_has_three_stats():
    assert len(FALLBACK_INSIGHT.key_stats) == 3


@pytest.mark.parametrize("flag", ["0", "false", "OFF"])
def test_llm_can_be_disabled(monkeypatch, flag):
    monkeypatch.setenv("POPUVIZ_LLM_ENABLED", flag)
    assert isinstance(default_provider(), StaticInsightProvider)


def test_llm_enabled_by_default(monkeypatch):
    monkeypatch.delenv("POPUVIZ_LLM_ENABLED", raising=False)
    assert isinstance(default_provider(), GeminiInsightProvider)
