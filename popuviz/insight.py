"""Narrative insight for a (year, archetype) pair.

The text comes from an external LLM provider. Whatever goes wrong on the way
(missing key, network, malformed JSON), callers of `get_demographic_insight`
always receive a displayable Insight; failures fall back to FALLBACK_INSIGHT.
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from typing import Optional, Protocol

from popuviz.data import CountryArchetype

logger = logging.getLogger(__name__)

# ---- Gemini config ----
# export GEMINI_API_KEY="your_key"
GEMINI_MODEL = os.getenv("POPUVIZ_GEMINI_MODEL", "gemini-2.5-flash")

NUM_KEY_STATS = 3


def llm_enabled() -> bool:
    """False when POPUVIZ_LLM_ENABLED is set to 0/false/no/off."""
    flag = os.getenv("POPUVIZ_LLM_ENABLED", "1").strip().lower()
    return flag not in ("0", "false", "no", "off")


@dataclass(frozen=True)
class Insight:
    title: str
    content: str
    key_stats: tuple[str, ...]


FALLBACK_INSIGHT = Insight(
    title="Demographic Trends",
    content=(
        "As nations progress, they typically move from high birth and death rates "
        "to low birth and death rates. This transition impacts economic growth, "
        "healthcare, and social structures."
    ),
    key_stats=("Birth Rate: Variable", "Life Expectancy: Improving", "Median Age: Rising"),
)


class InsightProvider(Protocol):
    def fetch_insight(self, year: int, archetype: CountryArchetype) -> Insight: ...


class StaticInsightProvider:
    """Returns the same insight for every request. No network."""

    def __init__(self, insight: Insight = FALLBACK_INSIGHT):
        self.insight = insight

    def fetch_insight(self, year: int, archetype: CountryArchetype) -> Insight:
        return self.insight


class GeminiInsightProvider:
    """Asks Google Gemini for a short JSON analysis."""

    def __init__(self, api_key: Optional[str] = None, model: str = GEMINI_MODEL):
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        self.model = model

    def fetch_insight(self, year: int, archetype: CountryArchetype) -> Insight:
        from google import genai
        from google.genai import types

        if not self.api_key:
            raise RuntimeError("GEMINI_API_KEY not set in environment.")

        client = genai.Client(api_key=self.api_key)
        prompt = build_insight_prompt(year, archetype)
        logger.debug("Gemini request model=%s year=%s archetype=%s", self.model, year, archetype.value)

        resp = client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(response_mime_type="application/json"),
        )
        text = getattr(resp, "text", "") or ""
        logger.debug("Gemini response: %s", text)
        return parse_insight(text)


def build_insight_prompt(year: int, archetype: CountryArchetype) -> str:
    kind = "Developed" if archetype is CountryArchetype.DEVELOPED else "Developing"
    return f"""
Analyze the demographic situation of a {kind} country in the year {year}.
Provide:
1. A short educational title.
2. A brief analysis of challenges (e.g., aging population, workforce shortage, or youth bulge).
3. {NUM_KEY_STATS} key demographic "stats" (realistic but fictional).

Return JSON ONLY in this exact structure:
{{
  "title": "string",
  "content": "string",
  "keyStats": ["string", "string", "string"]
}}
""".strip()


def clean_llm_json(raw: Optional[str]) -> str:
    """
    Strip whitespace and ```json ... ``` fences from an LLM response.
    """
    if raw is None:
        raise ValueError("Empty response from LLM")

    text = raw.strip()
    if not text:
        raise ValueError("LLM returned an empty string")

    if text.startswith("```"):
        text = re.sub(r"^```[a-zA-Z]*\s*", "", text)
        text = re.sub(r"\s*```$", "", text)
        text = text.strip()

    return text


def parse_insight(text: Optional[str]) -> Insight:
    """Parse and validate a provider response.

    Raises:
        ValueError: if the payload is not JSON or does not have a title,
            content and exactly three key stats.
    """
    data = json.loads(clean_llm_json(text))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    title = data.get("title")
    content = data.get("content")
    stats = data.get("keyStats")
    if not isinstance(title, str) or not title.strip():
        raise ValueError("Insight is missing a title")
    if not isinstance(content, str) or not content.strip():
        raise ValueError("Insight is missing content")
    if not isinstance(stats, list) or len(stats) != NUM_KEY_STATS:
        raise ValueError(f"Insight must carry exactly {NUM_KEY_STATS} key stats")

    return Insight(
        title=title.strip(),
        content=content.strip(),
        key_stats=tuple(str(s) for s in stats),
    )


def default_provider() -> InsightProvider:
    if llm_enabled():
        return GeminiInsightProvider()
    return StaticInsightProvider()


def get_demographic_insight(
    year: int,
    archetype: CountryArchetype,
    provider: Optional[InsightProvider] = None,
) -> Insight:
    """Fetch an insight, degrading to FALLBACK_INSIGHT on any failure."""
    provider = provider or default_provider()
    try:
        insight = provider.fetch_insight(year, archetype)
    except Exception as e:
        logger.warning("Failed to fetch insight for %s/%s: %s", year, archetype.value, e)
        return FALLBACK_INSIGHT

    if not isinstance(insight, Insight) or len(insight.key_stats) != NUM_KEY_STATS:
        logger.warning("Provider returned an unusable insight for %s/%s", year, archetype.value)
        return FALLBACK_INSIGHT
    return insight
