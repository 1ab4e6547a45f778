from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Optional

from forecaster.client import CompletionClient
from forecaster.core.cache import ResponseCache
from forecaster.core.errors import WeatherGptError
from forecaster.core.prompt import build_suggest_prompt


logger = logging.getLogger("weathergpt.suggest")

MIN_QUERY_LENGTH = 2
MAX_SUGGESTIONS = 6
SUGGESTION_RE = re.compile(r"^.+,\s*[A-Z]{2}(\s+\d{5})?\Z", re.ASCII)


def _strip_code_fences(text: str) -> str:
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped[3:]
        if stripped.startswith("json"):
            stripped = stripped[len("json"):]
        stripped = stripped.lstrip()
    stripped = stripped.rstrip()
    if stripped.endswith("```"):
        stripped = stripped[:-3]
    return stripped.strip()


def parse_suggestions(content: str) -> List[str]:
    """Turn a model reply into at most six "City, ST[ ZIP]" strings.

    Raises ValueError when the reply is not a JSON array.
    """
    parsed: Any = json.loads(_strip_code_fences(content))
    if not isinstance(parsed, list):
        raise ValueError("Suggestion reply is not a JSON array")
    return [
        item for item in parsed if isinstance(item, str) and SUGGESTION_RE.match(item)
    ][:MAX_SUGGESTIONS]


class LocationSuggester:
    """Best-effort location autocomplete backed by the completion API."""

    def __init__(self, client: CompletionClient, cache: ResponseCache) -> None:
        self.client = client
        self.cache = cache
        self.prompt = build_suggest_prompt()

    def _fetch(self, query: str) -> List[str]:
        settings = self.client.settings
        content = self.client.complete(
            self.prompt.format_messages(query=query),
            model=settings.suggest_model,
            max_tokens=settings.suggest_max_tokens,
            temperature=settings.suggest_temperature,
            timeout=settings.suggest_timeout,
        )
        return parse_suggestions(content)

    def try_fetch(self, query: str) -> Optional[List[str]]:
        """Upstream lookup that reports failure as ``None`` instead of raising."""
        try:
            return self._fetch(query)
        except (WeatherGptError, ValueError) as exc:
            logger.warning("Suggestions unavailable for %r: %s", query, exc)
            return None
        except Exception as exc:
            logger.warning("Suggestion lookup failed for %r", query, exc_info=exc)
            return None

    def suggest(self, query: Optional[str]) -> List[str]:
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []

        cache_key = query.lower()
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info("Suggestion cache hit: %s", cache_key)
            return list(cached)

        suggestions = self.try_fetch(query)
        if suggestions is None:
            return []

        self.cache.put(cache_key, suggestions)
        return list(suggestions)
