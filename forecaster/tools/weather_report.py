from __future__ import annotations

import logging

from pydantic import BaseModel

from forecaster.client import CompletionClient
from forecaster.core.cache import ResponseCache
from forecaster.core.location import Location
from forecaster.core.prompt import build_weather_prompt


logger = logging.getLogger("weathergpt.weather")


class WeatherReport(BaseModel):
    report: str
    cached: bool


class WeatherReporter:
    def __init__(self, client: CompletionClient, cache: ResponseCache) -> None:
        self.client = client
        self.cache = cache
        self.prompt = build_weather_prompt()

    def report(self, location: Location) -> WeatherReport:
        """Return the report for ``location``, from cache while it is fresh.

        Upstream failures propagate as ``WeatherGptError`` subclasses and are
        never cached.
        """
        cache_key = location.cache_key
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info("Weather cache hit: %s", cache_key)
            return WeatherReport(report=cached, cached=True)

        logger.info("Weather cache miss: %s", cache_key)
        settings = self.client.settings
        text = self.client.complete(
            self.prompt.format_messages(place=location.display),
            model=settings.weather_model,
            max_tokens=settings.weather_max_tokens,
            temperature=settings.weather_temperature,
            timeout=settings.weather_timeout,
        )
        self.cache.put(cache_key, text)
        return WeatherReport(report=text, cached=False)
