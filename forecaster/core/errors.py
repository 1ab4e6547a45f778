"""Error taxonomy shared by the upstream client and the HTTP layer.

Each error carries the HTTP status the API answers with and the message
shown to the caller.
"""

from __future__ import annotations

from typing import Optional


class WeatherGptError(Exception):
    status_code: int = 500
    default_message: str = "Something went wrong. Please try again."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidLocation(WeatherGptError, ValueError):
    status_code = 400
    default_message = (
        "Invalid input. Please provide a valid city name and 2-letter state "
        'code (e.g. "Denver, CO"), optionally with a zip code, or a 5-digit '
        "zip code."
    )


class ConfigurationError(WeatherGptError):
    status_code = 500
    default_message = (
        "OpenRouter API key not configured. Add OPENROUTER_API_KEY to your "
        "environment variables."
    )


class UpstreamError(WeatherGptError):
    status_code = 502

    def __init__(self, upstream_status: int, body: str = "") -> None:
        self.upstream_status = upstream_status
        self.body = body
        super().__init__(
            f"Weather service returned an error ({upstream_status}). Please try again."
        )


class EmptyResponseError(WeatherGptError):
    status_code = 502
    default_message = "No weather data received. Please try again."


class NetworkError(WeatherGptError):
    status_code = 502
    default_message = "Could not reach the weather service. Please try again."


class UpstreamTimeout(WeatherGptError):
    status_code = 504
    default_message = (
        "Request timed out. The weather service is taking too long to respond."
    )
