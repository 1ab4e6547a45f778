from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from langchain_core.messages import BaseMessage

from config.settings import Settings, get_settings
from forecaster.core.errors import (
    ConfigurationError,
    EmptyResponseError,
    NetworkError,
    UpstreamError,
    UpstreamTimeout,
)


logger = logging.getLogger("weathergpt.upstream")

_ROLE_BY_TYPE = {"system": "system", "human": "user", "ai": "assistant"}


def to_openai_messages(messages: List[BaseMessage]) -> List[Dict[str, str]]:
    converted: List[Dict[str, str]] = []
    for message in messages:
        content = message.content if isinstance(message.content, str) else str(message.content)
        if not content:
            continue
        # Unknown message types go upstream as user turns
        converted.append({"role": _ROLE_BY_TYPE.get(message.type, "user"), "content": content})
    return converted


def _extract_content(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    choices = data.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        return None
    return content.strip() or None


class CompletionClient:
    """Blocking client for an OpenAI-compatible chat completion endpoint.

    One request per call, no retries, no caching. Callers decide what to do
    with the typed failures raised from :meth:`complete`.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self.settings.openrouter_base_url.rstrip("/") + "/chat/completions"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.openrouter_api_key.strip()}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.settings.public_app_url,
            "X-Title": self.settings.app_title,
        }

    def complete(
        self,
        messages: List[BaseMessage],
        *,
        model: str,
        max_tokens: int,
        temperature: float,
        timeout: float,
    ) -> str:
        if not self.settings.has_api_key:
            raise ConfigurationError()

        payload = {
            "model": model,
            "messages": to_openai_messages(messages),
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        try:
            with httpx.Client(transport=self._transport, timeout=timeout) as client:
                response = client.post(self.endpoint, json=payload, headers=self._headers())
        except httpx.TimeoutException as exc:
            logger.error("Upstream timed out after %ss (model=%s)", timeout, model)
            raise UpstreamTimeout() from exc
        except httpx.TransportError as exc:
            logger.error("Upstream request failed: %s", exc)
            raise NetworkError() from exc
        except httpx.HTTPError as exc:
            logger.error("Upstream response unreadable: %s", exc)
            raise NetworkError() from exc

        if not response.is_success:
            body = response.text
            logger.error("OpenRouter error: %s %s", response.status_code, body[:500])
            raise UpstreamError(response.status_code, body)

        try:
            data = response.json()
        except ValueError as exc:
            raise EmptyResponseError() from exc

        content = _extract_content(data)
        if content is None:
            logger.warning("Upstream returned no message content (model=%s)", model)
            raise EmptyResponseError()

        logger.info("Upstream responded: model=%s chars=%s", model, len(content))
        return content
