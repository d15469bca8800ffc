import json
import logging
import re
from typing import Any, Optional

import requests

from ..errors import ConfigurationError, ParseError, UpstreamError
from ..settings import Settings

logger = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r"^```(?:json)?\n?")
_CLOSING_FENCE = re.compile(r"\n?```$")

PARSE_FAILURE_MESSAGE = "Failed to parse AI response. Please try again."


def strip_code_fences(content: str) -> str:
    text = content.strip()
    if text.startswith("```"):
        text = _CLOSING_FENCE.sub("", _OPENING_FENCE.sub("", text))
    return text


def parse_json_content(content: str) -> Any:
    try:
        return json.loads(strip_code_fences(content))
    except ValueError as e:
        # Raw output goes to the log only, never back to the advisor
        logger.error(f"Failed to parse model output as JSON: {content!r}")
        raise ParseError(PARSE_FAILURE_MESSAGE, raw=content) from e


class ChatCompletionClient:
    """
    One blocking POST to a chat-completions endpoint per call.

    No retries: a failed call raises and the advisor decides whether to try again.
    """

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = "https://api.openai.com/v1/chat/completions",
        model_name: str = "gpt-4o-mini",
        timeout: float = 60.0,
        session: Optional[requests.Session] = None
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.model_name = model_name
        self.timeout = timeout
        self.session = session or requests.Session()
        if not api_key:
            logger.warning("Model API key missing; AI features will fail until it is configured.")

    @classmethod
    def from_settings(cls, settings: Settings, session: Optional[requests.Session] = None) -> "ChatCompletionClient":
        return cls(
            api_key=settings.openai_api_key,
            api_url=settings.openai_api_url,
            model_name=settings.openai_model,
            timeout=settings.request_timeout,
            session=session,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def complete(self, system: str, user: str, temperature: float, max_tokens: int) -> str:
        if not self.is_configured:
            raise ConfigurationError("Missing OpenAI API key. Set OPENAI_API_KEY in your .env file.")

        body = {
            "model": self.model_name,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
            "response_format": {"type": "json_object"},
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        try:
            response = self.session.post(self.api_url, headers=headers, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Model request failed: {e}")
            raise UpstreamError(f"API request failed: {e}") from e

        if not response.ok:
            message = self._error_message(response)
            logger.error(f"Model provider returned {response.status_code}: {message}")
            raise UpstreamError(message, status_code=response.status_code)

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected response envelope from model provider: {response.text!r}")
            raise ParseError(PARSE_FAILURE_MESSAGE, raw=response.text) from e

        if not isinstance(content, str) or not content:
            logger.error(f"Model provider returned no usable message content: {content!r}")
            raise ParseError(PARSE_FAILURE_MESSAGE)
        return content

    def _error_message(self, response: requests.Response) -> str:
        try:
            message = response.json().get("error", {}).get("message")
        except (ValueError, AttributeError):
            message = None
        return message or f"API request failed: {response.status_code}"
