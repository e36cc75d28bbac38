"""
Task Manager API - Suggestion Service

Asks the Gemini generateContent REST API for subtasks of a task title.
This service:
- Builds the prompt and a JSON-schema constrained generation config
- Makes a single outbound call (no retry, no caching)
- Sends the API key in the x-goog-api-key header, never in the URL
- Unwraps candidates[0].content.parts[0].text and decodes it as a JSON array
"""

import json
import logging
from typing import Any, List, Optional

import httpx

from taskmanager.config import settings

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    'Given the main task "{title}", suggest 3-5 concise, actionable subtasks. '
    'Respond only with a JSON array of strings, e.g., ["Subtask 1", "Subtask 2"].'
)

# Upstream error bodies are echoed to the client, capped at this length
MAX_UPSTREAM_BODY = 1000


class SuggestionError(Exception):
    """Base class for suggestion failures."""


class SuggestionNotConfiguredError(SuggestionError):
    """No Gemini API key is configured."""


class SuggestionUnavailableError(SuggestionError):
    """The Gemini API could not be reached (connection error or timeout)."""


class SuggestionUpstreamError(SuggestionError):
    """The Gemini API answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, body: str):
        super().__init__(f"Gemini API error: {status_code} {reason}")
        self.status_code = status_code
        self.reason = reason
        self.body = body


class SuggestionEmptyError(SuggestionError):
    """The response had no candidate text."""


class SuggestionParseError(SuggestionError):
    """The candidate text was not a JSON array."""


def build_prompt(main_task_title: str) -> str:
    return PROMPT_TEMPLATE.format(title=main_task_title)


def build_payload(main_task_title: str) -> dict:
    """Build the generateContent request body."""
    return {
        "contents": [{"role": "user", "parts": [{"text": build_prompt(main_task_title)}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": {
                "type": "ARRAY",
                "items": {"type": "STRING"},
            },
        },
    }


def extract_candidate_text(result: Any) -> Optional[str]:
    """Return candidates[0].content.parts[0].text, or None if any level is missing."""
    if not isinstance(result, dict):
        return None
    candidates = result.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    if not isinstance(text, str) or not text.strip():
        return None
    return text


def parse_suggestions(result: Any) -> List[str]:
    """
    Turn a generateContent response into a list of subtask strings.

    Raises:
        SuggestionEmptyError: no candidate text in the response
        SuggestionParseError: candidate text is not a JSON array
    """
    text = extract_candidate_text(result)
    if text is None:
        raise SuggestionEmptyError("No candidate text in Gemini response")

    try:
        decoded = json.loads(text)
    except ValueError as e:
        raise SuggestionParseError(f"Candidate text is not valid JSON: {e}") from e

    if not isinstance(decoded, list):
        raise SuggestionParseError("Parsed suggestions are not an array")

    suggestions = []
    for item in decoded:
        if isinstance(item, str) and item.strip():
            suggestions.append(item.strip())
    return suggestions


class SuggestionService:
    """Client for subtask suggestions backed by Gemini."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.base_url = (base_url or settings.GEMINI_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.GEMINI_TIMEOUT
        self.transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def suggest_subtasks(self, main_task_title: str) -> List[str]:
        """Ask Gemini for subtasks of the given task title."""
        if not self.api_key:
            logger.error("GEMINI_API_KEY is not set")
            raise SuggestionNotConfiguredError("AI service not configured")

        logger.info(f"Requesting subtask suggestions from Gemini model={self.model}")
        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                response = await client.post(
                    self.endpoint,
                    headers={"x-goog-api-key": self.api_key},
                    json=build_payload(main_task_title),
                    timeout=self.timeout,
                )
            except httpx.RequestError as e:
                logger.error(f"Gemini request failed: {type(e).__name__}")
                raise SuggestionUnavailableError(str(e)) from e

        if not 200 <= response.status_code < 300:
            body = response.text[:MAX_UPSTREAM_BODY]
            logger.error(f"Gemini API error: {response.status_code} - {body}")
            raise SuggestionUpstreamError(response.status_code, response.reason_phrase, body)

        try:
            result = response.json()
        except ValueError as e:
            logger.error("Gemini returned a non-JSON body")
            raise SuggestionEmptyError("Gemini returned a non-JSON body") from e

        suggestions = parse_suggestions(result)
        logger.info(f"Received {len(suggestions)} subtask suggestions")
        return suggestions
