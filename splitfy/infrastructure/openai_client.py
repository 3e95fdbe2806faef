"""OpenAI backed analysis of negotiation messages."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Sequence
from typing import Any

from openai import OpenAI, OpenAIError

from splitfy.config import get_settings
from splitfy.domain.entities import NegotiationAnalysis, NegotiationMessage

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4.1-mini"
_HISTORY_LIMIT = 10

_ANALYSIS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "required": ["sentiment_score", "summary", "key_points", "suggested_reply"],
    "properties": {
        "sentiment_score": {"type": "number", "minimum": -1, "maximum": 1},
        "summary": {"type": "string"},
        "key_points": {"type": "array", "items": {"type": "string"}},
        "suggested_reply": {"type": ["string", "null"]},
    },
}

_SYSTEM_PROMPT = (
    "You assist music industry professionals negotiating deals such as split "
    "sheets, performance, producer and management agreements. Reply ONLY with "
    "JSON matching the provided schema."
)


def _strip_code_fences(text: str) -> str:
    """Return JSON text without Markdown code fences."""

    s = text.strip()
    if not s.startswith("```"):
        return text
    cleaned = s.strip("`")
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end == -1:
        return text
    return cleaned[start : end + 1]


def _remove_trailing_commas(text: str) -> str:
    return re.sub(r",(\s*[}\]])", r"\1", text)


def parse_json_payload(text: str) -> dict[str, Any]:
    """Decode a model answer, tolerating code fences and trailing commas."""

    candidates = (text, _strip_code_fences(text))
    for candidate in (*candidates, _remove_trailing_commas(candidates[1])):
        try:
            payload = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(payload, dict):
            return payload
        break
    logger.error("Could not decode OpenAI response: %s", text)
    raise OpenAIServiceError("The OpenAI response is not a valid JSON object.")


def build_analysis(payload: dict[str, Any]) -> NegotiationAnalysis:
    """Validate a decoded payload and convert it into a domain analysis."""

    try:
        sentiment = float(payload["sentiment_score"])
    except (KeyError, TypeError, ValueError) as exc:
        raise OpenAIServiceError("'sentiment_score' must be a number.") from exc
    sentiment = max(-1.0, min(1.0, sentiment))

    summary = payload.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        raise OpenAIServiceError("'summary' must be a non-empty string.")

    key_points = payload.get("key_points") or []
    if not isinstance(key_points, list):
        raise OpenAIServiceError("'key_points' must be a list.")

    suggested_reply = payload.get("suggested_reply")
    if not isinstance(suggested_reply, str) or not suggested_reply.strip():
        suggested_reply = None

    return NegotiationAnalysis(
        sentiment_score=round(sentiment, 2),
        summary=summary.strip(),
        key_points=[str(point) for point in key_points if str(point).strip()],
        suggested_reply=suggested_reply.strip() if suggested_reply else None,
    )


class OpenAIConfigurationError(RuntimeError):
    """Raised when the OpenAI settings are incomplete."""


class OpenAIServiceError(RuntimeError):
    """Raised when the OpenAI API does not answer as expected."""


class NegotiationAnalysisService:
    """Ask the model for sentiment, key points and a suggested reply."""

    def __init__(self, client: OpenAI | None = None) -> None:
        settings = get_settings()

        if client is None:
            api_key = (settings.openai_api_key or "").strip()
            if not api_key:
                raise OpenAIConfigurationError(
                    "OPENAI_API_KEY is not defined in the environment."
                )
            client_kwargs: dict[str, Any] = {"api_key": api_key}
            base_url = (settings.openai_base_url or "").strip()
            if base_url:
                client_kwargs["base_url"] = base_url
            client = OpenAI(**client_kwargs)

        max_output_tokens = settings.openai_max_output_tokens
        if max_output_tokens is not None and max_output_tokens <= 0:
            max_output_tokens = None

        self._client = client
        self._model = (settings.openai_model or DEFAULT_MODEL).strip() or DEFAULT_MODEL
        self._temperature = float(settings.openai_temperature)
        self._max_output_tokens = max_output_tokens

    def analyze(
        self,
        message: str,
        *,
        negotiation_title: str,
        history: Sequence[NegotiationMessage] = (),
    ) -> NegotiationAnalysis:
        transcript = [
            f"[{entry.message_type}] user {entry.sender_id}: {entry.message}"
            for entry in list(history)[-_HISTORY_LIMIT:]
        ]
        instruction = (
            f"Negotiation: {negotiation_title}\n"
            "Rate the sentiment of the latest message from -1 (hostile) to 1 "
            "(cooperative), summarise it, list its key points and, when useful, "
            "suggest a constructive reply. Use null when no reply is needed."
        )
        if transcript:
            instruction += "\nRecent conversation:\n" + "\n".join(transcript)

        request_kwargs: dict[str, Any] = {
            "model": self._model,
            "input": [
                {"role": "system", "content": [{"type": "input_text", "text": _SYSTEM_PROMPT}]},
                {"role": "user", "content": [{"type": "input_text", "text": instruction}]},
                {"role": "user", "content": [{"type": "input_text", "text": message}]},
            ],
            "temperature": self._temperature,
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "negotiation_analysis",
                    "strict": True,
                    "schema": _ANALYSIS_SCHEMA,
                }
            },
        }
        if self._max_output_tokens is not None:
            request_kwargs["max_output_tokens"] = self._max_output_tokens

        try:
            response = self._client.responses.create(**request_kwargs)
        except OpenAIError as exc:
            raise OpenAIServiceError("The request to OpenAI failed.") from exc

        text = getattr(response, "output_text", None)
        if not text:
            try:
                text = response.output[0].content[0].text
            except (AttributeError, IndexError, TypeError) as exc:
                raise OpenAIServiceError("The OpenAI response contains no text.") from exc

        logger.debug("Raw negotiation analysis: %s", text)
        return build_analysis(parse_json_payload(text))


__all__ = [
    "NegotiationAnalysisService",
    "OpenAIConfigurationError",
    "OpenAIServiceError",
    "parse_json_payload",
    "build_analysis",
]
