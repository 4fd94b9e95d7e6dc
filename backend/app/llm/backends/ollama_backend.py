from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import List

import requests

from app.core.config import settings
from app.core.errors import SuggestionError
from app.llm.client import SuggestionBackend, SuggestionContext
from app.llm.prompts import SUGGESTION_SYSTEM_PROMPT, suggestion_user_prompt
from app.llm.suggester import parse_suggestions
from app.models.domain import SuggestedDay

logger = logging.getLogger(__name__)


def strip_code_fences(content: str) -> str:
    """Models sometimes wrap JSON in ```json fences despite being told not to."""
    return content.replace("```json", "").replace("```", "").strip()


@dataclass
class OllamaSuggestionBackend(SuggestionBackend):
    """
    Suggestion backend using Ollama's chat API.
    Expects the model to return the day-by-day JSON described in the system prompt.
    """

    host: str = settings.ollama_host
    model: str = settings.ollama_model
    timeout: int = settings.llm_timeout_seconds

    def _build_messages(self, context: SuggestionContext) -> List[dict]:
        return [
            {"role": "system", "content": SUGGESTION_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": suggestion_user_prompt(
                    context.destination,
                    context.duration,
                    context.travelers,
                    context.start_date,
                ),
            },
        ]

    def generate(self, context: SuggestionContext) -> List[SuggestedDay]:
        payload = {
            "model": self.model,
            "messages": self._build_messages(context),
            "stream": False,
            "format": "json",
        }
        try:
            resp = requests.post(f"{self.host}/api/chat", json=payload, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.error("Ollama request failed: %s", exc)
            raise SuggestionError(f"Suggestion service unavailable: {exc}") from exc

        try:
            content = resp.json().get("message", {}).get("content", "")
        except ValueError as exc:
            raise SuggestionError("Suggestion service returned a non-JSON body") from exc
        try:
            data = json.loads(strip_code_fences(content))
        except json.JSONDecodeError as exc:
            logger.error("Invalid JSON from model: %s", content)
            raise SuggestionError("Suggestion service returned invalid JSON") from exc
        return parse_suggestions(data)
