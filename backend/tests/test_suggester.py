import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from app.core.errors import SuggestionError
from app.llm.backends.ollama_backend import OllamaSuggestionBackend, strip_code_fences
from app.llm.client import SuggestionContext
from app.llm.suggester import (
    ItinerarySuggester,
    MockSuggestionBackend,
    parse_suggestions,
    suggestion_title,
)
from app.models.domain import ItemType

CONTEXT = SuggestionContext(
    destination="Goa", duration=3, travelers="2 Adults, 0 Children", start_date="2026-11-01"
)


def test_mock_backend_covers_every_day():
    days = MockSuggestionBackend().generate(CONTEXT)
    assert [d.day for d in days] == [1, 2, 3]
    assert all(d.activities for d in days)


def test_suggested_items_are_priced_activities():
    items = ItinerarySuggester().suggest_items(CONTEXT)
    assert items
    for item in items:
        assert item.id.startswith("AI-")
        assert item.type is ItemType.activity
        assert item.base_markup_percent == 15.0
        assert item.duration == "2 Hours"
    first = items[0]
    assert first.title == "Arrival in Goa"
    assert first.time == "12:00 PM"


def test_suggestion_title():
    assert suggestion_title("Baga Beach: water sports") == "Baga Beach"
    assert suggestion_title(": nothing before the colon") == "Activity"


def test_parse_suggestions_coerces_costs():
    days = parse_suggestions(
        {"days": [{"day": "2", "activities": [{"time": "9", "description": "X: y", "cost": "abc"}]}]}
    )
    assert days[0].day == 2
    assert days[0].activities[0].cost == 0.0


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"itinerary": []},
        {"days": [{"activities": []}]},
        {"days": [{"day": 0}]},
        {"days": [{"day": 1, "activities": 5}]},
    ],
)
def test_parse_suggestions_rejects_bad_shapes(payload):
    with pytest.raises(SuggestionError):
        parse_suggestions(payload)


def test_unexpected_backend_errors_become_suggestion_errors():
    backend = MagicMock()
    backend.generate.side_effect = RuntimeError("boom")
    with pytest.raises(SuggestionError):
        ItinerarySuggester(backend=backend).suggest_items(CONTEXT)


def _chat_response(content: str) -> MagicMock:
    resp = MagicMock()
    resp.raise_for_status.return_value = None
    resp.json.return_value = {"message": {"content": content}}
    return resp


def test_ollama_backend_parses_fenced_json():
    body = {"days": [{"day": 1, "activities": [{"time": "10:00 AM", "description": "Fort: tour", "cost": 500}]}]}
    content = "```json\n" + json.dumps(body) + "\n```"
    with patch("app.llm.backends.ollama_backend.requests.post", return_value=_chat_response(content)) as post:
        days = OllamaSuggestionBackend(host="http://ollama:11434", model="llama3").generate(CONTEXT)

    assert days[0].activities[0].cost == 500.0
    url = post.call_args.args[0]
    payload = post.call_args.kwargs["json"]
    assert url == "http://ollama:11434/api/chat"
    assert payload["format"] == "json"
    assert "Goa" in payload["messages"][1]["content"]


def test_ollama_backend_invalid_json():
    with patch("app.llm.backends.ollama_backend.requests.post", return_value=_chat_response("not json")):
        with pytest.raises(SuggestionError):
            OllamaSuggestionBackend().generate(CONTEXT)


def test_ollama_backend_connection_error():
    with patch(
        "app.llm.backends.ollama_backend.requests.post",
        side_effect=requests.ConnectionError("refused"),
    ):
        with pytest.raises(SuggestionError):
            OllamaSuggestionBackend().generate(CONTEXT)


def test_strip_code_fences():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
