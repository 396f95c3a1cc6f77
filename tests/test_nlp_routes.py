import json

import pytest
from fastapi.testclient import TestClient

from quickadd.core.config import get_settings
from quickadd.main import app
from quickadd.services.parser_factory import clear_parser_cache

client = TestClient(app)


@pytest.fixture(autouse=True)
def reset_parser_and_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NLP_DEFAULT_TO_DUE", "true")
    monkeypatch.setenv(
        "NLP_STATUSES",
        json.dumps(
            [
                {"value": "open", "label": "Open"},
                {"value": "in-progress", "label": "In Progress"},
                {"value": "done", "label": "Done"},
            ],
        ),
    )
    monkeypatch.setenv(
        "NLP_USER_FIELDS",
        json.dumps(
            [{"id": "people", "key": "people", "type": "list", "display_name": "People", "trigger": "@"}],
        ),
    )
    monkeypatch.setenv("DEFAULT_TASK_STATUS", "open")
    clear_parser_cache()
    get_settings.cache_clear()
    yield
    clear_parser_cache()
    get_settings.cache_clear()


def test_parse_endpoint_returns_parsed_and_task_data() -> None:
    response = client.post(
        "/api/nlp/parse",
        json={"text": "Plan launch #work @ana @bo every other week"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["parsed"]["title"] == "Plan launch"
    assert data["parsed"]["tags"] == ["work"]
    assert data["parsed"]["recurrence"] == "FREQ=WEEKLY;INTERVAL=2"
    assert data["parsed"]["user_fields"] == {"people": ["ana", "bo"]}
    assert data["task_data"]["status"] == "open"
    assert data["task_data"]["title"] == "Plan launch"


def test_parse_endpoint_keeps_parsed_status() -> None:
    response = client.post("/api/nlp/parse", json={"text": "Write tests *done"})

    assert response.status_code == 200
    data = response.json()
    assert data["parsed"]["status"] == "done"
    assert data["task_data"]["status"] == "done"
    assert data["parsed"]["title"] == "Write tests"


def test_parse_endpoint_rejects_missing_text() -> None:
    response = client.post("/api/nlp/parse", json={"content": "x"})

    assert response.status_code == 422


def test_parse_endpoint_rejects_non_string_text() -> None:
    response = client.post("/api/nlp/parse", json={"text": 42})

    assert response.status_code == 422


def test_preview_endpoint_returns_parts_and_text() -> None:
    response = client.post("/api/nlp/preview", json={"text": "Standup every weekday #team"})

    assert response.status_code == 200
    data = response.json()
    assert data["parts"] == [
        {"icon": "edit-3", "text": '"Standup"'},
        {"icon": "tag", "text": "Tags: #team"},
        {
            "icon": "repeat",
            "text": "Recurrence: every week on Monday, Tuesday, Wednesday, Thursday and Friday",
        },
    ]
    assert data["text"] == " • ".join(part["text"] for part in data["parts"])


def test_status_suggestions_endpoint() -> None:
    response = client.get("/api/nlp/status-suggestions", params={"query": "o", "limit": 2})

    assert response.status_code == 200
    assert response.json() == {
        "items": [
            {"value": "open", "label": "Open", "display": "Open"},
            {"value": "in-progress", "label": "In Progress", "display": "In Progress"},
        ],
    }


def test_unsupported_language_returns_service_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NLP_LANGUAGE", "xx")
    get_settings.cache_clear()

    response = client.post("/api/nlp/parse", json={"text": "Buy milk"})

    assert response.status_code == 503
    assert "Unsupported NLP language" in response.json()["detail"]
