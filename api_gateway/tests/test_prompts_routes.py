import json

import pytest
from fastapi.testclient import TestClient

from api_gateway.main import app
from modules.prompt_master.credentials import SettingsCredentialBroker
from modules.prompt_master.error_classifier import USER_MESSAGES, ErrorKind
from modules.prompt_master.session import PromptSession


def _payload(count: int, video_count=None) -> dict:
    video_count = count - 1 if video_count is None else video_count
    return {
        "imagePrompts": [f"Frame {idx}" for idx in range(count)],
        "videoPrompts": [f"Transition {idx}" for idx in range(video_count)],
        "analysis": {"subject": "Bedroom", "actionType": "Renovation", "progression": "Messy to cozy"},
    }


class _StubInvoker:
    provider = "stub"
    model = "stub"

    def __init__(self, error=None, video_count=None):
        self.error = error
        self.video_count = video_count
        self.calls = 0

    async def invoke(self, instruction):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return json.dumps(_payload(instruction.image_count, self.video_count))


@pytest.fixture
def invoker():
    return _StubInvoker()


@pytest.fixture
def client(invoker):
    session = PromptSession(SettingsCredentialBroker(api_key="test-key"), lambda key: invoker)
    app.state.prompt_session = session
    yield TestClient(app)
    app.state.prompt_session = None


def test_generate_prompts_returns_prompt_set(client):
    response = client.post(
        "/api/v1/prompts",
        json={"title": "Cải tạo phòng ngủ cũ", "count": 3, "style": "Auto"},
    )
    assert response.status_code == 200
    body = response.json()
    assert len(body["imagePrompts"]) == 3
    assert len(body["videoPrompts"]) == 2
    assert body["analysis"]["subject"]

    latest = client.get("/api/v1/prompts/latest")
    assert latest.status_code == 200
    assert latest.json() == body


def test_generate_prompts_validation_error(client, invoker):
    response = client.post("/api/v1/prompts", json={"title": "  ", "count": 3})
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert invoker.calls == 0


def test_generate_prompts_rejects_unsupported_count(client):
    response = client.post("/api/v1/prompts", json={"title": "Kitchen", "count": 8})
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "count must be one of [1, 2, 3, 4, 5, 6], received 8"
    assert body["message"] != USER_MESSAGES[ErrorKind.VALIDATION]


@pytest.mark.parametrize("count", [True, "3", 2.0])
def test_generate_prompts_does_not_coerce_count(client, invoker, count):
    response = client.post("/api/v1/prompts", json={"title": "Kitchen", "count": count})
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert invoker.calls == 0


def test_empty_input_message_is_reserved_for_missing_title_and_images(client):
    response = client.post("/api/v1/prompts", json={"title": "", "images": []})
    assert response.status_code == 400
    assert response.json()["message"] == "Vui lòng nhập tiêu đề hoặc tải ảnh lên!"


def test_generate_prompts_credential_error_clears_key(client, invoker):
    invoker.error = RuntimeError("Requested entity was not found.")
    response = client.post("/api/v1/prompts", json={"title": "Kitchen", "count": 2})
    assert response.status_code == 401
    body = response.json()
    assert body["code"] == "MISSING_CREDENTIAL"
    assert body["has_key"] is False

    status_response = client.get("/api/v1/credentials")
    assert status_response.json() == {"has_key": False}

    selected = client.post("/api/v1/credentials/select", json={"api_key": "another-key"})
    assert selected.json() == {"has_key": True}


def test_generate_prompts_schema_error(client, invoker):
    invoker.video_count = 0
    response = client.post("/api/v1/prompts", json={"title": "Kitchen", "count": 3})
    assert response.status_code == 502
    assert response.json()["code"] == "SCHEMA_ERROR"
    assert client.get("/api/v1/prompts/latest").status_code == 404


def test_generate_prompts_transient_error(client, invoker):
    invoker.error = ConnectionError("connection reset")
    response = client.post("/api/v1/prompts", json={"title": "Kitchen", "count": 3})
    assert response.status_code == 503
    assert response.json()["code"] == "TRANSIENT_ERROR"


def test_latest_without_result_is_404(client):
    assert client.get("/api/v1/prompts/latest").status_code == 404


def test_latest_result_is_shared_across_clients(client):
    client.post("/api/v1/prompts", json={"title": "Kitchen", "count": 2})
    other_client = TestClient(app)
    latest = other_client.get("/api/v1/prompts/latest")
    assert latest.status_code == 200
    assert len(latest.json()["imagePrompts"]) == 2


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
