import base64
import json
from typing import Any, List, Optional
from uuid import UUID

import pytest

from modules.prompt_master.composer import ModelInstruction

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def make_payload(count: int, video_count: Optional[int] = None) -> dict:
    video_count = count - 1 if video_count is None else video_count
    return {
        "imagePrompts": [f"Frame {idx + 1} of the bedroom renovation" for idx in range(count)],
        "videoPrompts": [
            f"Time-lapse carrying frame {idx + 1} into frame {idx + 2}" for idx in range(video_count)
        ],
        "analysis": {
            "subject": "Old bedroom",
            "actionType": "Renovation, Dọn rác & Cải tạo",
            "progression": "From a cluttered room to a cozy bedroom",
        },
    }


class FakeInvoker:
    """Records instructions and returns a canned payload or raises."""

    provider = "fake"
    model = "fake-model"

    def __init__(self, payload: Any = None, error: Optional[BaseException] = None):
        self.payload = payload
        self.error = error
        self.calls: List[ModelInstruction] = []

    async def invoke(self, instruction: ModelInstruction) -> Any:
        self.calls.append(instruction)
        if self.error is not None:
            raise self.error
        if self.payload is None:
            return json.dumps(make_payload(instruction.image_count))
        return self.payload


@pytest.fixture()
def request_uuid() -> UUID:
    return UUID("550e8400-e29b-41d4-a716-446655440000")


@pytest.fixture()
def png_data_url() -> str:
    return "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")


@pytest.fixture()
def data_urls() -> List[str]:
    urls = []
    for idx in range(5):
        raw = PNG_BYTES + bytes([idx])
        urls.append("data:image/png;base64," + base64.b64encode(raw).decode("ascii"))
    return urls


@pytest.fixture()
def fake_invoker() -> FakeInvoker:
    return FakeInvoker()


@pytest.fixture()
def payload_factory():
    return make_payload


@pytest.fixture()
def invoker_cls():
    return FakeInvoker
