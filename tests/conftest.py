import json
from collections.abc import AsyncIterator

import httpx
import pytest

from imgbb.client import ImgBB

TEST_API_KEY = "test-key"

SUCCESS_BODY = json.dumps(
    {
        "data": {"id": "abc", "url": "https://i.ibb.co/abc.png", "delete_url": "https://ibb.co/abc/x"},
        "success": True,
        "status": 200,
    }
)


class StubHandler:
    """Answers every request with a canned response and records what was sent."""

    def __init__(self) -> None:
        self.status_code = 200
        self.body = SUCCESS_BODY
        self.error: Exception | None = None
        self.requests: list[httpx.Request] = []

    def respond(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.body)


@pytest.fixture
def stub() -> StubHandler:
    return StubHandler()


@pytest.fixture
async def imgbb(stub: StubHandler) -> AsyncIterator[ImgBB]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(stub)) as http_client:
        yield ImgBB(TEST_API_KEY, client=http_client)
