import json
from typing import Any

import httpx
import pytest

from bitbucket_cloud_cli.config import AppConfig
from bitbucket_cloud_cli.services.api import Bitbucket

BASE_URL = "https://api.example.com/2.0"


class Recorder:
    """MockTransport handler that replays queued responses and keeps the requests."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response] = []

    def reply(self, status_code: int = 200, json: Any = None, content: bytes | None = None) -> None:
        if json is not None:
            self._responses.append(httpx.Response(status_code, json=json))
        else:
            self._responses.append(httpx.Response(status_code, content=content or b""))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request {request.method} {request.url}")
        return self._responses.pop(0)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def api(recorder: Recorder):
    http = httpx.Client(transport=httpx.MockTransport(recorder))
    bitbucket = Bitbucket(AppConfig(bitbucket_url=BASE_URL), http=http)
    yield bitbucket
    bitbucket.close()


def user(name: str = "Jane Doe") -> dict:
    return {
        "type": "user",
        "uuid": "{6b2b2b2e-0000-4000-8000-000000000001}",
        "account_id": "557058:abc",
        "nickname": "jane",
        "display_name": name,
    }


def component(component_id: int, name: str) -> dict:
    return {
        "type": "component",
        "name": name,
        "links": {"self": {"href": f"{BASE_URL}/repositories/acme/widgets/components/{component_id}"}},
        "repository": {"type": "repository", "full_name": "acme/widgets", "name": "widgets"},
    }
