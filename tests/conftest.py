"""Shared fixtures: a recording httpx.MockTransport and client factory."""

from __future__ import annotations

import json
from typing import Any, Callable, Union

import httpx
import pytest

from piperun import ClientSettings, PiperunClient

Reply = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class Recorder:
    """Replays canned responses and keeps every request it saw."""

    def __init__(self, *replies: Reply) -> None:
        self.replies = list(replies) or [httpx.Response(200, json={"success": True, "data": []})]
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if not isinstance(reply, httpx.Response):
            return reply(request)
        # Fresh copy per request; a Response is bound to one request.
        return httpx.Response(reply.status_code, headers=reply.headers, content=reply.content)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for key in ("PIPERUN_TOKEN", "PIPERUN_DEBUG", "PIPERUN_UPLOAD", "PIPERUN_DECODE", "PIPERUN_BASE_URL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(_env_file=None, token="tok-123")


@pytest.fixture
def make_client(settings):
    created: list[PiperunClient] = []

    def factory(*replies: Reply, **changes: Any) -> tuple[PiperunClient, Recorder]:
        recorder = Recorder(*replies)
        client = PiperunClient(
            settings.model_copy(update=changes),
            transport=httpx.MockTransport(recorder),
        )
        created.append(client)
        return client, recorder

    yield factory
    for client in created:
        client.close()
