"""Shared fixtures: a scripted transport and canned service payloads."""

import pytest

from assistantkit.networking.config import ClientSettings
from assistantkit.networking.transport import Networking


class FakeNetworking(Networking):
    """`Networking` that replays queued JSON payloads instead of calling HTTP.

    Every request is recorded as `(method, endpoint, body, params)` in
    `calls`. Responses are consumed in FIFO order; a queued exception is
    raised instead of returned.
    """

    def __init__(self, settings, responses=None):
        super().__init__(settings, session=object())
        self.responses = list(responses or [])
        self.calls = []

    def queue(self, *payloads):
        self.responses.extend(payloads)
        return self

    def _next(self, method, endpoint, body, params):
        self.calls.append((method, endpoint, body, params))
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {endpoint}")
        payload = self.responses.pop(0)
        if isinstance(payload, BaseException):
            raise payload
        return payload

    def send_request(self, method, endpoint, body=None, files=None, data=None, params=None):
        return self._next(method, endpoint, body if body is not None else data, params)

    def send_text(self, method, endpoint, params=None):
        return self._next(method, endpoint, None, params)

    @property
    def endpoints(self):
        return [(method, endpoint) for method, endpoint, _, _ in self.calls]


def make_run(status="queued", run_id="run_1", thread_id="thread_1", **overrides):
    payload = {
        "id": run_id,
        "object": "thread.run",
        "created_at": 1700000000,
        "thread_id": thread_id,
        "assistant_id": "asst_1",
        "status": status,
        "model": "gpt-4",
        "tools": [],
        "file_ids": [],
        "metadata": {},
    }
    payload.update(overrides)
    return payload


def make_requires_action_run(call_ids=("call_1",), **overrides):
    tool_calls = [
        {"id": call_id, "type": "function", "function": {"name": "lookup", "arguments": "{}"}}
        for call_id in call_ids
    ]
    return make_run(
        "requires_action",
        required_action={
            "type": "submit_tool_outputs",
            "submit_tool_outputs": {"tool_calls": tool_calls},
        },
        **overrides,
    )


def make_message(message_id="msg_1", thread_id="thread_1", text="Hello there"):
    return {
        "id": message_id,
        "object": "thread.message",
        "created_at": 1700000000,
        "thread_id": thread_id,
        "role": "assistant",
        "content": [{"type": "text", "text": {"value": text, "annotations": []}}],
        "file_ids": [],
        "metadata": {},
    }


def make_list(*items):
    return {"object": "list", "data": list(items), "has_more": False}


@pytest.fixture
def settings():
    return ClientSettings(api_key="sk-test", organization_id="org-test")


@pytest.fixture
def fake_networking(settings):
    return FakeNetworking(settings)


@pytest.fixture
def payloads():
    """Factories for canned service payloads."""

    class Payloads:
        run = staticmethod(make_run)
        requires_action_run = staticmethod(make_requires_action_run)
        message = staticmethod(make_message)
        list = staticmethod(make_list)

    return Payloads
