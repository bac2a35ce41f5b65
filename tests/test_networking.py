"""Tests for the HTTP transport: headers, URLs and failure mapping."""

from unittest.mock import MagicMock

import pytest
import requests

from assistantkit.core.errors import APIStatusError, DeserializationError, TransportError
from assistantkit.networking.config import ClientSettings
from assistantkit.networking.transport import Networking
from assistantkit.types.run import RunStatus


def _response(status_code=200, payload=None, text="", reason="OK"):
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def networking(settings, session):
    return Networking(settings, session=session)


class TestRequestShape:
    """Every call carries auth, beta and organization headers."""

    def test_headers(self, networking):
        headers = networking.construct_headers()
        assert headers["Authorization"] == "Bearer sk-test"
        assert headers["OpenAI-Beta"] == "assistants=v1"
        assert headers["OpenAI-Organization"] == "org-test"

    def test_organization_header_is_optional(self, session):
        headers = Networking(ClientSettings(api_key="sk-test"), session=session).construct_headers()
        assert "OpenAI-Organization" not in headers

    def test_url_joins_base_and_endpoint(self, networking):
        assert networking.construct_url("threads/runs") == "https://api.openai.com/v1/threads/runs"
        assert networking.construct_url("/models") == "https://api.openai.com/v1/models"

    def test_custom_base_url_without_trailing_slash(self, session):
        settings = ClientSettings(api_key="k", base_url="http://localhost:8080/v1")
        assert Networking(settings, session=session).construct_url("models") == (
            "http://localhost:8080/v1/models"
        )

    def test_request_is_forwarded_to_session(self, networking, session):
        session.request.return_value = _response(payload={"ok": True})
        result = networking.send_request("POST", "threads", body={"metadata": {}}, params={"limit": 1})

        assert result == {"ok": True}
        args, kwargs = session.request.call_args
        assert args == ("POST", "https://api.openai.com/v1/threads")
        assert kwargs["json"] == {"metadata": {}}
        assert kwargs["params"] == {"limit": 1}
        assert kwargs["timeout"] == 120.0
        assert kwargs["headers"]["Authorization"] == "Bearer sk-test"


class TestFailures:
    def test_network_error_becomes_transport_error(self, networking, session):
        session.request.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(TransportError) as exc:
            networking.send_request("GET", "models")
        assert isinstance(exc.value.__cause__, requests.exceptions.ConnectionError)

    def test_http_error_carries_status_and_message(self, networking, session):
        session.request.return_value = _response(
            404,
            {"error": {"message": "No run found", "type": "invalid_request_error"}},
            reason="Not Found",
        )
        with pytest.raises(APIStatusError) as exc:
            networking.retrieve_run("thread_1", "run_x")
        assert exc.value.status_code == 404
        assert exc.value.message == "No run found"
        assert isinstance(exc.value, TransportError)

    def test_http_error_with_non_json_body(self, networking, session):
        session.request.return_value = _response(
            502, ValueError("not json"), text="Bad Gateway", reason="Bad Gateway"
        )
        with pytest.raises(APIStatusError) as exc:
            networking.send_request("GET", "models")
        assert exc.value.body == "Bad Gateway"
        assert exc.value.message == "Bad Gateway"

    def test_non_json_success_is_deserialization_error(self, networking, session):
        session.request.return_value = _response(payload=ValueError("not json"))
        with pytest.raises(DeserializationError):
            networking.send_request("GET", "models")

    def test_shape_mismatch_is_deserialization_error(self, networking, session):
        session.request.return_value = _response(payload={"id": "run_1", "status": "bogus"})
        with pytest.raises(DeserializationError) as exc:
            networking.retrieve_run("thread_1", "run_1")
        assert exc.value.endpoint == "threads/thread_1/runs/run_1"


class TestEndpoints:
    def test_submit_tool_outputs_body(self, networking, session, payloads):
        session.request.return_value = _response(payload=payloads.run("in_progress"))
        run = networking.submit_tool_outputs(
            "thread_1", "run_1", [{"tool_call_id": "call_1", "output": "42"}]
        )

        args, kwargs = session.request.call_args
        assert args[1].endswith("threads/thread_1/runs/run_1/submit_tool_outputs")
        assert kwargs["json"] == {"tool_outputs": [{"tool_call_id": "call_1", "output": "42"}]}
        assert run.status is RunStatus.IN_PROGRESS

    def test_list_wrapper_keeps_pagination(self, networking, session, payloads):
        session.request.return_value = _response(payload={
            "object": "list",
            "data": [payloads.message("msg_1"), payloads.message("msg_2")],
            "first_id": "msg_1",
            "last_id": "msg_2",
            "has_more": True,
        })
        messages = networking.list_messages("thread_1", {"limit": 2})
        assert [m.id for m in messages] == ["msg_1", "msg_2"]
        assert messages.has_more is True
        assert messages.last_id == "msg_2"

    def test_unknown_fields_are_ignored(self, networking, session, payloads):
        session.request.return_value = _response(payload=payloads.run(brand_new_field=1))
        assert networking.retrieve_run("thread_1", "run_1").id == "run_1"

    def test_file_content_is_raw_text(self, networking, session):
        session.request.return_value = _response(text="a,b\n1,2\n")
        assert networking.retrieve_file_content("file_1") == "a,b\n1,2\n"
