"""HTTP transport for the service's JSON API.

Architectural role:
    Executes one request per operation against the configured base URL and
    decodes the response into a typed shape. Builders hand their payload to
    the endpoint methods here; the run controller uses the run endpoints to
    create, re-fetch, cancel and submit tool outputs.

Request flow:
    endpoint method -> `send_and_convert(shape, ...)` -> `send_request(...)`
    -> `requests.Session.request` -> JSON decode -> pydantic validation.

Headers:
    Every call carries `Authorization: Bearer <key>`, the `OpenAI-Beta`
    marker and, when configured, `OpenAI-Organization`.

Retry behavior:
    No retry loop is implemented. Each HTTP call is attempted once with the
    configured timeout.

Failure handling model:
    - `requests` exceptions -> `TransportError` (chained).
    - HTTP status >= 400 -> `APIStatusError` carrying status and error body.
    - Undecodable JSON or shape mismatch -> `DeserializationError`.
    Nothing is swallowed; callers see every failure.
"""

import logging
from functools import lru_cache
from urllib.parse import urljoin

import requests
from pydantic import TypeAdapter, ValidationError

from assistantkit.core.errors import APIStatusError, DeserializationError, TransportError
from assistantkit.types.assistant import Assistant, AssistantFile
from assistantkit.types.chat import ChatCompletion
from assistantkit.types.common import ApiList, DeletionStatus
from assistantkit.types.file import File
from assistantkit.types.message import Message, MessageFile
from assistantkit.types.model import Model
from assistantkit.types.moderation import Moderation
from assistantkit.types.run import Run, RunStep
from assistantkit.types.thread import Thread

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _adapter(shape):
    return TypeAdapter(shape)


def _error_message(response, body):
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
    return response.reason or "request failed"


class Networking:
    """Blocking JSON transport bound to one set of `ClientSettings`."""

    def __init__(self, settings, session=None):
        self.settings = settings
        self.session = session or requests.Session()

    # ============================================================
    # Common networking
    # ============================================================

    def construct_headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.settings.api_key}",
            "OpenAI-Beta": self.settings.beta,
        }
        if self.settings.organization_id:
            headers["OpenAI-Organization"] = self.settings.organization_id
        return headers

    def construct_url(self, endpoint: str) -> str:
        return urljoin(self.settings.base_url, endpoint.lstrip("/"))

    def _perform(self, method, endpoint, body=None, files=None, data=None, params=None):
        url = self.construct_url(endpoint)
        logger.debug("%s [%s] - %s", method, endpoint, body)

        try:
            response = self.session.request(
                method,
                url,
                headers=self.construct_headers(),
                json=body,
                files=files,
                data=data,
                params=params,
                timeout=self.settings.timeout,
            )
        except requests.exceptions.RequestException as err:
            raise TransportError(f"{method} {endpoint} failed: {err}") from err

        if response.status_code >= 400:
            try:
                error_body = response.json()
            except ValueError:
                error_body = response.text
            raise APIStatusError(
                response.status_code,
                _error_message(response, error_body),
                error_body,
            )

        return response

    def send_request(self, method, endpoint, body=None, files=None, data=None, params=None):
        """Send one request and return the decoded JSON body.

        Args:
            method: HTTP method (`GET`, `POST`, `DELETE`, ...).
            endpoint: Path relative to the base URL, e.g. `threads/runs`.
            body: JSON body; sent with `Content-Type: application/json`.
            files: Multipart file parts (uploads only).
            data: Multipart form fields accompanying `files`.
            params: Query string parameters.

        Raises:
            TransportError: Network failure or HTTP error status.
            DeserializationError: Body is not JSON.
        """
        response = self._perform(method, endpoint, body, files, data, params)
        try:
            payload = response.json()
        except ValueError as err:
            raise DeserializationError(endpoint, "response body is not JSON") from err

        logger.debug("[%s] - %s", endpoint, payload)
        return payload

    def send_text(self, method, endpoint, params=None) -> str:
        """Send one request and return the raw response text."""
        return self._perform(method, endpoint, params=params).text

    def send_and_convert(self, shape, method, endpoint, body=None, files=None, data=None, params=None):
        """Send one request and validate the JSON body into `shape`."""
        payload = self.send_request(method, endpoint, body, files, data, params)
        try:
            return _adapter(shape).validate_python(payload)
        except ValidationError as err:
            raise DeserializationError(endpoint, err) from err

    # ============================================================
    # Chat completion
    # ============================================================

    def create_chat_completion(self, payload) -> ChatCompletion:
        return self.send_and_convert(ChatCompletion, "POST", "chat/completions", body=payload)

    # ============================================================
    # Models
    # ============================================================

    def list_models(self) -> ApiList[Model]:
        return self.send_and_convert(ApiList[Model], "GET", "models")

    def load_model(self, model_id: str) -> Model:
        return self.send_and_convert(Model, "GET", f"models/{model_id}")

    # ============================================================
    # Files
    # ============================================================

    def upload_file(self, path, purpose: str) -> File:
        with open(path, "rb") as handle:
            return self.send_and_convert(
                File,
                "POST",
                "files",
                files={"file": (path.name, handle)},
                data={"purpose": purpose},
            )

    def list_files(self) -> ApiList[File]:
        return self.send_and_convert(ApiList[File], "GET", "files")

    def retrieve_file(self, file_id: str) -> File:
        return self.send_and_convert(File, "GET", f"files/{file_id}")

    def delete_file(self, file_id: str) -> DeletionStatus:
        return self.send_and_convert(DeletionStatus, "DELETE", f"files/{file_id}")

    def retrieve_file_content(self, file_id: str) -> str:
        return self.send_text("GET", f"files/{file_id}/content")

    # ============================================================
    # Moderation
    # ============================================================

    def create_moderation(self, payload) -> Moderation:
        return self.send_and_convert(Moderation, "POST", "moderations", body=payload)

    # ============================================================
    # Assistants + assistant files
    # ============================================================

    def create_assistant(self, payload) -> Assistant:
        return self.send_and_convert(Assistant, "POST", "assistants", body=payload)

    def modify_assistant(self, assistant_id: str, payload) -> Assistant:
        return self.send_and_convert(Assistant, "POST", f"assistants/{assistant_id}", body=payload)

    def list_assistants(self, params=None) -> ApiList[Assistant]:
        return self.send_and_convert(ApiList[Assistant], "GET", "assistants", params=params)

    def retrieve_assistant(self, assistant_id: str) -> Assistant:
        return self.send_and_convert(Assistant, "GET", f"assistants/{assistant_id}")

    def delete_assistant(self, assistant_id: str) -> DeletionStatus:
        return self.send_and_convert(DeletionStatus, "DELETE", f"assistants/{assistant_id}")

    def create_assistant_file(self, assistant_id: str, payload) -> AssistantFile:
        return self.send_and_convert(
            AssistantFile, "POST", f"assistants/{assistant_id}/files", body=payload
        )

    def list_assistant_files(self, assistant_id: str, params=None) -> ApiList[AssistantFile]:
        return self.send_and_convert(
            ApiList[AssistantFile], "GET", f"assistants/{assistant_id}/files", params=params
        )

    def retrieve_assistant_file(self, assistant_id: str, file_id: str) -> AssistantFile:
        return self.send_and_convert(
            AssistantFile, "GET", f"assistants/{assistant_id}/files/{file_id}"
        )

    def delete_assistant_file(self, assistant_id: str, file_id: str) -> DeletionStatus:
        return self.send_and_convert(
            DeletionStatus, "DELETE", f"assistants/{assistant_id}/files/{file_id}"
        )

    # ============================================================
    # Threads
    # ============================================================

    def create_thread(self, payload) -> Thread:
        return self.send_and_convert(Thread, "POST", "threads", body=payload)

    def retrieve_thread(self, thread_id: str) -> Thread:
        return self.send_and_convert(Thread, "GET", f"threads/{thread_id}")

    def modify_thread(self, thread_id: str, metadata) -> Thread:
        return self.send_and_convert(
            Thread, "POST", f"threads/{thread_id}", body={"metadata": dict(metadata)}
        )

    def delete_thread(self, thread_id: str) -> DeletionStatus:
        return self.send_and_convert(DeletionStatus, "DELETE", f"threads/{thread_id}")

    # ============================================================
    # Messages
    # ============================================================

    def create_message(self, thread_id: str, payload) -> Message:
        return self.send_and_convert(Message, "POST", f"threads/{thread_id}/messages", body=payload)

    def list_messages(self, thread_id: str, params=None) -> ApiList[Message]:
        return self.send_and_convert(
            ApiList[Message], "GET", f"threads/{thread_id}/messages", params=params
        )

    def retrieve_message(self, thread_id: str, message_id: str) -> Message:
        return self.send_and_convert(Message, "GET", f"threads/{thread_id}/messages/{message_id}")

    def modify_message(self, thread_id: str, message_id: str, metadata) -> Message:
        return self.send_and_convert(
            Message,
            "POST",
            f"threads/{thread_id}/messages/{message_id}",
            body={"metadata": dict(metadata)},
        )

    def list_message_files(self, thread_id: str, message_id: str, params=None) -> ApiList[MessageFile]:
        return self.send_and_convert(
            ApiList[MessageFile],
            "GET",
            f"threads/{thread_id}/messages/{message_id}/files",
            params=params,
        )

    def retrieve_message_file(self, thread_id: str, message_id: str, file_id: str) -> MessageFile:
        return self.send_and_convert(
            MessageFile, "GET", f"threads/{thread_id}/messages/{message_id}/files/{file_id}"
        )

    # ============================================================
    # Runs
    # ============================================================

    def create_run(self, payload, thread_id=None) -> Run:
        """Create a run on `thread_id`, or a new thread and run together when `None`."""
        if thread_id is None:
            endpoint = "threads/runs"
        else:
            endpoint = f"threads/{thread_id}/runs"
        return self.send_and_convert(Run, "POST", endpoint, body=payload)

    def retrieve_run(self, thread_id: str, run_id: str) -> Run:
        return self.send_and_convert(Run, "GET", f"threads/{thread_id}/runs/{run_id}")

    def modify_run(self, thread_id: str, run_id: str, metadata) -> Run:
        return self.send_and_convert(
            Run, "POST", f"threads/{thread_id}/runs/{run_id}", body={"metadata": dict(metadata)}
        )

    def list_runs(self, thread_id: str, params=None) -> ApiList[Run]:
        return self.send_and_convert(ApiList[Run], "GET", f"threads/{thread_id}/runs", params=params)

    def cancel_run(self, thread_id: str, run_id: str) -> Run:
        return self.send_and_convert(Run, "POST", f"threads/{thread_id}/runs/{run_id}/cancel")

    def submit_tool_outputs(self, thread_id: str, run_id: str, tool_outputs) -> Run:
        return self.send_and_convert(
            Run,
            "POST",
            f"threads/{thread_id}/runs/{run_id}/submit_tool_outputs",
            body={"tool_outputs": list(tool_outputs)},
        )

    def retrieve_run_step(self, thread_id: str, run_id: str, step_id: str) -> RunStep:
        return self.send_and_convert(
            RunStep, "GET", f"threads/{thread_id}/runs/{run_id}/steps/{step_id}"
        )

    def list_run_steps(self, thread_id: str, run_id: str, params=None) -> ApiList[RunStep]:
        return self.send_and_convert(
            ApiList[RunStep], "GET", f"threads/{thread_id}/runs/{run_id}/steps", params=params
        )
