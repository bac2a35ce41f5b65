"""Run and run-step shapes, including the lifecycle status enum.

State model:
    A run moves through `RunStatus` entirely on the service side; the client
    only observes transitions by re-fetching. Four states are terminal
    (`cancelled`, `failed`, `completed`, `expired`); the rest need more polling
    or, for `requires_action`, caller-supplied tool outputs.

Classification helpers:
    - `is_complete()` is true only for `completed`.
    - `is_terminal()` is true for any terminal state, so a failed or expired
      run is terminal but not complete.
    - `requires_action()` / `pending_tool_calls()` expose the tool calls the
      service is waiting on, unchanged from the response.
"""

from enum import Enum
from typing import Any, Literal

from assistantkit.types.common import FrozenModel, Resource, Tool, ToolCall, Usage


class RunStatus(str, Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({
    RunStatus.CANCELLED,
    RunStatus.FAILED,
    RunStatus.COMPLETED,
    RunStatus.EXPIRED,
})


class LastErrorCode(str, Enum):
    SERVER_ERROR = "server_error"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"


class LastError(FrozenModel):
    code: LastErrorCode
    message: str


class SubmitToolOutputs(FrozenModel):
    tool_calls: list[ToolCall]


class RequiredAction(FrozenModel):
    type: Literal["submit_tool_outputs"] = "submit_tool_outputs"
    submit_tool_outputs: SubmitToolOutputs


class Run(Resource):
    object: str = "thread.run"
    created_at: int
    thread_id: str
    assistant_id: str
    status: RunStatus
    required_action: RequiredAction | None = None
    last_error: LastError | None = None
    expires_at: int | None = None
    started_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    model: str | None = None
    instructions: str | None = None
    tools: list[Tool] = []
    file_ids: list[str] = []
    metadata: dict[str, str] = {}
    usage: Usage | None = None

    def retrieve_status(self) -> RunStatus:
        return self.status

    def is_complete(self) -> bool:
        return self.status == RunStatus.COMPLETED

    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def requires_action(self) -> bool:
        return self.status == RunStatus.REQUIRES_ACTION

    def pending_tool_calls(self) -> list[ToolCall]:
        if not self.requires_action() or self.required_action is None:
            return []
        return list(self.required_action.submit_tool_outputs.tool_calls)


class RunStepType(str, Enum):
    MESSAGE_CREATION = "message_creation"
    TOOL_CALLS = "tool_calls"


class RunStep(Resource):
    """One recorded action of a run. Fetched on demand, never polled."""

    object: str = "thread.run.step"
    created_at: int
    assistant_id: str
    thread_id: str
    run_id: str
    type: RunStepType
    status: RunStatus
    step_details: dict[str, Any] = {}
    last_error: LastError | None = None
    expired_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    metadata: dict[str, str] = {}
    usage: Usage | None = None

    def message_id(self):
        """Return the created message id for `message_creation` steps."""
        if self.type != RunStepType.MESSAGE_CREATION:
            return None
        return self.step_details.get("message_creation", {}).get("message_id")
