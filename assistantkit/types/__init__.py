"""Typed resource shapes exchanged with the service.

Module split:
    - `common`: base classes, list wrapper, usage, tools and tool calls.
    - `model`, `file`, `moderation`, `assistant`, `thread`: plain resources.
    - `message`: thread messages and chat completion input messages.
    - `chat`: chat completion responses.
    - `run`: runs, run steps and the run status enum.
"""

from assistantkit.types.assistant import Assistant, AssistantFile
from assistantkit.types.chat import ChatCompletion
from assistantkit.types.common import ApiList, DeletionStatus, Tool, ToolCall, ToolType, Usage
from assistantkit.types.file import File, FilePurpose
from assistantkit.types.message import (
    AssistantMessage,
    Message,
    MessageFile,
    MessageRole,
    SystemMessage,
    ToolMessage,
    UserMessage,
)
from assistantkit.types.model import Model
from assistantkit.types.moderation import Moderation, ModerationModel
from assistantkit.types.run import (
    TERMINAL_STATUSES,
    LastError,
    LastErrorCode,
    Run,
    RunStatus,
    RunStep,
    RunStepType,
)
from assistantkit.types.thread import Thread

__all__ = [
    "ApiList",
    "Assistant",
    "AssistantFile",
    "AssistantMessage",
    "ChatCompletion",
    "DeletionStatus",
    "File",
    "FilePurpose",
    "LastError",
    "LastErrorCode",
    "Message",
    "MessageFile",
    "MessageRole",
    "Model",
    "Moderation",
    "ModerationModel",
    "Run",
    "RunStatus",
    "RunStep",
    "RunStepType",
    "SystemMessage",
    "TERMINAL_STATUSES",
    "Thread",
    "Tool",
    "ToolCall",
    "ToolMessage",
    "ToolType",
    "Usage",
    "UserMessage",
]
