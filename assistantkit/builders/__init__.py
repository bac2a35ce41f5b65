"""Request builders.

Architectural role:
    Convert user-supplied parameters into well-formed request payloads,
    rejecting invalid values before any network access. Each builder's
    `build(networking)` is the single hand-off to transport.

Module split:
    - `validation`: shared range, length and cardinality checks.
    - `chat`, `assistant`, `thread`, `run`, `file`: one builder per operation.
    - `listing`: pagination parameters for list endpoints.
"""

from assistantkit.builders.assistant import AssistantBuilder, AssistantFileBuilder
from assistantkit.builders.chat import ChatBuilder
from assistantkit.builders.file import FileBuilder
from assistantkit.builders.listing import list_params
from assistantkit.builders.run import RunBuilder
from assistantkit.builders.thread import MessageBuilder, ThreadBuilder

__all__ = [
    "AssistantBuilder",
    "AssistantFileBuilder",
    "ChatBuilder",
    "FileBuilder",
    "MessageBuilder",
    "RunBuilder",
    "ThreadBuilder",
    "list_params",
]
