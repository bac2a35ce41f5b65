"""assistantkit: typed client for an assistants-style conversational AI service.

Architectural role:
    Exposes stateful resources (models, files, assistants, threads, messages,
    runs) through validated request builders, a blocking JSON transport, and
    a run lifecycle controller that polls asynchronous runs to completion.

Package split:
    - `core`: error taxonomy, identifier resolution, `OpenAIClient` facade.
    - `networking`: configuration and HTTP transport.
    - `builders`: request builders and parameter validation.
    - `types`: typed, immutable resource shapes.
    - `runs`: run lifecycle controller and polling policy.
    - `api`: thin command-line adapter.
"""

from assistantkit.builders import (
    AssistantBuilder,
    AssistantFileBuilder,
    ChatBuilder,
    FileBuilder,
    MessageBuilder,
    RunBuilder,
    ThreadBuilder,
)
from assistantkit.core.client import OpenAIClient
from assistantkit.core.identifiers import Identifiable, get_identifier
from assistantkit.networking import ClientSettings, Networking
from assistantkit.runs import PollPolicy, RunController

__all__ = [
    "AssistantBuilder",
    "AssistantFileBuilder",
    "ChatBuilder",
    "ClientSettings",
    "FileBuilder",
    "Identifiable",
    "MessageBuilder",
    "Networking",
    "OpenAIClient",
    "PollPolicy",
    "RunBuilder",
    "RunController",
    "ThreadBuilder",
    "get_identifier",
]
