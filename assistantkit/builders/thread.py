"""Builders for threads and thread messages.

Parameter handling:
    - Message role is always `user`; the service only accepts user messages
      on creation.
    - A message references at most 10 files.
    - The owning thread of a `MessageBuilder` is resolved at construction.
    - `metadata` is copied without checks.

Interaction with transport:
    - `ThreadBuilder.build` -> `POST threads` (optionally with initial messages).
    - `MessageBuilder.build` -> `POST threads/{thread_id}/messages`.
    A `ThreadBuilder` can also be embedded in a `RunBuilder` to create a
    thread and a run in one call.
"""

from assistantkit.builders.base import RequestBuilder, compact
from assistantkit.builders.validation import check_count, copy_metadata
from assistantkit.core.errors import RestrictedValueError
from assistantkit.core.identifiers import IdentifierLike, get_identifier
from assistantkit.types.message import MessageRole

MAX_MESSAGE_FILE_IDS = 10


def _message_payload(content, file_ids, metadata):
    if not isinstance(content, str) or not content:
        raise RestrictedValueError("Message content must be a non-empty string")
    return compact({
        "role": MessageRole.USER.value,
        "content": content,
        "file_ids": file_ids,
        "metadata": metadata,
    })


class ThreadBuilder(RequestBuilder):
    """Accumulates the initial messages and metadata of a new thread."""

    def __init__(self):
        self.messages = []
        self.metadata = None

    def add_message(
        self,
        content: str,
        file_ids: list[IdentifierLike] | None = None,
        metadata: dict | None = None,
    ) -> "ThreadBuilder":
        """Append a user message; `file_ids` holds at most 10 entries."""
        if file_ids is not None:
            file_ids = check_count(
                "file_ids", [get_identifier(f) for f in file_ids], MAX_MESSAGE_FILE_IDS
            )
        if metadata is not None:
            metadata = copy_metadata(metadata)
        self.messages.append(_message_payload(content, file_ids, metadata))
        return self

    def with_messages(self, messages: list[str]) -> "ThreadBuilder":
        """Replace the initial messages with plain content strings."""
        self.messages = [_message_payload(content, None, None) for content in messages]
        return self

    def with_metadata(self, metadata: dict) -> "ThreadBuilder":
        self.metadata = copy_metadata(metadata)
        return self

    def to_payload(self) -> dict:
        return compact({
            "messages": self.messages or None,
            "metadata": self.metadata,
        })

    def build(self, networking):
        return networking.create_thread(self.to_payload())


class MessageBuilder(RequestBuilder):
    """Accumulates a user message to append to an existing thread."""

    def __init__(self, thread, content):
        self.thread_id = get_identifier(thread)
        _message_payload(content, None, None)
        self.content = content
        self.file_ids = None
        self.metadata = None

    def with_file_ids(self, file_ids: list[IdentifierLike]) -> "MessageBuilder":
        resolved = [get_identifier(file_id) for file_id in file_ids]
        self.file_ids = check_count("file_ids", resolved, MAX_MESSAGE_FILE_IDS)
        return self

    def add_file_id(self, file_id: IdentifierLike) -> "MessageBuilder":
        current = self.file_ids or []
        self.file_ids = check_count(
            "file_ids", [*current, get_identifier(file_id)], MAX_MESSAGE_FILE_IDS
        )
        return self

    def with_metadata(self, metadata: dict) -> "MessageBuilder":
        self.metadata = copy_metadata(metadata)
        return self

    def to_payload(self) -> dict:
        return _message_payload(self.content, self.file_ids, self.metadata)

    def build(self, networking):
        return networking.create_message(self.thread_id, self.to_payload())
