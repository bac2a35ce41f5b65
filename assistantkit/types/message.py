"""Message shapes for threads and chat completions.

Two families live here:
    - Thread messages (`Message`, `MessageFile`) returned by the
      `threads/{id}/messages` endpoints. Their `content` is a list of parts,
      each a tagged union on `type` (`text` or `image_file`); text parts carry
      annotations, themselves tagged on `type` (`file_citation`, `file_path`).
    - Chat completion input messages (`CompletionMessage`), a tagged union on
      `role` (`system`, `user`, `assistant`, `tool`).

Tagged unions:
    Every variant carries its discriminant as a literal field, so code always
    switches on an explicit tag. The wire format has the same field, which
    keeps (de)serialization a plain `model_dump` / `model_validate`.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import Field

from assistantkit.types.common import FrozenModel, Resource, ToolCall


class MessageRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


# ============================================================
# Thread message content
# ============================================================

class FileCitation(FrozenModel):
    file_id: str
    quote: str | None = None


class FileCitationAnnotation(FrozenModel):
    type: Literal["file_citation"] = "file_citation"
    text: str
    file_citation: FileCitation
    start_index: int
    end_index: int


class FilePathLocation(FrozenModel):
    file_id: str


class FilePathAnnotation(FrozenModel):
    type: Literal["file_path"] = "file_path"
    text: str
    file_path: FilePathLocation
    start_index: int
    end_index: int


Annotation = Annotated[
    Union[FileCitationAnnotation, FilePathAnnotation],
    Field(discriminator="type"),
]


class TextValue(FrozenModel):
    value: str
    annotations: list[Annotation] = []


class TextContent(FrozenModel):
    type: Literal["text"] = "text"
    text: TextValue


class ImageFile(FrozenModel):
    file_id: str


class ImageFileContent(FrozenModel):
    type: Literal["image_file"] = "image_file"
    image_file: ImageFile


MessageContent = Annotated[
    Union[TextContent, ImageFileContent],
    Field(discriminator="type"),
]


class Message(Resource):
    object: str = "thread.message"
    created_at: int
    thread_id: str
    role: MessageRole
    content: list[MessageContent] = []
    assistant_id: str | None = None
    run_id: str | None = None
    file_ids: list[str] = []
    metadata: dict[str, str] = {}

    def text(self) -> str:
        """Concatenate the values of every text part, ignoring images."""
        return "\n".join(
            part.text.value for part in self.content if part.type == "text"
        )


class MessageFile(Resource):
    object: str = "thread.message.file"
    created_at: int
    message_id: str


# ============================================================
# Chat completion input messages
# ============================================================

class SystemMessage(FrozenModel):
    role: Literal["system"] = "system"
    content: str
    name: str | None = None


class UserMessage(FrozenModel):
    role: Literal["user"] = "user"
    content: str
    name: str | None = None


class AssistantMessage(FrozenModel):
    role: Literal["assistant"] = "assistant"
    content: str | None = None
    name: str | None = None
    tool_calls: list[ToolCall] | None = None


class ToolMessage(FrozenModel):
    role: Literal["tool"] = "tool"
    content: str
    tool_call_id: str


CompletionMessage = Annotated[
    Union[SystemMessage, UserMessage, AssistantMessage, ToolMessage],
    Field(discriminator="role"),
]
