"""Builders for assistants and assistant files.

Parameter handling:
    - `model` is resolved through identifier resolution at construction, so a
      fetched `Model` and a raw model id are interchangeable.
    - `name` <= 256, `description` <= 512, `instructions` <= 32768 characters.
    - At most 128 tools and 20 file ids; adding past the limit is rejected.
    - `metadata` is copied without checks.

Interaction with transport:
    - `build(networking)` -> `POST assistants`.
    - `modify(networking, assistant)` -> `POST assistants/{id}` with the same
      payload, returning the new snapshot.
"""

from assistantkit.builders.base import RequestBuilder, compact
from assistantkit.builders.validation import check_count, check_length, coerce_tools, copy_metadata
from assistantkit.core.identifiers import IdentifierLike, get_identifier

MAX_NAME_LENGTH = 256
MAX_DESCRIPTION_LENGTH = 512
MAX_INSTRUCTIONS_LENGTH = 32768
MAX_TOOLS = 128
MAX_FILE_IDS = 20


class AssistantBuilder(RequestBuilder):
    """Accumulates and validates an assistant create/modify request."""

    def __init__(self, model):
        self.model = get_identifier(model)
        self.name = None
        self.description = None
        self.instructions = None
        self.tools = None
        self.file_ids = None
        self.metadata = None

    @classmethod
    def from_assistant(cls, assistant):
        """Seed a builder with the configuration of an existing assistant."""
        builder = cls(assistant.model)
        builder.name = assistant.name
        builder.description = assistant.description
        builder.instructions = assistant.instructions
        builder.tools = list(assistant.tools)
        builder.file_ids = list(assistant.file_ids)
        builder.metadata = dict(assistant.metadata)
        return builder

    def with_model(self, model: IdentifierLike) -> "AssistantBuilder":
        self.model = get_identifier(model)
        return self

    def with_name(self, name: str) -> "AssistantBuilder":
        self.name = check_length("name", name, MAX_NAME_LENGTH)
        return self

    def with_description(self, description: str) -> "AssistantBuilder":
        self.description = check_length("description", description, MAX_DESCRIPTION_LENGTH)
        return self

    def with_instructions(self, instructions: str) -> "AssistantBuilder":
        self.instructions = check_length("instructions", instructions, MAX_INSTRUCTIONS_LENGTH)
        return self

    def with_tools(self, tools) -> "AssistantBuilder":
        self.tools = check_count("tools", coerce_tools(tools), MAX_TOOLS)
        return self

    def add_tool(self, tool) -> "AssistantBuilder":
        current = self.tools or []
        self.tools = check_count("tools", [*current, *coerce_tools([tool])], MAX_TOOLS)
        return self

    def with_file_ids(self, file_ids: list[IdentifierLike]) -> "AssistantBuilder":
        """Replace the attached file ids; at most 20, given as ids or `File` objects."""
        resolved = [get_identifier(file_id) for file_id in file_ids]
        self.file_ids = check_count("file_ids", resolved, MAX_FILE_IDS)
        return self

    def add_file_id(self, file_id: IdentifierLike) -> "AssistantBuilder":
        current = self.file_ids or []
        self.file_ids = check_count("file_ids", [*current, get_identifier(file_id)], MAX_FILE_IDS)
        return self

    def with_metadata(self, metadata: dict) -> "AssistantBuilder":
        self.metadata = copy_metadata(metadata)
        return self

    def to_payload(self) -> dict:
        tools = None
        if self.tools is not None:
            tools = [tool.to_payload() for tool in self.tools]
        return compact({
            "model": self.model,
            "name": self.name,
            "description": self.description,
            "instructions": self.instructions,
            "tools": tools,
            "file_ids": self.file_ids,
            "metadata": self.metadata,
        })

    def build(self, networking):
        return networking.create_assistant(self.to_payload())

    def modify(self, networking, assistant):
        return networking.modify_assistant(get_identifier(assistant), self.to_payload())


class AssistantFileBuilder(RequestBuilder):
    """Attaches an uploaded file to an assistant."""

    def __init__(self, assistant, file):
        self.assistant_id = get_identifier(assistant)
        self.file_id = get_identifier(file)

    def to_payload(self) -> dict:
        return {"file_id": self.file_id}

    def build(self, networking):
        return networking.create_assistant_file(self.assistant_id, self.to_payload())
