"""Builder for run creation.

Addressing:
    - `assistant` is required and resolved at construction.
    - `thread` is optional. With a thread the request goes to
      `POST threads/{thread_id}/runs`; without one it goes to
      `POST threads/runs`, which creates the thread and the run together
      (optionally seeded through `with_thread`).

Parameter handling:
    - `model` override resolved through identifier resolution.
    - `instructions` and `additional_instructions` <= 32768 characters.
    - At most 128 tools.
    - `metadata` copied without checks.

The payload never contains the thread id; it travels in the endpoint path.
The builder holds no transport handle: `build(networking)` receives one and
returns the created `Run`, which then belongs to the lifecycle controller.
"""

from assistantkit.builders.base import RequestBuilder, compact
from assistantkit.builders.thread import ThreadBuilder
from assistantkit.builders.validation import check_count, check_length, coerce_tools, copy_metadata
from assistantkit.core.errors import RestrictedValueError
from assistantkit.core.identifiers import IdentifierLike, get_identifier, get_optional_identifier

MAX_INSTRUCTIONS_LENGTH = 32768
MAX_TOOLS = 128


class RunBuilder(RequestBuilder):
    """Accumulates and validates a run creation request."""

    def __init__(self, assistant, thread=None):
        self.assistant_id = get_identifier(assistant)
        self.thread_id = get_optional_identifier(thread)
        self.thread = None
        self.model = None
        self.instructions = None
        self.additional_instructions = None
        self.tools = None
        self.metadata = None

    def with_thread(self, thread_builder: ThreadBuilder) -> "RunBuilder":
        """Seed the thread created alongside the run (`threads/runs` only)."""
        if self.thread_id is not None:
            raise RestrictedValueError(
                f"Run already targets thread {self.thread_id}; an initial thread cannot be attached"
            )
        self.thread = thread_builder.to_payload()
        return self

    def with_model(self, model: IdentifierLike) -> "RunBuilder":
        self.model = get_identifier(model)
        return self

    def with_instructions(self, instructions: str) -> "RunBuilder":
        self.instructions = check_length("instructions", instructions, MAX_INSTRUCTIONS_LENGTH)
        return self

    def with_additional_instructions(self, additional_instructions: str) -> "RunBuilder":
        """Append to the assistant's instructions for this run only."""
        self.additional_instructions = check_length(
            "additional_instructions", additional_instructions, MAX_INSTRUCTIONS_LENGTH
        )
        return self

    def with_tools(self, tools) -> "RunBuilder":
        self.tools = check_count("tools", coerce_tools(tools), MAX_TOOLS)
        return self

    def add_tool(self, tool) -> "RunBuilder":
        current = self.tools or []
        self.tools = check_count("tools", [*current, *coerce_tools([tool])], MAX_TOOLS)
        return self

    def with_metadata(self, metadata: dict) -> "RunBuilder":
        self.metadata = copy_metadata(metadata)
        return self

    def to_payload(self) -> dict:
        tools = None
        if self.tools is not None:
            tools = [tool.to_payload() for tool in self.tools]
        return compact({
            "assistant_id": self.assistant_id,
            "thread": self.thread,
            "model": self.model,
            "instructions": self.instructions,
            "additional_instructions": self.additional_instructions,
            "tools": tools,
            "metadata": self.metadata,
        })

    def build(self, networking):
        return networking.create_run(self.to_payload(), self.thread_id)
