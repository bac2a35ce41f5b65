"""Shared resource shapes used across endpoints.

Architectural role:
    Holds the pydantic base classes every response shape derives from, plus
    the small value types (usage, tools, tool calls, list wrapper) that more
    than one resource embeds.

Immutability:
    All shapes are frozen. A resource is a snapshot received from the service;
    modifying it is a new round-trip that yields a new snapshot.

Identifier resolution:
    `Resource` implements `get_identifier()` once for every addressable type,
    so models, files, assistants, threads, messages and runs all satisfy
    `assistantkit.core.identifiers.Identifiable`.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class FrozenModel(BaseModel):
    """Immutable response shape that ignores fields it does not know."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class Resource(FrozenModel):
    """Addressable resource owning an immutable `id`."""

    id: str

    def get_identifier(self) -> str:
        return self.id


class ApiList(FrozenModel, Generic[T]):
    """List wrapper returned by every collection endpoint.

    `first_id`, `last_id` and `has_more` are only present on paginated
    collections (assistants, threads, messages, runs).
    """

    object: str = "list"
    data: list[T]
    first_id: str | None = None
    last_id: str | None = None
    has_more: bool | None = None

    def get_data_vec(self) -> list[T]:
        return self.data

    def __iter__(self):
        return iter(self.data)

    def __len__(self):
        return len(self.data)


class Usage(FrozenModel):
    completion_tokens: int = 0
    prompt_tokens: int = 0
    total_tokens: int = 0


class ToolType(str, Enum):
    CODE_INTERPRETER = "code_interpreter"
    RETRIEVAL = "retrieval"
    FUNCTION = "function"


class FunctionDefinition(FrozenModel):
    name: str
    description: str | None = None
    parameters: dict[str, Any] | None = None


class Tool(FrozenModel):
    """Tool enabled on an assistant, run or chat completion."""

    type: ToolType
    function: FunctionDefinition | None = None

    @classmethod
    def code_interpreter(cls):
        return cls(type=ToolType.CODE_INTERPRETER)

    @classmethod
    def retrieval(cls):
        return cls(type=ToolType.RETRIEVAL)

    @classmethod
    def function_tool(cls, name, description=None, parameters=None):
        return cls(
            type=ToolType.FUNCTION,
            function=FunctionDefinition(
                name=name,
                description=description,
                parameters=parameters,
            ),
        )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class ToolCallFunction(FrozenModel):
    name: str
    arguments: str = "{}"


class ToolCall(FrozenModel):
    """A tool invocation requested by the model."""

    id: str
    type: str = "function"
    function: ToolCallFunction
    index: int | None = None


class DeletionStatus(FrozenModel):
    id: str
    object: str
    deleted: bool
