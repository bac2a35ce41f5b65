"""Assistant resource shapes.

An assistant bundles a model, instructions and tools, and is the entity a
run executes against a thread.
"""

from assistantkit.types.common import Resource, Tool


class Assistant(Resource):
    object: str = "assistant"
    created_at: int
    name: str | None = None
    description: str | None = None
    model: str
    instructions: str | None = None
    tools: list[Tool] = []
    file_ids: list[str] = []
    metadata: dict[str, str] = {}


class AssistantFile(Resource):
    object: str = "assistant.file"
    created_at: int
    assistant_id: str
