"""Thread resource shape: a persisted conversation that messages and runs attach to."""

from assistantkit.types.common import Resource


class Thread(Resource):
    object: str = "thread"
    created_at: int
    metadata: dict[str, str] = {}
