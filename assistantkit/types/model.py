"""Model resource shape (`GET models`, `GET models/{id}`)."""

from assistantkit.types.common import Resource


class Model(Resource):
    object: str = "model"
    created: int
    owned_by: str
