"""File resource shapes (`files` endpoints)."""

from enum import Enum

from assistantkit.types.common import Resource


class FilePurpose(str, Enum):
    """Intended use of an uploaded file, sent as the multipart `purpose` field."""

    FINE_TUNE = "fine-tune"
    ASSISTANTS = "assistants"


class File(Resource):
    object: str = "file"
    bytes: int
    created_at: int
    filename: str
    purpose: str
