"""Builder for file uploads (`POST files`, multipart).

Processing flow:
    1. Validate at construction that the path names an existing regular file.
    2. Validate the purpose against `FilePurpose`.
    3. On `build`, stream the file as the `file` part with a `purpose` field.

Size validation:
    No local size limit is enforced; the service rejects oversized uploads.
"""

from pathlib import Path

from assistantkit.builders.base import RequestBuilder
from assistantkit.core.errors import RestrictedValueError
from assistantkit.types.file import FilePurpose


def _coerce_purpose(purpose):
    try:
        return FilePurpose(purpose)
    except ValueError as e:
        allowed = ", ".join(p.value for p in FilePurpose)
        raise RestrictedValueError(f"File purpose must be one of: {allowed} (got {purpose!r})") from e


class FileBuilder(RequestBuilder):
    def __init__(self, file, purpose=FilePurpose.ASSISTANTS):
        path = Path(file)
        if not path.is_file():
            raise RestrictedValueError(f"File not found or not a regular file: {path}")
        self.file = path
        self.purpose = _coerce_purpose(purpose)

    def with_purpose(self, purpose: FilePurpose | str) -> "FileBuilder":
        self.purpose = _coerce_purpose(purpose)
        return self

    def to_payload(self) -> dict:
        return {"purpose": self.purpose.value, "file": str(self.file)}

    def build(self, networking):
        return networking.upload_file(self.file, self.purpose.value)
