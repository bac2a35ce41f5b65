"""Common behaviour of request builders.

Builder contract:
    - Chained `with_*` / `add_*` calls mutate the builder and return it.
    - Checks run before assignment, so a rejected call leaves the builder
      exactly as it was and still usable.
    - `to_payload()` assembles a fresh JSON-ready dict each call; the caller
      may mutate it freely.
    - `build(networking)` is the only operation that performs I/O. It reads
      the builder without changing it, so the same builder can be rebuilt or
      retried.
"""

import copy


def compact(payload):
    """Drop keys whose value is `None` and deep-copy the rest."""
    return {key: copy.deepcopy(value) for key, value in payload.items() if value is not None}


class RequestBuilder:
    """Base class for every request builder."""

    def to_payload(self) -> dict:
        raise NotImplementedError

    def build(self, networking):
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}({self.to_payload()!r})"
