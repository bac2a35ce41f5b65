"""Identifier resolution for addressable resources.

Architectural role:
    Every builder and every client/controller operation accepts "anything
    identifier-resolvable" instead of a pre-converted string. This module is
    the one place that turns such a value into the canonical string id used
    in endpoint paths and request payloads.

Accepted inputs:
    - `str` values (and `str` subclasses) are identifiers already and are
      returned unchanged.
    - Any object implementing `Identifiable` (every resource model does, via
      `assistantkit.types.common.Resource`) returns its own `id`.

    Python has no owned/borrowed split: a second name bound to a resource is
    the same object and goes through the same `get_identifier` call, so the
    two forms cannot drift apart.

Failure handling:
    Unsupported types and empty identifiers raise `InvalidIdentifierError`
    immediately, before a payload is assembled or a request is sent.
"""

from typing import Protocol, Union, runtime_checkable

from assistantkit.core.errors import InvalidIdentifierError


@runtime_checkable
class Identifiable(Protocol):
    """Capability of producing a canonical string identifier."""

    def get_identifier(self) -> str:
        ...


IdentifierLike = Union[str, Identifiable]


def get_identifier(value: IdentifierLike) -> str:
    """Resolve `value` into its canonical string identifier.

    Args:
        value: Raw id string or any `Identifiable` resource.

    Returns:
        The identifier string. Has no side effects.

    Raises:
        InvalidIdentifierError: `value` is neither a string nor identifiable,
            or resolves to an empty identifier.
    """
    if isinstance(value, str):
        identifier = str(value)
    elif isinstance(value, Identifiable):
        identifier = value.get_identifier()
    else:
        raise InvalidIdentifierError(
            f"Cannot resolve an identifier from {type(value).__name__}"
        )

    if not isinstance(identifier, str) or not identifier:
        raise InvalidIdentifierError(f"Empty identifier resolved from {value!r}")
    return identifier


def get_optional_identifier(value):
    """Resolve `value` when present, passing `None` through."""
    if value is None:
        return None
    return get_identifier(value)
