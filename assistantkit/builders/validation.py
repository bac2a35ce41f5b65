"""Shared parameter checks used by every request builder.

Validation model:
    - Numeric ranges are inclusive at both ends.
    - String lengths are counted in characters.
    - List cardinality limits reject the oversized list; nothing is truncated.
    - Metadata maps are copied without semantic checks.

Each check returns the (possibly normalized) value so builders can validate
first and assign second; a failing check never leaves a partial update
behind.

Failure handling:
    - Range violations -> `OutOfRangeError`.
    - Length/cardinality violations -> `InvalidLengthError`.
    - Wrong types or unknown choices -> `RestrictedValueError`.
"""

import math

from pydantic import TypeAdapter, ValidationError

from assistantkit.core.errors import InvalidLengthError, OutOfRangeError, RestrictedValueError
from assistantkit.types.common import Tool

_TOOLS = TypeAdapter(list[Tool])


def check_range(name, value, minimum, maximum):
    """Return `value` if it lies in `[minimum, maximum]`, else raise."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RestrictedValueError(f"{name} must be a number (got {type(value).__name__})")
    if math.isnan(value) or not minimum <= value <= maximum:
        raise OutOfRangeError(name, value, minimum, maximum)
    return value


def check_int_range(name, value, minimum, maximum):
    """Like `check_range`, but also requires an integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise RestrictedValueError(f"{name} must be an integer (got {type(value).__name__})")
    return check_range(name, value, minimum, maximum)


def check_length(name, value, maximum):
    """Return `value` if it is a string of at most `maximum` characters."""
    if not isinstance(value, str):
        raise RestrictedValueError(f"{name} must be a string (got {type(value).__name__})")
    if len(value) > maximum:
        raise InvalidLengthError(len(value), maximum, name)
    return value


def check_count(name, items, maximum):
    """Return `items` as a new list if it holds at most `maximum` entries."""
    items = list(items)
    if len(items) > maximum:
        raise InvalidLengthError(len(items), maximum, name)
    return items


def check_choice(name, value, choices):
    if value not in choices:
        allowed = ", ".join(sorted(str(c) for c in choices))
        raise RestrictedValueError(f"{name} must be one of: {allowed} (got {value!r})")
    return value


def coerce_tools(tools):
    """Validate a list of `Tool` objects or tool dicts into `Tool` objects."""
    try:
        return _TOOLS.validate_python(list(tools))
    except ValidationError as e:
        raise RestrictedValueError(f"Invalid tool definition: {e}") from e


def copy_metadata(metadata):
    return dict(metadata)
