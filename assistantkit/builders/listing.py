"""Pagination parameters for list endpoints.

`limit` must lie in [1, 100], `order` is `asc` or `desc`, and the `after` /
`before` cursors accept any identifier-resolvable value (a raw id or the
last resource of the previous page).
"""

from assistantkit.builders.validation import check_choice, check_int_range
from assistantkit.core.identifiers import get_optional_identifier

LIST_ORDERS = frozenset({"asc", "desc"})


def list_params(limit=None, order=None, after=None, before=None):
    """Validate pagination options into a query dict, or `None` when empty."""
    params = {}
    if limit is not None:
        params["limit"] = check_int_range("limit", limit, 1, 100)
    if order is not None:
        params["order"] = check_choice("order", order, LIST_ORDERS)
    if after is not None:
        params["after"] = get_optional_identifier(after)
    if before is not None:
        params["before"] = get_optional_identifier(before)
    return params or None
