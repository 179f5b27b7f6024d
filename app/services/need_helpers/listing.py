# /app/services/need_helpers/listing.py

"""Sorting for the plain supply request listing (not the need reports)."""

from typing import Any, List, Tuple

from ...models.supply_request_model import SortOrder, SupplyRequest

DEFAULT_SORT_FIELD = "grade"


def _sort_key(request: SupplyRequest, field: str) -> Tuple[int, Any]:
    # Null values sort before present ones.
    value = getattr(request, field, None)
    if value is None:
        return (0, "")
    return (1, value)


def sort_requests(
    requests: List[SupplyRequest],
    sort_by: str = DEFAULT_SORT_FIELD,
    sort_order: SortOrder = SortOrder.ASC,
) -> List[SupplyRequest]:
    field = "id" if sort_by == "_id" else sort_by
    # Unknown fields are a no-op rather than an error.
    if field not in SupplyRequest.model_fields:
        return list(requests)
    return sorted(
        requests,
        key=lambda r: _sort_key(r, field),
        reverse=(sort_order == SortOrder.DESC),
    )
