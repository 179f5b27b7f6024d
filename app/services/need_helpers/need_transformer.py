# /app/services/need_helpers/need_transformer.py

"""
Joins filtered supply requests against the StudentIndex and computes each
request's need contribution.
"""

from typing import Iterable, List, Optional

from ...models.supply_request_model import SupplyNeedContribution, SupplyRequest
from .student_index import StudentIndex


def to_contribution(request: SupplyRequest, index: StudentIndex) -> Optional[SupplyNeedContribution]:
    """
    Returns the request's contribution, or None when it adds no need:
    the item is missing or empty, or no students share its school and grade.
    """
    if not request.item:
        return None

    student_count = index.count(request.school, request.grade)
    if student_count == 0:
        return None

    return SupplyNeedContribution(
        id=request.id,
        school=request.school,
        grade=request.grade,
        item=request.item,
        properties=list(request.properties) if request.properties is not None else None,
        quantity=request.quantity,
        studentCount=student_count,
        count=request.quantity * student_count,
    )


def compute_contributions(requests: Iterable[SupplyRequest], index: StudentIndex) -> List[SupplyNeedContribution]:
    """Contributions in the order the requests were given."""
    contributions = []
    for request in requests:
        contribution = to_contribution(request, index)
        if contribution is not None:
            contributions.append(contribution)
    return contributions
