# /app/services/need_service.py

"""
Business logic layer for supply requests and the need reports built from
them.

Every computation follows the same steps:
1. Build the request filter from the options. An invalid grade fails here,
   before anything is read.
2. Read the student roster and build the StudentIndex once.
3. Read the supply requests the filter accepts.
4. Join, then shape the result as a flat or grouped report.

The two reads are not taken from one atomic snapshot; a student added
between them may or may not be counted.
"""

import logging
from typing import List, Optional

from ..models.supply_request_model import (
    NeedQueryOptions,
    SortOrder,
    SupplyNeedContribution,
    SupplyNeedGroup,
    SupplyRequest,
)
from .database_service import DatabaseService
from .need_helpers import filter_builder, listing, need_transformer, reporters
from .need_helpers.student_index import build_student_index

logger = logging.getLogger(__name__)


def _collect_contributions(options: NeedQueryOptions, db: DatabaseService) -> List[SupplyNeedContribution]:
    request_filter = filter_builder.build_filter(options)

    students = db.list_all_students()
    index = build_student_index(students)

    requests = db.list_supply_requests(request_filter)
    contributions = need_transformer.compute_contributions(requests, index)

    logger.info(
        "Need computed from %d supply requests and %d students (%d school/grade pairs): %d contributions",
        len(requests), len(students), len(index), len(contributions),
    )
    return contributions


def compute_need_contributions(options: NeedQueryOptions, db: DatabaseService) -> List[SupplyNeedContribution]:
    """The flat need report, ordered by item then quantity."""
    return reporters.flat_report(_collect_contributions(options, db))


def compute_need_groups(options: NeedQueryOptions, db: DatabaseService) -> List[SupplyNeedGroup]:
    """The need report grouped by (item, properties), ordered by item then totalCount descending."""
    groups = reporters.grouped_report(_collect_contributions(options, db))
    logger.info("Grouped need report has %d groups", len(groups))
    return groups


def list_supply_requests(
    options: NeedQueryOptions,
    db: DatabaseService,
    sort_by: Optional[str] = None,
    sort_order: Optional[SortOrder] = None,
) -> List[SupplyRequest]:
    request_filter = filter_builder.build_filter(options)
    requests = db.list_supply_requests(request_filter)
    return listing.sort_requests(
        requests,
        sort_by=sort_by or listing.DEFAULT_SORT_FIELD,
        sort_order=sort_order or SortOrder.ASC,
    )


def get_supply_request(request_id: str, db: DatabaseService) -> Optional[SupplyRequest]:
    return db.get_supply_request_by_id(request_id)
