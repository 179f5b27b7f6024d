# /app/routers/supply_requests_router.py

import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional

from ..models import supply_request_model
from ..services import need_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.errors import DataAccessError, InvalidArgumentError

logger = logging.getLogger(__name__)

# Two routers: one mounted at /api/supplyRequests, one at /api/supplyNeeds.
router = APIRouter()
needs_router = APIRouter()


def get_query_options(
    school: Optional[str] = None,
    grade: Optional[str] = None,
    item: Optional[str] = None,
    properties: Optional[List[str]] = Query(default=None),
) -> supply_request_model.NeedQueryOptions:
    """Collects the recognized filter options from the query string."""
    return supply_request_model.NeedQueryOptions(school=school, grade=grade, item=item, properties=properties)


def _data_access_failed(e: DataAccessError) -> HTTPException:
    logger.error("Data access failed: %s", e)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An error occurred while reading supply data.",
    )


# --- SUPPLY REQUEST ENDPOINTS (/api/supplyRequests) ---

@router.get("", response_model=List[supply_request_model.SupplyRequest], summary="List Supply Requests")
def get_supply_requests(
    options: supply_request_model.NeedQueryOptions = Depends(get_query_options),
    sortby: str = "grade",
    sortorder: str = "asc",
    db: DatabaseService = Depends(get_db_service),
):
    sort_order = supply_request_model.SortOrder.DESC if sortorder == "desc" else supply_request_model.SortOrder.ASC
    try:
        return need_service.list_supply_requests(options, db, sort_by=sortby, sort_order=sort_order)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DataAccessError as e:
        raise _data_access_failed(e)


@router.get("/{request_id}", response_model=supply_request_model.SupplyRequest, summary="Get a Single Supply Request")
def get_supply_request(request_id: str, db: DatabaseService = Depends(get_db_service)):
    try:
        supply_request = need_service.get_supply_request(request_id, db)
    except DataAccessError as e:
        raise _data_access_failed(e)
    if supply_request is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="The requested supplyRequest was not found")
    return supply_request


# --- SUPPLY NEED ENDPOINTS (/api/supplyNeeds) ---

@needs_router.get(
    "",
    response_model=List[supply_request_model.SupplyNeedContribution],
    summary="Calculate Supply Need",
    description="Per-request need: quantity times the students in the request's school and grade.",
)
def calculate_need(
    options: supply_request_model.NeedQueryOptions = Depends(get_query_options),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        return need_service.compute_need_contributions(options, db)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DataAccessError as e:
        raise _data_access_failed(e)


@needs_router.get(
    "/grouped",
    response_model=List[supply_request_model.SupplyNeedGroup],
    summary="Calculate Grouped Supply Need",
    description="Total need per (item, properties) pair with the contributing requests.",
)
def calculate_need_grouped(
    options: supply_request_model.NeedQueryOptions = Depends(get_query_options),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        return need_service.compute_need_groups(options, db)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DataAccessError as e:
        raise _data_access_failed(e)
