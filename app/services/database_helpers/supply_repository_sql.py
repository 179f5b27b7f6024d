# /app/services/database_helpers/supply_repository_sql.py

"""
SQLAlchemy queries for the Student and SupplyRequest tables. Rows are
validated into the pydantic contracts before they leave this module, and
any database failure is re-raised as DataAccessError.
"""

import logging
from typing import Callable, Dict, List, Optional
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.models.supply_models import Student, SupplyRequest
from app.models import supply_request_model
from ..errors import DataAccessError

logger = logging.getLogger(__name__)


def _row_to_dict(obj) -> Dict:
    return {c.name: getattr(obj, c.name) for c in obj.__table__.columns}


class SupplyRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- Supply Request Methods ---

    def list_supply_requests(
        self,
        predicate: Optional[Callable[[supply_request_model.SupplyRequest], bool]] = None,
    ) -> List[supply_request_model.SupplyRequest]:
        """Returns every supply request the predicate accepts, ordered by id."""
        try:
            rows = self.db.query(SupplyRequest).order_by(SupplyRequest.id).all()
            requests = [supply_request_model.SupplyRequest.model_validate(_row_to_dict(r)) for r in rows]
        except (SQLAlchemyError, ValidationError) as e:
            logger.error("Failed to read supply requests: %s", e)
            raise DataAccessError("Failed to read supply requests.") from e
        if predicate is None:
            return requests
        return [r for r in requests if predicate(r)]

    def get_supply_request_by_id(self, request_id: str) -> Optional[supply_request_model.SupplyRequest]:
        try:
            row = self.db.query(SupplyRequest).filter(SupplyRequest.id == request_id).first()
            return supply_request_model.SupplyRequest.model_validate(_row_to_dict(row)) if row else None
        except (SQLAlchemyError, ValidationError) as e:
            logger.error("Failed to read supply request %s: %s", request_id, e)
            raise DataAccessError(f"Failed to read supply request {request_id}.") from e

    def add_supply_request(self, record: Dict) -> SupplyRequest:
        new_request = SupplyRequest(**record)
        self.db.add(new_request)
        self.db.commit()
        self.db.refresh(new_request)
        return new_request

    # --- Student Methods ---

    def list_all_students(self) -> List[supply_request_model.Student]:
        try:
            rows = self.db.query(Student).all()
            return [supply_request_model.Student.model_validate(_row_to_dict(s)) for s in rows]
        except (SQLAlchemyError, ValidationError) as e:
            logger.error("Failed to read students: %s", e)
            raise DataAccessError("Failed to read students.") from e

    def add_student(self, record: Dict) -> Student:
        new_student = Student(**record)
        self.db.add(new_student)
        self.db.commit()
        self.db.refresh(new_student)
        return new_student
