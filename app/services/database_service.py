# /app/services/database_service.py

import os
from typing import Callable, Dict, List, Optional, Generator
from sqlalchemy.orm import Session
from fastapi import Depends

# --- Core Database Setup ---
from app.db.database import get_db

# --- Repository Imports ---
from .database_helpers.supply_repository_sql import SupplyRepositorySQL
from .database_helpers.supply_repository_csv import SupplyRepositoryCSV
from ..models.supply_request_model import Student, SupplyRequest

# Determine which data source to use based on an environment variable
USE_POSTGRES = os.getenv("USE_POSTGRES", "false").lower() == "true"


class DatabaseService:
    def __init__(self, db_session: Optional[Session] = None):
        """
        Initializes the DatabaseService.
        If USE_POSTGRES is true, it requires a db_session.
        Otherwise, it falls back to the CSV-based repository.
        """
        if USE_POSTGRES:
            if not db_session:
                raise ValueError("A database session is required when USE_POSTGRES is true.")
            self.supply_repo = SupplyRepositorySQL(db_session)
        else:
            self.supply_repo = SupplyRepositoryCSV()

    # --- SUPPLY REQUEST METHODS (DELEGATED) ---
    def list_supply_requests(self, predicate: Optional[Callable[[SupplyRequest], bool]] = None) -> List[SupplyRequest]: return self.supply_repo.list_supply_requests(predicate)
    def get_supply_request_by_id(self, request_id: str) -> Optional[SupplyRequest]: return self.supply_repo.get_supply_request_by_id(request_id)
    def add_supply_request(self, record: Dict): return self.supply_repo.add_supply_request(record)

    # --- STUDENT METHODS (DELEGATED) ---
    def list_all_students(self) -> List[Student]: return self.supply_repo.list_all_students()
    def add_student(self, record: Dict): return self.supply_repo.add_student(record)


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """
    FastAPI dependency that provides a DatabaseService instance.
    It decides whether to use the SQL database or the CSV files.
    """
    yield DatabaseService(db_session=db if USE_POSTGRES else None)
