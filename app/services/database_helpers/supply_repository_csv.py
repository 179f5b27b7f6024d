# /app/services/database_helpers/supply_repository_csv.py

"""
CSV-backed repository for local development. Students and supply requests
live in two flat files under DATA_DIR; the `properties` column holds a
JSON-encoded list.
"""

import json
import logging
import os
from typing import Callable, Dict, List, Optional
import pandas as pd
from pydantic import ValidationError

from app.models import supply_request_model
from ..errors import DataAccessError

logger = logging.getLogger(__name__)

DATA_DIR = os.getenv("DATA_DIR", "app/data")
STUDENTS_DB_PATH = f"{DATA_DIR}/students.csv"
SUPPLY_REQUESTS_DB_PATH = f"{DATA_DIR}/supply_requests.csv"

STUDENT_COLUMNS = ["id", "first", "last", "school", "grade"]
SUPPLY_REQUEST_COLUMNS = ["id", "school", "grade", "teacher", "description", "item", "properties", "quantity", "notes"]


def _has_rows(path: str) -> bool:
    # A missing or zero-byte file is an empty table.
    return os.path.exists(path) and os.path.getsize(path) > 0


def _load_frame(path: str) -> pd.DataFrame:
    # Only blank cells are missing; "NA", "null" and friends are real values.
    return pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[""])


def _read_records(path: str, columns: List[str]) -> List[Dict]:
    """Reads a CSV into a list of dicts, with blank cells as None."""
    if not _has_rows(path):
        return []
    df = _load_frame(path)
    for column in columns:
        if column not in df.columns:
            df[column] = None
    df = df[columns].astype(object).where(pd.notna(df[columns]), None)
    return df.to_dict(orient="records")


def _append_record(path: str, columns: List[str], record: Dict):
    existing = _load_frame(path) if _has_rows(path) else pd.DataFrame(columns=columns)
    row = pd.DataFrame([{c: record.get(c) for c in columns}], columns=columns)
    pd.concat([existing, row], ignore_index=True).to_csv(path, index=False)


def _decode_properties(raw: Optional[str]) -> Optional[List[str]]:
    if raw is None or raw == "":
        return None
    return json.loads(raw)


class SupplyRepositoryCSV:
    def __init__(self):
        self.students_path = STUDENTS_DB_PATH
        self.supply_requests_path = SUPPLY_REQUESTS_DB_PATH

    # --- Supply Request Methods ---

    def _load_supply_requests(self) -> List[supply_request_model.SupplyRequest]:
        try:
            records = _read_records(self.supply_requests_path, SUPPLY_REQUEST_COLUMNS)
            for record in records:
                record["properties"] = _decode_properties(record.get("properties"))
            return [supply_request_model.SupplyRequest.model_validate(r) for r in records]
        except (OSError, ValueError, pd.errors.ParserError) as e:
            logger.error("Failed to read supply requests from %s: %s", self.supply_requests_path, e)
            raise DataAccessError("Failed to read supply requests.") from e

    def list_supply_requests(
        self,
        predicate: Optional[Callable[[supply_request_model.SupplyRequest], bool]] = None,
    ) -> List[supply_request_model.SupplyRequest]:
        requests = self._load_supply_requests()
        if predicate is None:
            return requests
        return [r for r in requests if predicate(r)]

    def get_supply_request_by_id(self, request_id: str) -> Optional[supply_request_model.SupplyRequest]:
        return next((r for r in self._load_supply_requests() if r.id == request_id), None)

    def add_supply_request(self, record: Dict) -> Dict:
        to_write = dict(record)
        if to_write.get("properties") is not None:
            to_write["properties"] = json.dumps(to_write["properties"])
        _append_record(self.supply_requests_path, SUPPLY_REQUEST_COLUMNS, to_write)
        return record

    # --- Student Methods ---

    def list_all_students(self) -> List[supply_request_model.Student]:
        try:
            records = _read_records(self.students_path, STUDENT_COLUMNS)
            return [supply_request_model.Student.model_validate(r) for r in records]
        except (OSError, ValueError, pd.errors.ParserError) as e:
            logger.error("Failed to read students from %s: %s", self.students_path, e)
            raise DataAccessError("Failed to read students.") from e

    def add_student(self, record: Dict) -> Dict:
        _append_record(self.students_path, STUDENT_COLUMNS, record)
        return record
