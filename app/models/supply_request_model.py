# /app/models/supply_request_model.py

"""
Pydantic data contracts for supply requests, students, and the derived
need reports.

Raw records are validated into these models at the data-access boundary, so
the "missing quantity counts as zero" rule lives here and nowhere else.
"""

from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Optional
from enum import Enum


# --- Core Enumerations ---
class GradeLevel(str, Enum):
    PRE_K = "Pre K"
    KINDERGARTEN = "kindergarten"
    FIRST = "1"
    SECOND = "2"
    THIRD = "3"
    FOURTH = "4"
    FIFTH = "5"
    SIXTH = "6"
    SEVENTH = "7"
    HIGH_SCHOOL = "HS"

GRADE_TOKENS = frozenset(grade.value for grade in GradeLevel)


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# --- Raw Input Records ---

class Student(BaseModel):
    """A single enrolled student. Only (school, grade) matters to need computation."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str = Field(..., alias="_id")
    first: Optional[str] = None
    last: Optional[str] = None
    school: Optional[str] = None
    grade: Optional[str] = None


class SupplyRequest(BaseModel):
    """
    A teacher's request for a per-student amount of one item, scoped to a
    school and grade.
    """
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str = Field(..., alias="_id")
    school: Optional[str] = None
    grade: Optional[str] = None
    teacher: Optional[str] = None
    description: Optional[str] = None
    item: Optional[str] = None
    properties: Optional[List[str]] = None
    quantity: int = Field(default=0, ge=0, description="Per-student amount needed.")
    notes: Optional[str] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def _missing_quantity_is_zero(cls, value):
        return 0 if value is None else value


# --- Query Options ---

class NeedQueryOptions(BaseModel):
    """
    The recognized filter options for supply requests. Unknown keys are
    ignored; the grade token is checked by the filter builder, not here, so
    an invalid grade surfaces as InvalidArgumentError.
    """
    model_config = ConfigDict(extra="ignore")

    school: Optional[str] = None
    grade: Optional[str] = None
    item: Optional[str] = None
    properties: Optional[List[str]] = None


# --- Derived Need Reports ---

class SupplyNeedContribution(BaseModel):
    """One supply request's share of the total need."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    school: Optional[str] = None
    grade: Optional[str] = None
    item: str
    properties: Optional[List[str]] = None
    quantity: int = Field(..., ge=0)
    studentCount: int = Field(..., gt=0, description="Students sharing the request's school and grade.")
    count: int = Field(..., ge=0, description="quantity * studentCount")


class SupplyNeedGroup(BaseModel):
    """Total need for one (item, properties) pair plus the requests behind it."""
    item: str
    properties: List[str] = Field(default_factory=list)
    totalCount: int = Field(..., ge=0)
    contributions: List[SupplyNeedContribution] = Field(default_factory=list)
