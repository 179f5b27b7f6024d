# /app/services/need_helpers/filter_builder.py

"""
Translates the recognized query options into a single predicate over
SupplyRequest records. The same predicate narrows both the plain listing and
the two need reports.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from ...models.supply_request_model import GRADE_TOKENS, NeedQueryOptions, SupplyRequest
from ..errors import InvalidArgumentError

INVALID_GRADE_MESSAGE = "To find a supply request associated with a grade, use a valid grade option"


@dataclass(frozen=True)
class SupplyRequestFilter:
    """A compiled, reusable filter. Every present condition must hold."""
    school_pattern: Optional[re.Pattern] = None
    grade: Optional[str] = None
    item_pattern: Optional[re.Pattern] = None
    required_properties: Tuple[str, ...] = ()

    def matches(self, request: SupplyRequest) -> bool:
        if self.school_pattern is not None:
            if request.school is None or not self.school_pattern.search(request.school):
                return False
        if self.grade is not None and request.grade != self.grade:
            return False
        if self.item_pattern is not None:
            if request.item is None or not self.item_pattern.fullmatch(request.item):
                return False
        if self.required_properties:
            available = set(request.properties or [])
            if not all(prop in available for prop in self.required_properties):
                return False
        return True

    __call__ = matches


def validate_grade(grade: str) -> str:
    if grade not in GRADE_TOKENS:
        raise InvalidArgumentError(INVALID_GRADE_MESSAGE)
    return grade


def build_filter(options: NeedQueryOptions) -> SupplyRequestFilter:
    """
    Builds the predicate for the given options.

    - school: literal, case-insensitive substring match.
    - grade: verbatim equality with one of the grade tokens; anything else
      raises InvalidArgumentError.
    - item: literal, case-insensitive match of the whole item name, so
      "pencil" matches "Pencil" but not "pencil box".
    - properties: the request must carry every listed property.

    No options means every record matches.
    """
    school_pattern = None
    if options.school is not None:
        school_pattern = re.compile(re.escape(options.school), re.IGNORECASE)

    grade = None
    if options.grade is not None:
        grade = validate_grade(options.grade)

    item_pattern = None
    if options.item is not None:
        item_pattern = re.compile(re.escape(options.item), re.IGNORECASE)

    required_properties = tuple(dict.fromkeys(options.properties or []))

    return SupplyRequestFilter(
        school_pattern=school_pattern,
        grade=grade,
        item_pattern=item_pattern,
        required_properties=required_properties,
    )
