# /app/services/need_helpers/student_index.py

"""
Builds the (school, grade) -> student count lookup used as the join key for
need computation. The index is built once per query from the full student
set and is read-only afterwards.
"""

from typing import Dict, Iterable, Optional, Tuple
import pandas as pd

from ...models.supply_request_model import Student


class StudentIndex:
    def __init__(self, counts: Dict[Tuple[str, str], int]):
        self._counts = dict(counts)

    def count(self, school: Optional[str], grade: Optional[str]) -> int:
        """Exact, case-sensitive lookup. Unknown pairs have zero students."""
        return self._counts.get((school, grade), 0)

    def __len__(self) -> int:
        return len(self._counts)


def build_student_index(students: Iterable[Student]) -> StudentIndex:
    students_df = pd.DataFrame(
        [{"school": s.school, "grade": s.grade} for s in students],
        columns=["school", "grade"],
    )

    counts = {}
    if not students_df.empty:
        # Students with no school or grade can never match a request, so the
        # default dropna behaviour of groupby is what we want.
        grouped = students_df.groupby(["school", "grade"]).size().to_dict()
        counts = {(str(school), str(grade)): int(size) for (school, grade), size in grouped.items()}

    return StudentIndex(counts)
