# /tests/test_need_service.py

import pytest
from unittest.mock import MagicMock

from app.services import need_service
from app.services.errors import DataAccessError, InvalidArgumentError
from app.models.supply_request_model import NeedQueryOptions, SupplyRequest, Student, SortOrder

# --- Test Data Fixtures ---

def make_students(school: str, grade: str, n: int):
    return [Student.model_validate({"_id": f"stu_{school}_{grade}_{i}", "first": "S", "last": str(i), "school": school, "grade": grade}) for i in range(n)]


def make_request(request_id: str, **fields) -> SupplyRequest:
    record = {"_id": request_id, "school": "Lincoln", "grade": "3", "teacher": "Ms. Moe", "item": "pencil", "properties": [], "quantity": 1}
    record.update(fields)
    return SupplyRequest.model_validate(record)


def mock_db_with(students, requests) -> MagicMock:
    """A DatabaseService mock whose request listing honours the given predicate."""
    db = MagicMock()
    db.list_all_students.return_value = students
    db.list_supply_requests.side_effect = lambda predicate=None: [r for r in requests if predicate is None or predicate(r)]
    return db


@pytest.fixture
def lincoln_students():
    return make_students("Lincoln", "3", 5)


@pytest.fixture
def mixed_requests():
    return [
        make_request("req_1", item="pencil", properties=["#2", "yellow"], quantity=2),
        make_request("req_2", item="glue", quantity=2),
        make_request("req_3", item="glue", quantity=None),
        make_request("req_4", item=None, quantity=9),
        make_request("req_5", item="glue", grade="4", quantity=3),
        make_request("req_6", item="pencil", properties=["#2"], quantity=1),
        make_request("req_7", item="glue", quantity=1),
    ]

# --- Scenarios ---

def test_single_matching_request(lincoln_students):
    db = mock_db_with(lincoln_students, [make_request("req_1", item="pencil", quantity=2)])
    contributions = need_service.compute_need_contributions(NeedQueryOptions(), db)
    assert len(contributions) == 1
    assert contributions[0].studentCount == 5
    assert contributions[0].count == 10


def test_grade_mismatch_yields_no_contributions(lincoln_students):
    db = mock_db_with(lincoln_students, [make_request("req_1", grade="4", quantity=2)])
    assert need_service.compute_need_contributions(NeedQueryOptions(), db) == []
    assert need_service.compute_need_groups(NeedQueryOptions(), db) == []


def test_two_glue_requests_form_one_group(lincoln_students):
    # Counts of 10 (2 x 5 third graders) and 6 (2 x 3 second graders).
    requests = [make_request("req_1", item="glue", quantity=2), make_request("req_2", item="glue", quantity=2, grade="2")]
    students = lincoln_students + make_students("Lincoln", "2", 3)
    db = mock_db_with(students, requests)

    groups = need_service.compute_need_groups(NeedQueryOptions(), db)
    assert len(groups) == 1
    assert groups[0].item == "glue"
    assert groups[0].properties == []
    assert groups[0].totalCount == 16
    assert len(groups[0].contributions) == 2
    print("\n✅ SUCCESS: test_two_glue_requests_form_one_group passed.")


def test_missing_item_never_reported(lincoln_students, mixed_requests):
    db = mock_db_with(lincoln_students, mixed_requests)
    flat_ids = {c.id for c in need_service.compute_need_contributions(NeedQueryOptions(), db)}
    grouped_ids = {c.id for g in need_service.compute_need_groups(NeedQueryOptions(), db) for c in g.contributions}
    assert "req_4" not in flat_ids
    assert "req_4" not in grouped_ids

# --- Report Properties ---

def test_every_contribution_has_students_and_consistent_count(lincoln_students, mixed_requests):
    db = mock_db_with(lincoln_students, mixed_requests)
    for contribution in need_service.compute_need_contributions(NeedQueryOptions(), db):
        assert contribution.studentCount > 0
        assert contribution.count == contribution.quantity * contribution.studentCount


def test_groups_cover_exactly_the_flat_contributions(lincoln_students, mixed_requests):
    db = mock_db_with(lincoln_students, mixed_requests)
    flat = need_service.compute_need_contributions(NeedQueryOptions(), db)
    groups = need_service.compute_need_groups(NeedQueryOptions(), db)

    grouped = [c for g in groups for c in g.contributions]
    assert sorted(c.id for c in grouped) == sorted(c.id for c in flat)
    for group in groups:
        assert group.totalCount == sum(c.count for c in group.contributions)


def test_reports_are_ordered(lincoln_students, mixed_requests):
    db = mock_db_with(lincoln_students, mixed_requests)
    flat = need_service.compute_need_contributions(NeedQueryOptions(), db)
    assert [c.id for c in flat] == ["req_3", "req_7", "req_2", "req_6", "req_1"]

    groups = need_service.compute_need_groups(NeedQueryOptions(), db)
    assert [(g.item, g.properties, g.totalCount) for g in groups] == [
        ("glue", [], 15),
        ("pencil", ["#2", "yellow"], 10),
        ("pencil", ["#2"], 5),
    ]
    # Members keep processing order, not report order.
    assert [c.id for c in groups[0].contributions] == ["req_2", "req_3", "req_7"]


def test_reports_are_idempotent(lincoln_students, mixed_requests):
    db = mock_db_with(lincoln_students, mixed_requests)
    options = NeedQueryOptions(item="glue")
    assert need_service.compute_need_contributions(options, db) == need_service.compute_need_contributions(options, db)
    assert need_service.compute_need_groups(options, db) == need_service.compute_need_groups(options, db)


def test_filters_apply_to_the_need_reports(lincoln_students, mixed_requests):
    db = mock_db_with(lincoln_students, mixed_requests)
    contributions = need_service.compute_need_contributions(NeedQueryOptions(item="PENCIL", properties=["yellow"]), db)
    assert [c.id for c in contributions] == ["req_1"]

# --- Error Handling ---

def test_invalid_grade_fails_before_any_read():
    db = MagicMock()
    with pytest.raises(InvalidArgumentError):
        need_service.compute_need_contributions(NeedQueryOptions(grade="8"), db)
    with pytest.raises(InvalidArgumentError):
        need_service.compute_need_groups(NeedQueryOptions(grade="8"), db)
    with pytest.raises(InvalidArgumentError):
        need_service.list_supply_requests(NeedQueryOptions(grade="8"), db)
    db.list_all_students.assert_not_called()
    db.list_supply_requests.assert_not_called()


def test_data_access_failure_propagates(mixed_requests):
    db = mock_db_with([], mixed_requests)
    db.list_all_students.side_effect = DataAccessError("Failed to read students.")
    with pytest.raises(DataAccessError):
        need_service.compute_need_groups(NeedQueryOptions(), db)


def test_supply_request_read_failure_after_students_propagates(lincoln_students):
    """A failing request read after a good student read yields no report at all."""
    db = mock_db_with(lincoln_students, [])
    db.list_supply_requests.side_effect = DataAccessError("Failed to read supply requests.")

    with pytest.raises(DataAccessError):
        need_service.compute_need_contributions(NeedQueryOptions(), db)
    with pytest.raises(DataAccessError):
        need_service.compute_need_groups(NeedQueryOptions(item="glue"), db)
    with pytest.raises(DataAccessError):
        need_service.list_supply_requests(NeedQueryOptions(), db)
    assert db.list_all_students.call_count == 2

# --- Plain Listing ---

def test_list_supply_requests_filters_and_sorts(mixed_requests):
    db = mock_db_with([], mixed_requests)
    listed = need_service.list_supply_requests(NeedQueryOptions(item="glue"), db, sort_by="quantity", sort_order=SortOrder.DESC)
    assert [r.id for r in listed] == ["req_5", "req_2", "req_7", "req_3"]

    by_grade = need_service.list_supply_requests(NeedQueryOptions(item="glue"), db)
    assert [r.id for r in by_grade] == ["req_2", "req_3", "req_7", "req_5"]


def test_get_supply_request_delegates_to_database():
    db = MagicMock()
    db.get_supply_request_by_id.return_value = None
    assert need_service.get_supply_request("req_missing", db) is None
    db.get_supply_request_by_id.assert_called_once_with("req_missing")
