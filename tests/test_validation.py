# tests/test_validation.py

from datetime import datetime, timezone

import pytest

from todo_api.errors import ValidationError
from todo_api.validation import parse_due_date, parse_task_id, validate_create, validate_update


def _fields(result) -> set:
    return {e.field for e in result.errors}


def test_create_trims_title_and_drops_blank_optionals() -> None:
    result = validate_create({"title": "  Buy milk  ", "description": "", "dueDate": "   "})
    assert result.ok
    assert result.value.title == "Buy milk"
    assert result.value.description is None
    assert result.value.due_date is None


@pytest.mark.parametrize("title", ["", "   ", "\t\n"])
def test_create_rejects_empty_title(title: str) -> None:
    result = validate_create({"title": title})
    assert not result.ok
    assert _fields(result) == {"title"}


def test_create_requires_title() -> None:
    result = validate_create({"description": "no title"})
    assert [e.message for e in result.errors] == ["Title is required"]


def test_create_title_length_limit_applies_after_trim() -> None:
    assert validate_create({"title": "x" * 200}).ok
    assert validate_create({"title": "  " + "x" * 200 + "  "}).ok
    assert not validate_create({"title": "x" * 201}).ok


def test_create_description_length_limit() -> None:
    assert validate_create({"title": "t", "description": "d" * 1000}).ok
    result = validate_create({"title": "t", "description": "d" * 1001})
    assert _fields(result) == {"description"}


def test_create_reports_every_bad_field() -> None:
    result = validate_create({"title": "", "description": 5, "dueDate": "not-a-date"})
    assert _fields(result) == {"title", "description", "dueDate"}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2025-01-01", datetime(2025, 1, 1, tzinfo=timezone.utc)),
        ("2025-01-01T10:00", datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)),
        ("2025-01-01T10:00:30", datetime(2025, 1, 1, 10, 0, 30, tzinfo=timezone.utc)),
        ("2025-01-01T10:00:30.250Z", datetime(2025, 1, 1, 10, 0, 30, 250000, tzinfo=timezone.utc)),
        ("2025-01-01T10:00Z", datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)),
    ],
)
def test_due_date_formats(raw: str, expected: datetime) -> None:
    result = validate_create({"title": "t", "dueDate": raw})
    assert result.ok
    assert result.value.due_date == expected


@pytest.mark.parametrize(
    "raw",
    ["not-a-date", "2025-02-30", "2025-13-01", "01.01.2025", "2025-01-01 10:00", "2025-01-01T10", "2025-01-01\n"],
)
def test_due_date_rejects_bad_values(raw: str) -> None:
    result = validate_create({"title": "t", "dueDate": raw})
    assert _fields(result) == {"dueDate"}
    assert result.errors[0].message == "Invalid date format"


def test_parse_due_date_returns_aware_utc() -> None:
    assert parse_due_date("2025-06-01T12:00:00Z").tzinfo == timezone.utc
    assert parse_due_date("2025-06-01T12:00").tzinfo == timezone.utc


@pytest.mark.parametrize("payload", [None, [], "title", 3])
def test_body_must_be_an_object(payload) -> None:
    assert _fields(validate_create(payload)) == {"body"}
    assert _fields(validate_update(payload)) == {"body"}


def test_update_only_sets_present_fields() -> None:
    result = validate_update({"isDone": True})
    assert result.ok
    assert result.value.changes() == {"is_done": True}


def test_update_empty_body_changes_nothing() -> None:
    result = validate_update({})
    assert result.ok
    assert result.value.changes() == {}


def test_update_blank_optionals_become_explicit_clears() -> None:
    result = validate_update({"description": "", "dueDate": " "})
    assert result.value.changes() == {"description": None, "due_date": None}


def test_update_null_optionals_become_explicit_clears() -> None:
    result = validate_update({"description": None, "dueDate": None})
    assert result.value.changes() == {"description": None, "due_date": None}


@pytest.mark.parametrize("value", [None, "", "   ", 12])
def test_update_rejects_unusable_title(value) -> None:
    assert _fields(validate_update({"title": value})) == {"title"}


@pytest.mark.parametrize("value", [None, 1, 0, "true"])
def test_update_is_done_must_be_boolean(value) -> None:
    assert _fields(validate_update({"isDone": value})) == {"isDone"}


def test_update_ignores_unknown_keys() -> None:
    result = validate_update({"id": 99, "createdAt": "x", "title": " New "})
    assert result.value.changes() == {"title": "New"}


@pytest.mark.parametrize("raw, expected", [("1", 1), ("42", 42), ("007", 7)])
def test_parse_task_id_accepts_digits(raw: str, expected: int) -> None:
    assert parse_task_id(raw).value == expected


@pytest.mark.parametrize("raw", ["abc", "", "-1", "1.5", " 1", "0", "1e3", "١٢"])
def test_parse_task_id_rejects_everything_else(raw: str) -> None:
    result = parse_task_id(raw)
    assert not result.ok
    assert _fields(result) == {"id"}


def test_unwrap_raises_with_field_details() -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_create({"title": ""}).unwrap()
    assert exc_info.value.details == [{"field": "title", "message": "Title must not be empty"}]
    assert exc_info.value.status_code == 400
