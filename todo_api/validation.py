"""Field rules for task input and the id path parameter.

Every rule runs eagerly, so a single request reports all of its bad fields
at once. Validators return a ``ValidationResult`` instead of raising; the
caller decides whether to raise ``ValidationError`` via ``unwrap()``.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, TypeVar

from .errors import ValidationError
from .schemas.task import CreateTaskInput, UpdateTaskInput

T = TypeVar("T")

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000

DUE_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}(:\d{2}(\.\d{3})?)?Z?)?", re.ASCII)
TASK_ID_PATTERN = re.compile(r"\d+", re.ASCII)

# Body key -> attribute name on the input models.
FIELD_NAMES = {
    "title": "title",
    "description": "description",
    "dueDate": "due_date",
    "isDone": "is_done",
}

_MISSING = object()

RuleResult = Tuple[Any, Optional[str]]


@dataclass
class FieldError:
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass
class ValidationResult(Generic[T]):
    value: Optional[T] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self, message: str = "The submitted data does not meet the requirements") -> T:
        """Return the value, or raise ``ValidationError`` listing every field error."""
        if self.errors:
            raise ValidationError(message, details=[e.to_dict() for e in self.errors])
        return self.value


def parse_due_date(raw: str) -> datetime:
    """Parse an ISO-8601 date or date-time into an aware UTC datetime.

    Date-only values and values without ``Z`` are taken as UTC.
    Raises ValueError for impossible dates such as ``2025-02-30``.
    """
    text = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _title_rule(raw: Any) -> RuleResult:
    if raw is _MISSING:
        return None, "Title is required"
    if not isinstance(raw, str):
        return None, "Title must be a string"
    title = raw.strip()
    if not title:
        return None, "Title must not be empty"
    if len(title) > TITLE_MAX_LENGTH:
        return None, f"Title must be at most {TITLE_MAX_LENGTH} characters"
    return title, None


def _description_rule(raw: Any) -> RuleResult:
    if raw is _MISSING or raw is None:
        return None, None
    if not isinstance(raw, str):
        return None, "Description must be a string"
    if len(raw) > DESCRIPTION_MAX_LENGTH:
        return None, f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters"
    if not raw.strip():
        return None, None
    return raw, None


def _due_date_rule(raw: Any) -> RuleResult:
    if raw is _MISSING or raw is None:
        return None, None
    if not isinstance(raw, str):
        return None, "Due date must be a string"
    if not raw.strip():
        return None, None
    if not DUE_DATE_PATTERN.fullmatch(raw):
        return None, "Invalid date format"
    try:
        return parse_due_date(raw), None
    except ValueError:
        return None, "Invalid date format"


def _is_done_rule(raw: Any) -> RuleResult:
    # bool only: 0/1 and "true" are not accepted
    if not isinstance(raw, bool):
        return None, "Status must be true or false"
    return raw, None


RULES: Dict[str, Callable[[Any], RuleResult]] = {
    "title": _title_rule,
    "description": _description_rule,
    "dueDate": _due_date_rule,
    "isDone": _is_done_rule,
}

CREATE_FIELDS = ("title", "description", "dueDate")
UPDATE_FIELDS = ("title", "description", "dueDate", "isDone")


def _body_error() -> List[FieldError]:
    return [FieldError("body", "Request body must be a JSON object")]


def validate_create(payload: Any) -> ValidationResult[CreateTaskInput]:
    """Validate a creation body. Blank description/dueDate become None."""
    if not isinstance(payload, dict):
        return ValidationResult(errors=_body_error())

    values: Dict[str, Any] = {}
    errors: List[FieldError] = []
    for key in CREATE_FIELDS:
        value, message = RULES[key](payload.get(key, _MISSING))
        if message:
            errors.append(FieldError(key, message))
        else:
            values[FIELD_NAMES[key]] = value

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(value=CreateTaskInput(**values))


def validate_update(payload: Any) -> ValidationResult[UpdateTaskInput]:
    """Validate a partial update body.

    Only keys present in ``payload`` end up set on the result. A present but
    blank or null description/dueDate is kept as an explicit None (clear).
    """
    if not isinstance(payload, dict):
        return ValidationResult(errors=_body_error())

    values: Dict[str, Any] = {}
    errors: List[FieldError] = []
    for key in UPDATE_FIELDS:
        if key not in payload:
            continue
        value, message = RULES[key](payload[key])
        if message:
            errors.append(FieldError(key, message))
        else:
            values[FIELD_NAMES[key]] = value

    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(value=UpdateTaskInput(**values))


def parse_task_id(raw: Any) -> ValidationResult[int]:
    """Convert a path segment of ASCII digits into a positive task id."""
    if isinstance(raw, str) and TASK_ID_PATTERN.fullmatch(raw):
        task_id = int(raw)
        if task_id > 0:
            return ValidationResult(value=task_id)
    return ValidationResult(errors=[FieldError("id", "Task ID must be a positive whole number")])
