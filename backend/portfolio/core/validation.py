"""Field Validation — ordered rule lists producing structured error collections.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Rules run in declaration order; every failing field is reported (not first-wins)
    - Each FieldRule reports at most one message for its field
    - Every accepted string fits its storage column (tags 100, featured image 2048)
    - Validation runs before any persistence; services raise ValidationFailedError
      with the collected list

Design Decisions:
    - Rules as data (FieldRule list) over decorator chains: the order and the full
      contract of a form are readable in one place
    - Checks return a message or None, like the other pure enforce helpers
    - EmailStr via pydantic TypeAdapter: same address grammar the API schemas use
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

from pydantic import EmailStr, HttpUrl, TypeAdapter, ValidationError

from portfolio.core.domain_types import ContactSubmission
from portfolio.core.errors import FieldError, ValidationFailedError

Check = Callable[[object], str | None]

_email_adapter = TypeAdapter(EmailStr)
_url_adapter = TypeAdapter(HttpUrl)


@dataclass(frozen=True)
class FieldRule:
    """Validate one input key; `field` is the name reported on the wire."""
    key: str
    check: Check
    field: str | None = None
    required: bool = True

    @property
    def wire_name(self) -> str:
        return self.field or self.key


# ─── Check builders ──────────────────────────────────────────────

def text_length(min_len: int, max_len: int | None, message: str) -> Check:
    """Trimmed string length within [min_len, max_len]."""
    def check(value: object) -> str | None:
        if not isinstance(value, str):
            return message
        length = len(value.strip())
        if length < min_len or (max_len is not None and length > max_len):
            return message
        return None
    return check


def email_address(message: str) -> Check:
    def check(value: object) -> str | None:
        if not isinstance(value, str):
            return message
        try:
            _email_adapter.validate_python(value.strip())
        except ValidationError:
            return message
        return None
    return check


def http_url(message: str, max_len: int = 2048) -> Check:
    def check(value: object) -> str | None:
        if value is None:
            return None
        if not isinstance(value, str) or len(value) > max_len:
            return message
        try:
            _url_adapter.validate_python(value)
        except ValidationError:
            return message
        return None
    return check


def string_list(message: str, max_item_len: int | None = None) -> Check:
    """List of strings; each item at most max_item_len chars once trimmed."""
    def check(value: object) -> str | None:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            return message
        if max_item_len is not None and any(
            len(v.strip()) > max_item_len for v in value
        ):
            return message
        return None
    return check


def boolean(message: str) -> Check:
    def check(value: object) -> str | None:
        return None if isinstance(value, bool) else message
    return check


# ─── Rule sets ───────────────────────────────────────────────────

CONTACT_RULES: list[FieldRule] = [
    FieldRule("name", text_length(2, 50, "Name must be between 2-50 characters")),
    FieldRule("email", email_address("Please provide a valid email address")),
    FieldRule(
        "subject", text_length(5, 100, "Subject must be between 5-100 characters"),
    ),
    FieldRule(
        "message",
        text_length(10, 1000, "Message must be between 10-1000 characters"),
    ),
]

POST_RULES: list[FieldRule] = [
    FieldRule("title", text_length(1, 200, "Title must be between 1-200 characters")),
    FieldRule("content", text_length(1, None, "Content is required")),
    FieldRule(
        "excerpt", text_length(0, 500, "Excerpt cannot exceed 500 characters"),
        required=False,
    ),
    FieldRule(
        "slug", text_length(1, 100, "Slug must be between 1-100 characters"),
        required=False,
    ),
    FieldRule(
        "author", text_length(1, 100, "Author must be between 1-100 characters"),
        required=False,
    ),
    FieldRule(
        "tags",
        string_list("Tags must be a list of strings of at most 100 characters", 100),
        required=False,
    ),
    FieldRule(
        "featured_image", http_url("Featured image must be a valid URL"),
        field="featuredImage", required=False,
    ),
    FieldRule(
        "is_published", boolean("isPublished must be a boolean"),
        field="isPublished", required=False,
    ),
]


# ─── Runners ─────────────────────────────────────────────────────

def run_rules(
    data: Mapping[str, object], rules: list[FieldRule], partial: bool = False,
) -> list[FieldError]:
    """Apply rules in order. Optional (or, when partial, absent) keys are skipped."""
    errors = []
    for rule in rules:
        present = data.get(rule.key) is not None
        if not present and (partial or not rule.required):
            continue
        message = rule.check(data.get(rule.key))
        if message:
            errors.append(FieldError(rule.wire_name, message))
    return errors


def validate_contact(
    data: Mapping[str, object],
    ip_address: str | None = None,
    now: datetime | None = None,
) -> ContactSubmission:
    """Validate and normalize a contact form. Raises ValidationFailedError."""
    errors = run_rules(data, CONTACT_RULES)
    if errors:
        raise ValidationFailedError(errors)
    return ContactSubmission(
        name=str(data["name"]).strip(),
        email=str(data["email"]).strip().lower(),
        subject=str(data["subject"]).strip(),
        message=str(data["message"]).strip(),
        ip_address=ip_address,
        received_at=now or datetime.now(timezone.utc),
    )


def validate_post(data: Mapping[str, object], partial: bool = False) -> None:
    """Validate a post payload (full create or partial update)."""
    errors = run_rules(data, POST_RULES, partial=partial)
    if errors:
        raise ValidationFailedError(errors)
