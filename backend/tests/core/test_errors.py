"""Error Hierarchy — verifies codes, statuses and wire envelopes.

Tests:
    - Each domain error maps to its HTTP status
    - ValidationFailedError serializes its field list
    - Plain errors serialize as {message} only
"""

from portfolio.core.errors import (
    DatabaseError, ErrorCategory, FieldError, NotificationError, PortfolioError,
    ResourceNotFoundError, SlugConflictError, UnauthorizedError,
    ValidationFailedError,
)


def test_validation_error_envelope():
    error = ValidationFailedError([
        FieldError("name", "Name must be between 2-50 characters"),
        FieldError("email", "Please provide a valid email address"),
    ])
    assert error.http_status == 400
    assert error.to_response() == {
        "message": "Validation failed",
        "errors": [
            {"field": "name", "message": "Name must be between 2-50 characters"},
            {"field": "email", "message": "Please provide a valid email address"},
        ],
    }


def test_not_found_message_names_resource():
    error = ResourceNotFoundError("Blog post", "missing-slug")
    assert error.http_status == 404
    assert error.to_response() == {"message": "Blog post not found"}
    assert error.identifier == "missing-slug"


def test_slug_conflict_is_409():
    error = SlugConflictError("hello-world")
    assert error.http_status == 409
    assert error.category is ErrorCategory.CONFLICT
    assert error.to_response() == {"message": "Slug already exists"}


def test_unauthorized_is_401():
    assert UnauthorizedError().http_status == 401


def test_infrastructure_errors_are_500():
    assert DatabaseError("boom", "commit").http_status == 500
    notification = NotificationError("relay down", "ada@example.com")
    assert notification.http_status == 500
    assert notification.recipient == "ada@example.com"


def test_all_errors_share_base():
    for error in (
        ValidationFailedError([]), ResourceNotFoundError("Contact", "x"),
        SlugConflictError("x"), UnauthorizedError(),
    ):
        assert isinstance(error, PortfolioError)
