"""Pagination — verifies page window validation and metadata arithmetic.

Tests:
    - offset = (page - 1) * limit
    - page/limit below 1 rejected with per-field errors
    - limit clamped to max_limit
    - total counts pages; hasNext/hasPrev follow current vs total
"""

import pytest

from portfolio.core.errors import ValidationFailedError
from portfolio.core.pagination import PageWindow, build_pagination, make_page_window


def test_offset_from_page_and_limit():
    assert PageWindow(page=3, limit=6).offset == 12


def test_limit_clamped_to_max():
    assert make_page_window(1, 500, 100).limit == 100


def test_page_zero_rejected():
    with pytest.raises(ValidationFailedError) as exc_info:
        make_page_window(0, 10, 100)
    assert exc_info.value.fields == ["page"]


def test_both_invalid_reports_both_fields():
    with pytest.raises(ValidationFailedError) as exc_info:
        make_page_window(-1, 0, 50)
    assert exc_info.value.fields == ["page", "limit"]


def test_second_of_two_pages():
    window = make_page_window(2, 6, 100)
    assert build_pagination(window, 8) == {
        "current": 2, "total": 2, "hasNext": False, "hasPrev": True,
    }


def test_first_of_several_pages():
    window = make_page_window(1, 10, 100)
    assert build_pagination(window, 25) == {
        "current": 1, "total": 3, "hasNext": True, "hasPrev": False,
    }


def test_empty_result_has_zero_pages():
    window = make_page_window(1, 10, 100)
    assert build_pagination(window, 0) == {
        "current": 1, "total": 0, "hasNext": False, "hasPrev": False,
    }


def test_page_beyond_last():
    window = make_page_window(5, 10, 100)
    meta = build_pagination(window, 12)
    assert meta["total"] == 2
    assert meta["hasNext"] is False
    assert meta["hasPrev"] is True
