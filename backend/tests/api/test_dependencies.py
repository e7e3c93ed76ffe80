"""API Dependencies — verifies the admin key comparison."""

from portfolio.api.dependencies import is_admin_key


def test_matching_key_is_admin():
    assert is_admin_key("s3cret", "s3cret")


def test_wrong_key_is_not_admin():
    assert not is_admin_key("guess", "s3cret")


def test_missing_header_is_not_admin():
    assert not is_admin_key(None, "s3cret")


def test_unconfigured_key_rejects_everything():
    assert not is_admin_key("anything", None)
    assert not is_admin_key("", "")
