"""Unit tests for password generation."""

import string

import pytest

from k3s_wordpress.domain.passwords import (
    PASSWORD_LENGTH,
    generate_password,
    generate_password_pair,
)


def test_generate_password_default_length() -> None:
    """Test generated passwords are 25 characters."""
    assert len(generate_password()) == PASSWORD_LENGTH == 25


def test_generate_password_alphanumeric_only() -> None:
    """Test generated passwords use letters and digits only."""
    allowed = set(string.ascii_letters + string.digits)

    for _ in range(20):
        assert set(generate_password()) <= allowed


def test_generate_password_custom_length() -> None:
    """Test a custom length is honored."""
    assert len(generate_password(8)) == 8


def test_generate_password_rejects_zero_length() -> None:
    """Test non-positive lengths are rejected."""
    with pytest.raises(ValueError):
        generate_password(0)


def test_generate_password_pair_distinct() -> None:
    """Test the two site passwords differ."""
    db_password, wp_password = generate_password_pair()

    assert db_password != wp_password
    assert len(db_password) == len(wp_password) == 25


def test_generate_password_pair_retries_on_collision(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test a colliding second password is regenerated."""
    values = iter(["same", "same", "other"])
    monkeypatch.setattr(
        "k3s_wordpress.domain.passwords.generate_password", lambda length: next(values)
    )

    assert generate_password_pair() == ("same", "other")
