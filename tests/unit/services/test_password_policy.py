from datetime import datetime, timedelta

import pytest

from src.app.services.password_policy import PasswordPolicy


@pytest.fixture
def policy():
    return PasswordPolicy(rounds=4)


def test_hash_is_salted_and_verifiable(policy):
    first = policy.hash("S3cure-pass")
    second = policy.hash("S3cure-pass")

    assert first != second
    assert "S3cure-pass" not in first
    assert policy.matches("S3cure-pass", first)
    assert policy.matches("S3cure-pass", second)
    assert not policy.matches("wrong-pass", first)


def test_malformed_hash_never_matches(policy):
    assert policy.matches("anything", "not-a-bcrypt-hash") is False


def test_password_expires_at_180_days(policy):
    changed_at = datetime(2024, 1, 1)

    assert not policy.is_expired(changed_at, changed_at, changed_at + timedelta(days=179))
    assert policy.is_expired(changed_at, changed_at, changed_at + timedelta(days=180))
    assert policy.is_expired(changed_at, changed_at, changed_at + timedelta(days=400))


def test_expiry_falls_back_to_creation_time(policy):
    created_at = datetime(2024, 1, 1)
    now = created_at + timedelta(days=200)

    assert policy.is_expired(None, created_at, now)
    assert not policy.is_expired(now - timedelta(days=1), created_at, now)


def test_history_is_bounded_newest_last(policy):
    history = []
    for i in range(7):
        history = policy.push_history(history, f"hash-{i}")

    assert history == ["hash-2", "hash-3", "hash-4", "hash-5", "hash-6"]


def test_push_history_does_not_mutate_input(policy):
    history = ["a"]
    updated = policy.push_history(history, "b")

    assert history == ["a"]
    assert updated == ["a", "b"]


def test_is_reused_only_checks_recent_window(policy):
    oldest = policy.hash("password-0")
    recent = [policy.hash(f"password-{i}") for i in range(1, 6)]

    assert policy.is_reused("password-3", recent)
    assert policy.is_reused("password-5", [oldest] + recent)
    # Sixth-newest entry falls outside the window
    assert not policy.is_reused("password-0", [oldest] + recent)
    assert not policy.is_reused("never-used", recent)


def test_password_becomes_eligible_after_five_rotations(policy):
    """Rotating through 5 other passwords makes the first one usable again"""
    history = policy.push_history([], policy.hash("original-pw"))

    for i in range(1, 6):
        candidate = f"rotation-{i}"
        assert policy.is_reused("original-pw", history)
        assert not policy.is_reused(candidate, history)
        history = policy.push_history(history, policy.hash(candidate))

    assert not policy.is_reused("original-pw", history)
    assert policy.is_reused("rotation-1", history)
