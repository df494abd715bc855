"""Unit tests for the reservation status lifecycle."""

import pytest

from cabin_rentals.booking import ACTIVE_STATUSES, RESERVATION_STATUSES, check_transition
from cabin_rentals.errors import ValidationError


@pytest.mark.parametrize(
    ("current", "target"),
    [("pending", "confirmed"), ("pending", "cancelled"), ("confirmed", "cancelled")],
)
def test_allowed_transitions(current, target):
    assert check_transition(current, target) is True


@pytest.mark.parametrize("status", ["pending", "confirmed", "cancelled"])
def test_same_status_is_a_no_op(status):
    assert check_transition(status, status) is False


@pytest.mark.parametrize(
    ("current", "target"),
    [("cancelled", "confirmed"), ("cancelled", "pending"), ("confirmed", "pending")],
)
def test_forbidden_transitions(current, target):
    with pytest.raises(ValidationError) as exc_info:
        check_transition(current, target)
    assert exc_info.value.details == {"current": current, "requested": target}


def test_unknown_status():
    with pytest.raises(ValidationError) as exc_info:
        check_transition("confirmed", "archived")
    assert "archived" in exc_info.value.message


def test_active_statuses_exclude_cancelled():
    assert "cancelled" not in ACTIVE_STATUSES
    assert set(RESERVATION_STATUSES) == ACTIVE_STATUSES | {"cancelled"}
