"""
Tests for SubmissionCoordinator and ShippingAddressForm: local validation,
single in-flight update, failure feedback and navigation on success.
"""

from __future__ import annotations

import threading
from unittest.mock import MagicMock

import pytest

from src.domains.checkout.address import ADDRESS_FIELDS, ShippingAddress
from src.domains.checkout.outcome import FAILURE_MESSAGE, UpdateResult
from src.services.checkout.shipping_address_form import ShippingAddressForm
from src.services.checkout.submission import (
    DESTRUCTIVE,
    NEXT_STEP_PATH,
    SubmissionCoordinator,
    SubmissionState,
)

VALID = {
    "full_name": "Jane Doe",
    "street_address": "12 Harbour Road",
    "city": "Bristol",
    "postal_code": "BS1 4RN",
    "country": "United Kingdom",
}


@pytest.fixture
def sinks() -> tuple[MagicMock, MagicMock]:
    return MagicMock(name="notify"), MagicMock(name="go_to")


def _form(update: MagicMock, sinks: tuple[MagicMock, MagicMock], address=None) -> ShippingAddressForm:
    notify, go_to = sinks
    coordinator = SubmissionCoordinator(update_address=update, notify=notify, go_to=go_to)
    return ShippingAddressForm(coordinator, address=address)


def test_empty_form_never_calls_remote(sinks: tuple[MagicMock, MagicMock]) -> None:
    """Submitting empty fields reports every field inline and sends nothing."""
    update = MagicMock(return_value=UpdateResult(success=True))
    form = _form(update, sinks)

    assert form.submit() is False
    assert set(form.errors) == set(ADDRESS_FIELDS)
    assert all(form.errors.values())
    assert form.pending is False
    update.assert_not_called()
    sinks[0].assert_not_called()
    sinks[1].assert_not_called()


def test_valid_submit_calls_remote_once_with_values(sinks: tuple[MagicMock, MagicMock]) -> None:
    update = MagicMock(return_value=UpdateResult(success=True))
    form = _form(update, sinks)
    form.update(VALID)

    assert form.submit() is True
    form.coordinator.wait(timeout=5)

    assert update.call_count == 1
    (sent,), _ = update.call_args
    assert isinstance(sent, ShippingAddress)
    assert sent.to_values() == VALID


def test_failure_notifies_and_stays(sinks: tuple[MagicMock, MagicMock]) -> None:
    """A rejected update shows the message verbatim and does not navigate."""
    notify, go_to = sinks
    update = MagicMock(return_value=UpdateResult(success=False, message="Invalid address"))
    form = _form(update, sinks, address=VALID)

    assert form.submit() is True
    assert form.coordinator.wait(timeout=5) is SubmissionState.IDLE

    notify.assert_called_once_with("Invalid address", DESTRUCTIVE)
    go_to.assert_not_called()
    assert form.pending is False


def test_success_navigates_without_feedback(sinks: tuple[MagicMock, MagicMock]) -> None:
    notify, go_to = sinks
    update = MagicMock(return_value=UpdateResult(success=True, message="User updated successfully"))
    form = _form(update, sinks, address=VALID)

    form.submit()
    assert form.coordinator.wait(timeout=5) is SubmissionState.NAVIGATED

    go_to.assert_called_once_with(NEXT_STEP_PATH)
    assert NEXT_STEP_PATH == "/payment-method"
    notify.assert_not_called()
    # Pending is left set; the page discards the form instead.
    assert form.pending is True


def test_second_submit_ignored_while_pending(sinks: tuple[MagicMock, MagicMock]) -> None:
    """Only one update is issued until the first resolves."""
    release = threading.Event()
    started = threading.Event()

    def slow_update(address: ShippingAddress) -> UpdateResult:
        started.set()
        release.wait(timeout=5)
        return UpdateResult(success=False, message="Invalid address")

    update = MagicMock(side_effect=slow_update)
    form = _form(update, sinks, address=VALID)

    assert form.submit() is True
    assert started.wait(timeout=5)
    assert form.submit() is False
    assert form.coordinator.poll() is SubmissionState.PENDING
    assert update.call_count == 1

    release.set()
    assert form.coordinator.wait(timeout=5) is SubmissionState.IDLE
    assert update.call_count == 1

    # Back to idle, the user may resubmit.
    assert form.submit() is True
    form.coordinator.wait(timeout=5)
    assert update.call_count == 2


def test_update_exception_propagates_and_resets(sinks: tuple[MagicMock, MagicMock]) -> None:
    update = MagicMock(side_effect=RuntimeError("boom"))
    form = _form(update, sinks, address=VALID)

    form.submit()
    with pytest.raises(RuntimeError, match="boom"):
        form.coordinator.wait(timeout=5)
    assert form.coordinator.state is SubmissionState.IDLE
    sinks[0].assert_not_called()
    sinks[1].assert_not_called()


def test_field_revalidates_after_first_submit(sinks: tuple[MagicMock, MagicMock]) -> None:
    """Before a submit, typing shows no errors; after one, each edit re-checks its field."""
    form = _form(MagicMock(), sinks)
    form.set_field("city", "x")
    assert form.errors == {}

    form.submit()
    assert "city" in form.errors

    form.set_field("city", "Bristol")
    assert "city" not in form.errors
    assert "country" in form.errors

    form.set_field("city", "Br")
    assert form.errors["city"] == "City must be at least 3 characters"


def test_unknown_field_rejected(sinks: tuple[MagicMock, MagicMock]) -> None:
    form = _form(MagicMock(), sinks)
    with pytest.raises(KeyError):
        form.set_field("state", "CA")


def test_reset_restores_initial(sinks: tuple[MagicMock, MagicMock]) -> None:
    form = _form(MagicMock(), sinks, address=VALID)
    form.set_field("city", "")
    form.submit()
    form.reset()
    assert form.values == VALID
    assert form.errors == {}


@pytest.mark.parametrize("body", [{"success": False}, {"success": False, "message": ""}, {}])
def test_failure_without_message_still_notifies(sinks: tuple[MagicMock, MagicMock], body: dict) -> None:
    """A failed update with no message from the store still tells the user something."""
    notify, go_to = sinks
    update = MagicMock(return_value=UpdateResult.from_response(body))
    form = _form(update, sinks, address=VALID)

    form.submit()
    assert form.coordinator.wait(timeout=5) is SubmissionState.IDLE

    notify.assert_called_once_with(FAILURE_MESSAGE, DESTRUCTIVE)
    go_to.assert_not_called()


def test_blank_failure_result_gets_fallback(sinks: tuple[MagicMock, MagicMock]) -> None:
    notify, _ = sinks
    form = _form(MagicMock(return_value=UpdateResult(success=False)), sinks, address=VALID)

    form.submit()
    form.coordinator.wait(timeout=5)

    notify.assert_called_once_with(FAILURE_MESSAGE, DESTRUCTIVE)


@pytest.mark.parametrize("flag", ["false", "true", 1, None])
def test_only_literal_true_is_success(flag: object) -> None:
    """Non-boolean success flags are treated as failures, never as a save."""
    result = UpdateResult.from_response({"success": flag, "message": "nope"})
    assert result.success is False
    assert result.message == "nope"


def test_literal_true_is_success() -> None:
    result = UpdateResult.from_response({"success": True, "message": "User updated successfully"})
    assert result.success is True
    assert result.display_message == "User updated successfully"
