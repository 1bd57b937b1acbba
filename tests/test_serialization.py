"""
Test serialization of the shipping form to ensure it works with Streamlit session state.
"""

from __future__ import annotations

import pickle

import pytest

from src.domains.checkout.address import ShippingAddress
from src.domains.checkout.outcome import UpdateResult
from src.services.checkout.shipping_address_form import ShippingAddressForm
from src.services.checkout.submission import SubmissionCoordinator, SubmissionState
from src.ui.checkout_sinks import FeedbackSink, NavigationSink

VALID = {
    "full_name": "Jane Doe",
    "street_address": "12 Harbour Road",
    "city": "Bristol",
    "postal_code": "BS1 4RN",
    "country": "United Kingdom",
}


def _reject(address) -> UpdateResult:
    return UpdateResult(success=False, message="Invalid address")


def _make_form() -> ShippingAddressForm:
    feedback = FeedbackSink()
    coordinator = SubmissionCoordinator(
        update_address=_reject,
        notify=feedback.notify,
        go_to=NavigationSink().go_to,
    )
    return ShippingAddressForm(coordinator, address=VALID)


def test_form_serialization() -> None:
    """The form, its coordinator and the sinks can be pickled after use."""
    form = _make_form()
    form.submit()
    form.coordinator.wait(timeout=5)

    try:
        unpickled = pickle.loads(pickle.dumps(form))
    except Exception as e:
        pytest.fail(f"Serialization failed: {e}")

    assert unpickled.values == VALID
    assert unpickled.coordinator.state is SubmissionState.IDLE
    assert unpickled.coordinator._executor is None  # Recreated on demand


def test_pending_coordinator_restores_idle() -> None:
    """An in-flight update is not carried across serialization."""
    form = _make_form()
    form.submit()
    pickled = pickle.dumps(form.coordinator)
    form.coordinator.wait(timeout=5)

    restored = pickle.loads(pickled)
    assert restored.state is SubmissionState.IDLE
    assert restored._future is None
    address = ShippingAddress(**VALID)
    assert restored.submit(address) is True
    assert restored.wait(timeout=5) is SubmissionState.IDLE
    assert restored._notify.__self__.message == "Invalid address"
