"""
Form state for the shipping address step.
"""

from __future__ import annotations

from typing import Any, Mapping

from src.domains.checkout.address import ADDRESS_FIELDS, ShippingAddress, initial_values
from src.domains.checkout.validation import validate_shipping_address
from src.services.checkout.submission import SubmissionCoordinator
from src.utils.logger import get_logger

logger = get_logger()


class ShippingAddressForm:
    """
    Holds the values being edited and the inline error per field.

    Validation first runs on submit. After that, every field update
    re-validates the changed field so its message follows the input.
    """

    def __init__(
        self,
        coordinator: SubmissionCoordinator,
        address: Mapping[str, Any] | ShippingAddress | None = None,
    ) -> None:
        self._coordinator = coordinator
        self._initial = initial_values(address)
        self._values = dict(self._initial)
        self._errors: dict[str, str] = {}
        self._submitted = False

    @property
    def coordinator(self) -> SubmissionCoordinator:
        return self._coordinator

    @property
    def values(self) -> dict[str, str]:
        return dict(self._values)

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    @property
    def pending(self) -> bool:
        return self._coordinator.pending

    def set_field(self, name: str, value: str) -> None:
        if name not in ADDRESS_FIELDS:
            raise KeyError(f"Unknown address field: {name}")
        self._values[name] = value
        if not self._submitted:
            return
        msg = validate_shipping_address(self._values).field_errors.get(name)
        if msg:
            self._errors[name] = msg
        else:
            self._errors.pop(name, None)

    def update(self, values: Mapping[str, str]) -> None:
        for name, value in values.items():
            self.set_field(name, value)

    def submit(self) -> bool:
        """
        Validate and hand the address to the coordinator.

        Returns True only when a remote update was started. Invalid values
        leave per-field messages in `errors` and never reach the network.
        """
        self._submitted = True
        result = validate_shipping_address(self._values)
        self._errors = dict(result.field_errors)
        if not result.valid:
            logger.info("Shipping address invalid: %s", ", ".join(self._errors))
            return False
        return self._coordinator.submit(result.address)

    def reset(self) -> None:
        self._values = dict(self._initial)
        self._errors = {}
        self._submitted = False
