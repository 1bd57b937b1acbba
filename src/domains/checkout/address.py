"""
Shipping address record for the checkout flow.

Field names are snake_case in Python and camelCase on the wire, matching the
storefront API (fullName, streetAddress, city, postalCode, country).
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MIN_FIELD_LENGTH = 3

ADDRESS_FIELDS: tuple[str, ...] = (
    "full_name",
    "street_address",
    "city",
    "postal_code",
    "country",
)

SHIPPING_ADDRESS_DEFAULTS: dict[str, str] = {name: "" for name in ADDRESS_FIELDS}

# field -> (label, placeholder)
FIELD_LABELS: dict[str, tuple[str, str]] = {
    "full_name": ("Enter your full name", "Enter full name"),
    "street_address": ("Address", "Enter Address"),
    "city": ("City", "Enter City"),
    "postal_code": ("Postal Code", "Enter Postal Code"),
    "country": ("Country", "Enter Country"),
}

FIELD_MESSAGES: dict[str, str] = {
    "full_name": "Name must be at least 3 characters",
    "street_address": "Address must be at least 3 characters",
    "city": "City must be at least 3 characters",
    "postal_code": "Postal code must be at least 3 characters",
    "country": "Country must be at least 3 characters",
}


class ShippingAddress(BaseModel):
    """Validated shipping address. Every field is a plain string of 3+ chars."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    full_name: str = Field(min_length=MIN_FIELD_LENGTH)
    street_address: str = Field(min_length=MIN_FIELD_LENGTH)
    city: str = Field(min_length=MIN_FIELD_LENGTH)
    postal_code: str = Field(min_length=MIN_FIELD_LENGTH)
    country: str = Field(min_length=MIN_FIELD_LENGTH)

    def to_payload(self) -> dict[str, str]:
        """JSON body for the storefront API (camelCase keys)."""
        return self.model_dump(by_alias=True)

    def to_values(self) -> dict[str, str]:
        """Form values keyed by Python field name."""
        return self.model_dump()


def initial_values(address: Mapping[str, Any] | ShippingAddress | None = None) -> dict[str, str]:
    """
    Form values to start editing from.

    Uses the previously persisted address when given (either key style is
    accepted), otherwise SHIPPING_ADDRESS_DEFAULTS. Missing keys fall back to
    the default for that field; None becomes an empty string.
    """
    if address is None:
        return dict(SHIPPING_ADDRESS_DEFAULTS)
    if isinstance(address, ShippingAddress):
        return address.to_values()

    values = dict(SHIPPING_ADDRESS_DEFAULTS)
    for name in ADDRESS_FIELDS:
        raw = address.get(name)
        if raw is None:
            raw = address.get(to_camel(name))
        if raw is not None:
            values[name] = str(raw)
    return values
