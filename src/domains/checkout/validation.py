"""
Shipping address validation.

Wraps the ShippingAddress model so callers get a plain result object with one
message per offending field instead of a pydantic ValidationError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from src.domains.checkout.address import ADDRESS_FIELDS, FIELD_MESSAGES, ShippingAddress

# Error locs may carry either the field name or its wire alias.
_LOC_TO_FIELD: dict[str, str] = {
    **{name: name for name in ADDRESS_FIELDS},
    **{to_camel(name): name for name in ADDRESS_FIELDS},
}


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    field_errors: dict[str, str] = field(default_factory=dict)
    address: ShippingAddress | None = None


def validate_shipping_address(values: Mapping[str, Any]) -> ValidationResult:
    """
    Validate raw form values.

    Returns a valid result carrying the ShippingAddress, or an invalid one
    mapping each offending field to its message. Fields are reported in form
    order.
    """
    try:
        address = ShippingAddress.model_validate(dict(values))
    except ValidationError as e:
        bad: set[str] = set()
        for err in e.errors():
            loc = err.get("loc") or ()
            if loc and loc[0] in _LOC_TO_FIELD:
                bad.add(_LOC_TO_FIELD[loc[0]])
        errors = {name: FIELD_MESSAGES[name] for name in ADDRESS_FIELDS if name in bad}
        return ValidationResult(valid=False, field_errors=errors)
    return ValidationResult(valid=True, address=address)
