"""Tagged outcome of the remote address update."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

FAILURE_MESSAGE = "Could not update address"


@dataclass(frozen=True)
class UpdateResult:
    success: bool
    message: str = ""

    @property
    def display_message(self) -> str:
        """Message to show the user; failures never come back blank."""
        if self.success:
            return self.message
        return self.message or FAILURE_MESSAGE

    @classmethod
    def from_response(cls, data: Mapping[str, Any]) -> "UpdateResult":
        """Build from the storefront's {"success": bool, "message": str} body.

        Only a literal JSON true counts as success.
        """
        success = data.get("success") is True
        message = str(data.get("message") or "")
        if not success and not message:
            message = FAILURE_MESSAGE
        return cls(success=success, message=message)
