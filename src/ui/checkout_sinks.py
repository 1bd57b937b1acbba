"""Streamlit-backed feedback (toast) and navigation sinks for checkout pages."""

from __future__ import annotations

from typing import Mapping

import streamlit as st

from src.domains.checkout.outcome import FAILURE_MESSAGE
from src.utils.logger import get_logger

logger = get_logger()

TOAST_DURATION = "short"

SEVERITY_ICONS: dict[str, str] = {
    "destructive": "🚨",
    "default": "ℹ️",
}

# Workflow path -> page script, relative to app.py
CHECKOUT_ROUTES: dict[str, str] = {
    "/payment-method": "pages/payment_method.py",
}


class FeedbackSink:
    """
    Single-slot transient message.

    notify() may be called between reruns, so the message is parked here and
    shown by flush() on the next render. A newer message replaces an older one.
    """

    def __init__(self) -> None:
        self._message: str | None = None
        self._severity = "default"

    @property
    def message(self) -> str | None:
        return self._message

    @property
    def severity(self) -> str:
        return self._severity

    def notify(self, message: str, severity: str = "default") -> None:
        self._message = message
        self._severity = severity

    def flush(self) -> None:
        if self._message is None:
            return
        icon = SEVERITY_ICONS.get(self._severity, SEVERITY_ICONS["default"])
        # Short-lived so two failures in a row do not show together.
        st.toast(self._message or FAILURE_MESSAGE, icon=icon, duration=TOAST_DURATION)
        self._message = None
        self._severity = "default"


class NavigationSink:
    def __init__(self, routes: Mapping[str, str] | None = None) -> None:
        self._routes = dict(routes if routes is not None else CHECKOUT_ROUTES)

    def go_to(self, path: str) -> None:
        """Switch to the page registered for path. Unknown paths raise KeyError."""
        page = self._routes[path]
        logger.info("Navigating to %s (%s)", path, page)
        st.switch_page(page)
