"""Streamlit rendering for the checkout shipping address step.

The form object lives in st.session_state so its values, inline errors and
in-flight submission survive reruns. It is rebuilt once it has navigated away.
"""

from __future__ import annotations

from typing import Callable

import streamlit as st

from src.domains.checkout.address import ADDRESS_FIELDS, FIELD_LABELS
from src.infrastructure.storefront.storefront_client import StorefrontClient
from src.services.checkout.shipping_address_form import ShippingAddressForm
from src.services.checkout.submission import SubmissionCoordinator, SubmissionState
from src.ui.checkout_sinks import FeedbackSink, NavigationSink
from src.utils.logger import get_logger

logger = get_logger()

FORM_KEY = "shipping_address_form"
FEEDBACK_KEY = "checkout_feedback"


def build_shipping_address_form(
    client: StorefrontClient,
    feedback: FeedbackSink,
    navigation: NavigationSink,
) -> ShippingAddressForm:
    """Wire a fresh form to the storefront client and the sinks, seeded from the saved address."""
    coordinator = SubmissionCoordinator(
        update_address=client.update_address,
        notify=feedback.notify,
        go_to=navigation.go_to,
    )
    saved = client.fetch_address()
    if saved:
        logger.info("Seeding shipping form from saved address")
    return ShippingAddressForm(coordinator, address=saved)


def get_shipping_address_form(
    client_factory: Callable[[], StorefrontClient] = StorefrontClient,
) -> tuple[ShippingAddressForm, FeedbackSink]:
    """Return this session's form and feedback sink, creating them on first use."""
    if FEEDBACK_KEY not in st.session_state:
        st.session_state[FEEDBACK_KEY] = FeedbackSink()
    feedback: FeedbackSink = st.session_state[FEEDBACK_KEY]

    form: ShippingAddressForm | None = st.session_state.get(FORM_KEY)
    if form is None or form.coordinator.state is SubmissionState.NAVIGATED:
        form = build_shipping_address_form(client_factory(), feedback, NavigationSink())
        st.session_state[FORM_KEY] = form
    return form, feedback


def render_shipping_address_form(form: ShippingAddressForm, feedback: FeedbackSink) -> None:
    feedback.flush()

    st.header("Shipping Address")
    st.caption("Please enter an address to ship to")

    pending = form.pending
    errors = form.errors
    values = form.values
    entered: dict[str, str] = {}

    with st.form("shipping_address", border=False):
        for name in ADDRESS_FIELDS:
            label, placeholder = FIELD_LABELS[name]
            entered[name] = st.text_input(
                label,
                value=values[name],
                placeholder=placeholder,
                key=f"shipping_{name}",
                disabled=pending,
            )
            if name in errors:
                st.markdown(f":red[{errors[name]}]")

        _, right = st.columns([3, 1])
        with right:
            submitted = st.form_submit_button(
                "Continue",
                icon=":material/arrow_forward:",
                disabled=pending,
                width="stretch",
            )

    if submitted and not pending:
        form.update(entered)
        form.submit()
        # Rerun to show inline errors or the disabled, pending form.
        st.rerun()

    if form.coordinator.state is SubmissionState.PENDING:
        with st.spinner("Saving address…"):
            form.coordinator.wait()
        st.rerun()
