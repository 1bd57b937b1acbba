"""
Storefront checkout: shipping address step. Streamlit UI entry point.
"""

import streamlit as st

# Load .env first so STOREFRONT_API_URL / token changes are picked up
from src.utils.config import load_config, storefront_api_url
load_config()

from src.ui.shipping_address_form import get_shipping_address_form, render_shipping_address_form
from src.utils.logger import setup_logger

setup_logger()

st.set_page_config(page_title="Shipping Address", layout="centered")

if not storefront_api_url():
    st.warning("STOREFRONT_API_URL is not set. Add it to .env to save addresses.")

form, feedback = get_shipping_address_form()
render_shipping_address_form(form, feedback)
