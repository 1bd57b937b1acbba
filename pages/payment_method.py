"""
Checkout: payment method step. Target of the shipping address form.
"""

import streamlit as st

st.header("Payment Method")
st.caption("Your shipping address has been saved.")

if st.button("Back to shipping address", icon=":material/arrow_back:"):
    st.switch_page("app.py")
