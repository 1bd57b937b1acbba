"""Application services layer (form state, submission coordination).

Services coordinate the domain rules with the storefront client and the UI
sinks. They receive their collaborators as callables and avoid importing
Streamlit.
"""
