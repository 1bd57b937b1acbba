"""Domain layer (checkout records, defaults and validation rules).

Domain modules should not depend on UI or on the storefront API client.
"""
