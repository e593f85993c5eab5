"""
Core utilities shared across the Users API.

This package hosts configuration, logging setup, the typed error hierarchy and
the HTTP error handlers. Routers and services depend on these primitives
instead of reading the environment or building error payloads themselves.
"""
