"""
Use cases for the Users API.

Routers call these services instead of touching repositories or sessions
directly.
"""
