"""
Utility helpers shared across routers/services.
"""

from .config import get_settings


def absolute_url(path: str) -> str:
    """Root a path at PUBLIC_BASE_URL (used for Location headers)."""
    return f"{get_settings().public_base_url}/{path.lstrip('/')}"
