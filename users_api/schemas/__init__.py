"""Request/response models for the HTTP layer."""

from .users import MessageResponse, UserCreate, UserPage, UserRead, UserUpdate

__all__ = ["MessageResponse", "UserCreate", "UserPage", "UserRead", "UserUpdate"]
