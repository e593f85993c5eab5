"""
Persistence adapters.

Services depend on the UserGateway contract; SQLUserRepository is the
SQLAlchemy implementation.
"""

from .protocols import UserGateway
from .user_repository import SQLUserRepository

__all__ = ["UserGateway", "SQLUserRepository"]
