"""User lifecycle use cases (list, lookup, create, update, delete)."""

from __future__ import annotations

from typing import Optional, Protocol

from loguru import logger

from users_api.core.config import get_settings
from users_api.core.errors import DuplicateEmailError, UserNotFoundError, UserValidationError
from users_api.db.models import User
from users_api.domain.users import Page, Sort, clean_email, clean_name, normalize_email
from users_api.repositories.protocols import UserGateway
from users_api.repositories.user_repository import SQLUserRepository


class UserService(Protocol):
    """What the HTTP controller needs from the user layer."""

    def list_users(self, sort: Sort | None = None) -> list[User]: ...

    def list_users_page(
        self, page: int = 0, size: int | None = None, sort: Sort | None = None
    ) -> Page[User]: ...

    def get_user(self, user_id: int) -> Optional[User]: ...

    def get_user_by_email(self, email: str) -> Optional[User]: ...

    def create_user(self, *, email: str, name: str) -> User: ...

    def update_user(self, user_id: int, *, email: str, name: str) -> User: ...

    def delete_user(self, user_id: int) -> None: ...


class DefaultUserService:
    """Applies the user rules on top of a persistence gateway.

    Email uniqueness is checked here before every write; the UNIQUE column
    constraint still backs it up for concurrent writers.
    """

    def __init__(self, repository: UserGateway | None = None) -> None:
        self.settings = get_settings()
        self.repository: UserGateway = repository or SQLUserRepository()

    def list_users(self, sort: Sort | None = None) -> list[User]:
        return self.repository.find_all(sort)

    def list_users_page(
        self, page: int = 0, size: int | None = None, sort: Sort | None = None
    ) -> Page[User]:
        page_size = self.settings.default_page_size if size is None else size
        if page < 0:
            raise UserValidationError("page must be zero or greater", field="page")
        if page_size < 1 or page_size > self.settings.max_page_size:
            raise UserValidationError(
                f"size must be between 1 and {self.settings.max_page_size}", field="size"
            )
        return self.repository.find_page(page, page_size, sort)

    def get_user(self, user_id: int) -> Optional[User]:
        return self.repository.find_by_id(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        if not normalize_email(email):
            return None
        return self.repository.find_by_email(email)

    def create_user(self, *, email: str, name: str) -> User:
        email_value = clean_email(email)
        name_value = clean_name(name)
        if self.repository.exists_by_email(email_value):
            raise DuplicateEmailError(email_value)
        user = self.repository.save(User(email=email_value, name=name_value))
        logger.info("Created user id={} email={}", user.id, user.email)
        return user

    def update_user(self, user_id: int, *, email: str, name: str) -> User:
        user = self.repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        email_value = clean_email(email)
        name_value = clean_name(name)
        if email_value != user.email and self.repository.exists_by_email(email_value):
            raise DuplicateEmailError(email_value)
        user.email = email_value
        user.name = name_value
        updated = self.repository.save(user)
        logger.info("Updated user id={}", updated.id)
        return updated

    def delete_user(self, user_id: int) -> None:
        if not self.repository.exists_by_id(user_id):
            raise UserNotFoundError(user_id)
        self.repository.delete_by_id(user_id)
        logger.info("Deleted user id={}", user_id)
