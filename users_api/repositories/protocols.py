"""
Contract of the persistence gateway for users.

Every operation the service layer may call is declared here explicitly; the
SQL implementation lives in ``user_repository``.
"""
from __future__ import annotations

from typing import Iterable, Optional, Protocol

from users_api.db.models import User
from users_api.domain.users import Page, Sort


class UserGateway(Protocol):
    """Typed CRUD and lookups over the user store.

    All operations raise ``StoreUnavailableError`` when the store cannot be
    reached. Absence is reported as ``None``/``False``, never as an error,
    except by ``get_reference_by_id``.
    """

    def find_by_id(self, user_id: int) -> Optional[User]:
        """Return the user with this id, or None."""
        ...

    def find_by_email(self, email: str) -> Optional[User]:
        """Return the user with this email (case-insensitive), or None."""
        ...

    def exists_by_id(self, user_id: int) -> bool: ...

    def exists_by_email(self, email: str) -> bool:
        """True iff a user with this email currently exists."""
        ...

    def find_all(self, sort: Sort | None = None) -> list[User]:
        """Every stored user, ordered by ``sort`` or by id."""
        ...

    def find_page(self, page: int, size: int, sort: Sort | None = None) -> Page[User]:
        """Zero-based page of users together with the total count."""
        ...

    def count(self) -> int: ...

    def get_reference_by_id(self, user_id: int) -> User:
        """Like find_by_id but raises UserNotFoundError on a miss."""
        ...

    def save(self, user: User) -> User:
        """Insert when ``user.id`` is unset, otherwise insert-or-replace that id.

        Returns the persisted copy with its id assigned. Raises
        DuplicateEmailError when the email belongs to another row.
        """
        ...

    def save_all(self, users: Iterable[User]) -> list[User]:
        """``save`` applied to each user inside a single transaction."""
        ...

    def save_and_flush(self, user: User) -> User: ...

    def delete_by_id(self, user_id: int) -> None:
        """Remove the row if present; a missing id is not an error."""
        ...

    def delete(self, user: User) -> None:
        """Remove the row matching ``user.id``; no-op when the id is unset."""
        ...

    def delete_all_by_id(self, user_ids: Iterable[int]) -> None: ...

    def delete_all(self, users: Iterable[User] | None = None) -> None:
        """Delete the given users, or every user when called without arguments."""
        ...

    def delete_all_in_batch(self) -> None: ...

    def delete_all_by_id_in_batch(self, user_ids: Iterable[int]) -> None: ...

    def flush(self) -> None:
        """Make buffered writes visible before returning."""
        ...
