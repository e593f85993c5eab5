"""High-level data access helpers for users backed by SQLAlchemy."""
from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterable, Iterator, Optional

from loguru import logger
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.orm import Session

from users_api.core.errors import DuplicateEmailError, StoreUnavailableError, UserNotFoundError
from users_api.db.models import User
from users_api.db.session import get_session
from users_api.domain.users import Page, Sort, clean_email, clean_name, normalize_email


class SQLUserRepository:
    """CRUD helpers wrapping the SQLAlchemy session.

    Without a session every call opens its own and commits before returning.
    Given an open session (unit of work) writes go through it, ``flush``
    pushes them to the database and committing is left to the caller.
    """

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @contextmanager
    def _scope(self, operation: str) -> Iterator[Session]:
        try:
            if self._session is not None:
                yield self._session
                return
            with get_session() as session:
                try:
                    yield session
                    session.commit()
                except Exception:
                    session.rollback()
                    raise
        except (OperationalError, InterfaceError) as exc:
            logger.error("User store unavailable during {}: {}", operation, exc)
            raise StoreUnavailableError(operation, str(getattr(exc, "orig", None) or exc)) from exc

    # -------------------------- reads --------------------------
    def find_by_id(self, user_id: int) -> Optional[User]:
        with self._scope("find_by_id") as session:
            return session.get(User, user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        with self._scope("find_by_email") as session:
            stmt = select(User).where(User.email == normalize_email(email))
            return session.execute(stmt).scalar_one_or_none()

    def exists_by_id(self, user_id: int) -> bool:
        with self._scope("exists_by_id") as session:
            stmt = select(User.id).where(User.id == user_id).limit(1)
            return session.execute(stmt).first() is not None

    def exists_by_email(self, email: str) -> bool:
        email_value = normalize_email(email)
        if not email_value:
            return False
        with self._scope("exists_by_email") as session:
            stmt = select(User.id).where(User.email == email_value).limit(1)
            return session.execute(stmt).first() is not None

    def find_all(self, sort: Sort | None = None) -> list[User]:
        with self._scope("find_all") as session:
            stmt = select(User).order_by(*_order_by(sort))
            return list(session.execute(stmt).scalars().all())

    def find_page(self, page: int, size: int, sort: Sort | None = None) -> Page[User]:
        if page < 0 or size < 1:
            raise ValueError("page must be >= 0 and size >= 1")
        with self._scope("find_page") as session:
            total = session.execute(select(func.count()).select_from(User)).scalar_one()
            stmt = select(User).order_by(*_order_by(sort)).offset(page * size).limit(size)
            items = list(session.execute(stmt).scalars().all())
        return Page(items=items, page=page, size=size, total=int(total))

    def count(self) -> int:
        with self._scope("count") as session:
            return int(session.execute(select(func.count()).select_from(User)).scalar_one())

    def get_reference_by_id(self, user_id: int) -> User:
        user = self.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    # -------------------------- writes --------------------------
    def save(self, user: User) -> User:
        with self._scope("save") as session:
            return self._save(session, user)

    def save_all(self, users: Iterable[User]) -> list[User]:
        with self._scope("save_all") as session:
            return [self._save(session, user) for user in users]

    def save_and_flush(self, user: User) -> User:
        saved = self.save(user)
        self.flush()
        return saved

    def _save(self, session: Session, user: User) -> User:
        now = datetime.now(timezone.utc)
        email = clean_email(user.email)
        name = clean_name(user.name)
        entity = session.get(User, user.id) if user.id is not None else None
        if entity is None:
            entity = User(
                id=user.id,
                email=email,
                name=name,
                created_at=user.created_at or now,
                updated_at=now,
            )
            session.add(entity)
        else:
            entity.email = email
            entity.name = name
            entity.updated_at = now
        try:
            session.flush()
        except IntegrityError as exc:
            if _violates_email_constraint(exc):
                raise DuplicateEmailError(email) from exc
            raise
        logger.debug("Saved user id={} email={}", entity.id, entity.email)
        return entity

    def delete_by_id(self, user_id: int) -> None:
        with self._scope("delete_by_id") as session:
            session.execute(delete(User).where(User.id == user_id))
        logger.debug("Deleted user id={}", user_id)

    def delete(self, user: User) -> None:
        if user.id is None:
            return
        self.delete_by_id(user.id)

    def delete_all_by_id(self, user_ids: Iterable[int]) -> None:
        with self._scope("delete_all_by_id") as session:
            for user_id in user_ids:
                entity = session.get(User, user_id)
                if entity is not None:
                    session.delete(entity)

    def delete_all(self, users: Iterable[User] | None = None) -> None:
        if users is None:
            with self._scope("delete_all") as session:
                for entity in session.execute(select(User)).scalars().all():
                    session.delete(entity)
            return
        self.delete_all_by_id(user.id for user in users if user.id is not None)

    def delete_all_in_batch(self) -> None:
        with self._scope("delete_all_in_batch") as session:
            session.execute(delete(User))

    def delete_all_by_id_in_batch(self, user_ids: Iterable[int]) -> None:
        ids = list(user_ids)
        if not ids:
            return
        with self._scope("delete_all_by_id_in_batch") as session:
            session.execute(delete(User).where(User.id.in_(ids)))

    def flush(self) -> None:
        if self._session is None:
            # each call already committed its own transaction
            return
        with self._scope("flush") as session:
            session.flush()


def _order_by(sort: Sort | None) -> list:
    if sort is None:
        return [User.id.asc()]
    column = getattr(User, sort.field)
    ordered = [column.desc() if sort.descending else column.asc()]
    if sort.field != "id":
        ordered.append(User.id.asc())
    return ordered


def _violates_email_constraint(exc: IntegrityError) -> bool:
    # psycopg exposes the constraint name; sqlite only names the column
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint:
        return "email" in constraint
    return "users.email" in str(exc.orig)
