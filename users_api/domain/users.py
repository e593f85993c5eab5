"""Domain helpers for user field normalisation, ordering and paging."""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

from users_api.core.errors import UserValidationError

EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
EMAIL_MAX_LENGTH = 255
NAME_MAX_LENGTH = 255
SORTABLE_FIELDS = ("id", "email", "name", "created_at", "updated_at")

T = TypeVar("T")


def normalize_email(value: str | None) -> str:
    """Emails are compared and stored lower-cased and trimmed."""
    return (value or "").strip().lower()


def is_valid_email(value: str | None) -> bool:
    """Return True when the (normalised) email is well formed and fits the column."""
    if not value:
        return False
    return len(value) <= EMAIL_MAX_LENGTH and bool(EMAIL_PATTERN.fullmatch(value))


def clean_email(value: str | None) -> str:
    email = normalize_email(value)
    if not is_valid_email(email):
        raise UserValidationError(f"Invalid email: {value!r}", field="email")
    return email


def clean_name(value: str | None) -> str:
    name = (value or "").strip()
    if not name:
        raise UserValidationError("Name is required", field="name")
    if len(name) > NAME_MAX_LENGTH:
        raise UserValidationError(
            f"Name must be at most {NAME_MAX_LENGTH} characters", field="name"
        )
    return name


@dataclass(frozen=True)
class Sort:
    """Ordering applied by the store, e.g. ``Sort("name", descending=True)``."""

    field: str = "id"
    descending: bool = False

    def __post_init__(self) -> None:
        if self.field not in SORTABLE_FIELDS:
            raise UserValidationError(
                f"Cannot sort by {self.field!r}; use one of {', '.join(SORTABLE_FIELDS)}",
                field="sort",
            )

    @classmethod
    def parse(cls, value: str | None) -> Sort | None:
        """Parse ``field`` or ``field,asc|desc``; blank means unsorted."""
        raw = (value or "").strip()
        if not raw:
            return None
        name, _, direction = raw.partition(",")
        direction = direction.strip().lower() or "asc"
        if direction not in ("asc", "desc"):
            raise UserValidationError(
                f"Sort direction must be 'asc' or 'desc', got {direction!r}", field="sort"
            )
        return cls(field=name.strip(), descending=direction == "desc")


@dataclass
class Page(Generic[T]):
    """One zero-based page of results plus the total number of rows."""

    items: Sequence[T] = field(default_factory=list)
    page: int = 0
    size: int = 20
    total: int = 0

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total / self.size)

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages
