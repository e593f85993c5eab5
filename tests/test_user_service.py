from __future__ import annotations

import pytest

from users_api.core.errors import (
    DuplicateEmailError,
    ErrorKind,
    UserNotFoundError,
    UserValidationError,
)
from users_api.repositories.user_repository import SQLUserRepository
from users_api.services.user_service import DefaultUserService


@pytest.fixture()
def svc(temp_db):
    return DefaultUserService()


def test_create_then_get_round_trip(svc):
    user = svc.create_user(email="a@x.com", name="A")

    assert user.id is not None
    assert user.email == "a@x.com"
    fetched = svc.get_user(user.id)
    assert (fetched.id, fetched.email, fetched.name) == (user.id, "a@x.com", "A")
    assert svc.get_user_by_email("A@X.com").id == user.id


def test_second_create_with_same_email_fails(svc):
    svc.create_user(email="a@x.com", name="A")

    with pytest.raises(DuplicateEmailError) as excinfo:
        svc.create_user(email=" A@x.com", name="Again")

    assert excinfo.value.kind is ErrorKind.CONFLICT
    assert "a@x.com" in excinfo.value.message
    assert len(svc.list_users()) == 1


def test_create_rejects_blank_name_and_bad_email(svc):
    with pytest.raises(UserValidationError) as excinfo:
        svc.create_user(email="a@x.com", name="   ")
    assert excinfo.value.field == "name"

    with pytest.raises(UserValidationError) as excinfo:
        svc.create_user(email="not-an-email", name="A")
    assert excinfo.value.field == "email"


def test_update_changes_fields_but_not_id(svc):
    user = svc.create_user(email="a@x.com", name="A")

    updated = svc.update_user(user.id, email="b@x.com", name="B")

    assert updated.id == user.id
    stored = svc.get_user(user.id)
    assert (stored.email, stored.name) == ("b@x.com", "B")


def test_update_keeping_own_email_is_allowed(svc):
    user = svc.create_user(email="a@x.com", name="A")
    updated = svc.update_user(user.id, email="a@x.com", name="Renamed")
    assert updated.name == "Renamed"


def test_update_to_taken_email_conflicts(svc):
    svc.create_user(email="a@x.com", name="A")
    other = svc.create_user(email="b@x.com", name="B")

    with pytest.raises(DuplicateEmailError):
        svc.update_user(other.id, email="a@x.com", name="B")

    assert svc.get_user(other.id).email == "b@x.com"


def test_update_unknown_id_does_not_create(svc):
    with pytest.raises(UserNotFoundError) as excinfo:
        svc.update_user(9999, email="new@x.com", name="New")

    assert excinfo.value.kind is ErrorKind.NOT_FOUND
    assert svc.list_users() == []
    assert SQLUserRepository().exists_by_id(9999) is False


def test_delete_then_get_returns_none(svc):
    user = svc.create_user(email="a@x.com", name="A")

    svc.delete_user(user.id)

    assert svc.get_user(user.id) is None
    with pytest.raises(UserNotFoundError):
        svc.delete_user(user.id)


def test_page_size_limits(svc):
    for i in range(3):
        svc.create_user(email=f"u{i}@x.com", name=f"U{i}")

    page = svc.list_users_page(0, 2)
    assert page.total == 3
    assert len(page.items) == 2

    with pytest.raises(UserValidationError):
        svc.list_users_page(-1, 2)
    with pytest.raises(UserValidationError):
        svc.list_users_page(0, svc.settings.max_page_size + 1)
    assert svc.list_users_page().size == svc.settings.default_page_size


def test_get_user_by_blank_email_is_none(svc):
    assert svc.get_user_by_email("   ") is None
