from __future__ import annotations

import pytest

from users_api.core.errors import UserValidationError
from users_api.domain.users import Page, Sort, clean_email, clean_name, is_valid_email


def test_sort_parse():
    assert Sort.parse(None) is None
    assert Sort.parse("  ") is None
    assert Sort.parse("name") == Sort("name", descending=False)
    assert Sort.parse("email,DESC") == Sort("email", descending=True)


@pytest.mark.parametrize("value", ["password", "name,sideways"])
def test_sort_parse_rejects_unknown_field_or_direction(value):
    with pytest.raises(UserValidationError) as excinfo:
        Sort.parse(value)
    assert excinfo.value.field == "sort"


def test_page_counts():
    page = Page(items=[1, 2], page=0, size=2, total=5)
    assert page.total_pages == 3
    assert page.has_next is True
    assert Page(items=[], page=0, size=10, total=0).total_pages == 0


def test_email_and_name_cleaning():
    assert clean_email("  Mixed@Case.ORG ") == "mixed@case.org"
    assert is_valid_email("a@b.co")
    assert not is_valid_email("a@b")
    assert not is_valid_email("x" * 250 + "@b.com")
    assert clean_name("  Ada Lovelace ") == "Ada Lovelace"
    with pytest.raises(UserValidationError):
        clean_name("x" * 256)
