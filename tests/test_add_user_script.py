from __future__ import annotations

from scripts.add_user import main
from users_api.repositories.user_repository import SQLUserRepository


def test_add_user_creates_row(temp_db, capsys):
    assert main(["--email", "Ops@Example.com", "--name", "Ops"]) == 0

    out = capsys.readouterr().out
    assert "OK: user created" in out
    user = SQLUserRepository().find_by_email("ops@example.com")
    assert user is not None
    assert user.name == "Ops"


def test_add_user_refuses_duplicates(temp_db):
    assert main(["--email", "ops@example.com", "--name", "Ops"]) == 0
    assert main(["--email", "ops@example.com", "--name", "Ops again"]) == 1
    assert SQLUserRepository().count() == 1
