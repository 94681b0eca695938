import pytest

from aila_admin.create_admin import create_admin, main
from aila_admin.errors import ValidationFailed

from conftest import auth, login, register


def test_create_admin_registers_new_admin(client):
    admin = create_admin("Site Admin", "root", "Root@Example.com", "secret123")

    assert admin["isAdmin"] is True
    assert admin["email"] == "root@example.com"
    token = login(client, "root@example.com")
    assert client.get("/directory/accounts", headers=auth(token)).status_code == 200


def test_create_admin_promotes_existing_account(client):
    register(client, "bob")

    admin = create_admin("Bob Admin", "bob", "bob@example.com", "other-password")

    assert admin["isAdmin"] is True
    assert admin["fullName"] == "Test User"
    login(client, "bob@example.com")


def test_create_admin_reports_username_held_by_another_account(client):
    register(client, "carol")

    with pytest.raises(ValidationFailed, match="Username 'carol' is taken by another account"):
        create_admin("Admin", "carol", "admin@example.com", "secret123")

    assert client.post("/sessions", json={"email": "admin@example.com", "password": "secret123"}).status_code == 401


def test_main_exit_codes(client, capsys):
    register(client, "carol")

    assert main(["--email", "x@example.com", "--username", "carol", "--password", "secret123"]) == 1
    assert "taken by another account" in capsys.readouterr().err

    assert main(["--email", "x@example.com", "--username", "xavier", "--password", "p" * 80]) == 1
    assert main(["--email", "x@example.com", "--username", "xavier", "--password", "secret123"]) == 0
    assert "Admin ready: xavier" in capsys.readouterr().out
