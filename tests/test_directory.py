import math
from datetime import datetime, timedelta, timezone

import pytest

from aila_admin.database.entities.lawyer import Lawyer

from conftest import auth, register, seed_lawyer_db

UNKNOWN_ID = "7f1c3a2e-0000-4000-8000-000000000000"


@pytest.fixture
def lawyers(client):
    now = datetime.now(timezone.utc)
    return seed_lawyer_db(
        Lawyer(
            name="Maria Papadopoulou",
            email="maria@law.gr",
            password="hash-1",
            phone="+30 210 000 0001",
            practice_areas=["GDPR", "Data protection"],
            experience_years=12,
            office_address="Athens",
            role="partner",
            created_at=now - timedelta(days=3),
        ),
        Lawyer(
            name="Nikos Georgiou",
            email="nikos@law.gr",
            password="hash-2",
            practice_areas=["Criminal law"],
            experience_years=4,
            office_address="Thessaloniki",
            role="associate",
            created_at=now - timedelta(days=2),
        ),
        Lawyer(
            name="Eleni Ioannou",
            email="eleni@law.gr",
            practice_areas=["Family law"],
            experience_years=7,
            office_address="Patras",
            role="associate",
            created_at=now - timedelta(days=1),
        ),
    )


def test_directory_requires_admin(client, user_token):
    assert client.get("/directory/accounts", headers=auth(user_token)).status_code == 403
    assert client.get("/directory/lawyers", headers=auth(user_token)).status_code == 403
    assert client.get("/directory/lawyers").status_code == 401


def test_list_accounts_role_filter_and_search(client, admin_token):
    register(client, "carol", full_name="Carol Smith")
    register(client, "dan", full_name="Dan Brown")

    admins = client.get("/directory/accounts", params={"role": "admin"}, headers=auth(admin_token)).json()
    users = client.get("/directory/accounts", params={"role": "user"}, headers=auth(admin_token)).json()
    found = client.get("/directory/accounts", params={"search": "smith"}, headers=auth(admin_token)).json()

    assert [a["username"] for a in admins["items"]] == ["admin"]
    assert sorted(u["username"] for u in users["items"]) == ["carol", "dan"]
    assert [u["username"] for u in found["items"]] == ["carol"]


def test_list_accounts_sorting(client, admin_token):
    register(client, "zed")
    register(client, "bea")

    body = client.get(
        "/directory/accounts",
        params={"sortBy": "username", "sortOrder": "asc"},
        headers=auth(admin_token),
    ).json()

    assert [a["username"] for a in body["items"]] == ["admin", "bea", "zed"]
    assert all("password" not in a for a in body["items"])


def test_list_rejects_unknown_sort_field_or_order(client, admin_token):
    assert client.get(
        "/directory/accounts", params={"sortBy": "password"}, headers=auth(admin_token)
    ).status_code == 400
    assert client.get(
        "/directory/lawyers", params={"sortOrder": "sideways"}, headers=auth(admin_token)
    ).status_code == 400


def test_update_account_lowercases_and_checks_uniqueness(client, admin_token):
    carol = register(client, "carol").json()["user"]
    register(client, "dan")

    resp = client.put(
        f"/directory/accounts/{carol['id']}",
        json={"username": "  CAROLINE ", "email": "Caroline@Example.com", "isAdmin": True},
        headers=auth(admin_token),
    )
    assert resp.status_code == 200
    user = resp.json()["user"]
    assert user["username"] == "caroline"
    assert user["email"] == "caroline@example.com"
    assert user["isAdmin"] is True

    taken = client.put(
        f"/directory/accounts/{carol['id']}", json={"email": "DAN@example.com"}, headers=auth(admin_token)
    )
    assert taken.status_code == 400
    assert taken.json()["detail"] == "Username or Email already taken"

    same = client.put(
        f"/directory/accounts/{carol['id']}", json={"username": "caroline"}, headers=auth(admin_token)
    )
    assert same.status_code == 200


def test_update_account_bad_ids(client, admin_token):
    bad = client.put("/directory/accounts/xyz", json={"phone": "1"}, headers=auth(admin_token))
    missing = client.put(f"/directory/accounts/{UNKNOWN_ID}", json={"phone": "1"}, headers=auth(admin_token))

    assert bad.status_code == 400
    assert bad.json()["detail"] == "Invalid user ID format"
    assert missing.status_code == 404


def test_delete_account_removes_its_conversations(client, admin_token):
    resp = register(client, "carol")
    carol_id = resp.json()["user"]["id"]
    carol_token = client.post(
        "/sessions", json={"email": "carol@example.com", "password": "secret123"}
    ).json()["token"]
    client.post("/conversations", json={}, headers=auth(carol_token))

    deleted = client.delete(f"/directory/accounts/{carol_id}", headers=auth(admin_token))

    assert deleted.status_code == 200
    assert client.get(f"/accounts/{carol_id}", headers=auth(admin_token)).status_code == 404
    assert client.delete(f"/directory/accounts/{carol_id}", headers=auth(admin_token)).status_code == 404
    assert client.delete("/directory/accounts/xyz", headers=auth(admin_token)).status_code == 400


def test_list_lawyers_search_over_practice_areas(client, admin_token, lawyers):
    body = client.get("/directory/lawyers", params={"search": "gdpr"}, headers=auth(admin_token)).json()

    assert [l["name"] for l in body["items"]] == ["Maria Papadopoulou"]
    assert body["items"][0]["practiceAreas"] == ["GDPR", "Data protection"]
    assert "password" not in body["items"][0]


def test_list_lawyers_filters(client, admin_token, lawyers):
    experienced = client.get(
        "/directory/lawyers", params={"experience": "7"}, headers=auth(admin_token)
    ).json()
    associates = client.get(
        "/directory/lawyers", params={"role": "associate"}, headers=auth(admin_token)
    ).json()
    ignored = client.get(
        "/directory/lawyers", params={"experience": "lots"}, headers=auth(admin_token)
    ).json()

    assert sorted(l["name"] for l in experienced["items"]) == ["Eleni Ioannou", "Maria Papadopoulou"]
    assert sorted(l["name"] for l in associates["items"]) == ["Eleni Ioannou", "Nikos Georgiou"]
    assert ignored["total"] == 3


def test_list_lawyers_default_sort_and_pagination(client, admin_token, lawyers):
    body = client.get("/directory/lawyers", params={"limit": 2}, headers=auth(admin_token)).json()

    assert [l["name"] for l in body["items"]] == ["Eleni Ioannou", "Nikos Georgiou"]
    assert body["pages"] == math.ceil(body["total"] / body["limit"]) == 2

    by_experience = client.get(
        "/directory/lawyers",
        params={"sortBy": "experienceYears", "sortOrder": "asc"},
        headers=auth(admin_token),
    ).json()
    assert [l["experienceYears"] for l in by_experience["items"]] == [4, 7, 12]


def test_update_lawyer_whitelisted_fields(client, admin_token, lawyers):
    lawyer_id = str(lawyers[1])

    resp = client.put(
        f"/directory/lawyers/{lawyer_id}",
        json={"bio": "Criminal defence", "practiceAreas": ["Criminal law", "Cybercrime"], "officeAddress": "Volos"},
        headers=auth(admin_token),
    )

    assert resp.status_code == 200
    lawyer = resp.json()["lawyer"]
    assert lawyer["bio"] == "Criminal defence"
    assert lawyer["practiceAreas"] == ["Criminal law", "Cybercrime"]
    assert lawyer["officeAddress"] == "Volos"
    assert lawyer["experienceYears"] == 4


def test_delete_lawyer(client, admin_token, lawyers):
    lawyer_id = str(lawyers[0])

    assert client.delete(f"/directory/lawyers/{lawyer_id}", headers=auth(admin_token)).status_code == 200
    assert client.delete(f"/directory/lawyers/{lawyer_id}", headers=auth(admin_token)).status_code == 404

    bad = client.delete("/directory/lawyers/nope", headers=auth(admin_token))
    assert bad.status_code == 400
    assert bad.json()["detail"] == "Invalid lawyer ID format"
    assert client.get("/directory/lawyers", headers=auth(admin_token)).json()["total"] == 2
