import uuid
from datetime import datetime, timedelta, timezone

import pytest

from aila_admin.database.entities.kyc import KycSubmission

from conftest import auth, seed_lawyer_db

UNKNOWN_ID = "7f1c3a2e-0000-4000-8000-000000000000"


@pytest.fixture
def submissions(client):
    now = datetime.now(timezone.utc)
    return seed_lawyer_db(
        *[
            KycSubmission(
                lawyer_id=uuid.uuid4(),
                id_document_url=f"https://files.example.com/id-{i}.pdf",
                id_document_name=f"id-{i}.pdf",
                license_document_url=f"https://files.example.com/license-{i}.pdf",
                license_document_name=f"license-{i}.pdf",
                submitted_at=now - timedelta(hours=i),
            )
            for i in range(3)
        ]
    )


def test_kyc_requires_admin(client, user_token):
    assert client.get("/kyc", headers=auth(user_token)).status_code == 403
    assert client.get("/kyc").status_code == 401


def test_list_kycs_newest_submission_first(client, admin_token, submissions):
    body = client.get("/kyc", headers=auth(admin_token)).json()

    assert [k["id"] for k in body["items"]] == [str(s) for s in submissions]
    assert body["total"] == 3
    first = body["items"][0]
    assert first["status"] == "pending"
    assert first["idDocument"]["name"] == "id-0.pdf"
    assert first["licenseDocument"]["url"] == "https://files.example.com/license-0.pdf"


def test_list_kycs_status_filter(client, admin_token, submissions):
    client.put(f"/kyc/{submissions[0]}/accept", headers=auth(admin_token))

    accepted = client.get("/kyc", params={"status": "accepted"}, headers=auth(admin_token)).json()
    pending = client.get("/kyc", params={"status": "pending"}, headers=auth(admin_token)).json()
    invalid = client.get("/kyc", params={"status": "approved"}, headers=auth(admin_token))

    assert [k["id"] for k in accepted["items"]] == [str(submissions[0])]
    assert pending["total"] == 2
    assert invalid.status_code == 400


def test_accept_kyc(client, admin_token, submissions):
    resp = client.put(f"/kyc/{submissions[1]}/accept", headers=auth(admin_token))

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    kyc = body["data"]["kyc"]
    assert kyc["status"] == "accepted"
    assert kyc["updatedAt"] != kyc["createdAt"]


def test_accept_twice_is_a_no_op(client, admin_token, submissions):
    def stored():
        items = client.get("/kyc", headers=auth(admin_token)).json()["items"]
        return next(k for k in items if k["id"] == str(submissions[0]))

    client.put(f"/kyc/{submissions[0]}/accept", headers=auth(admin_token))
    before = stored()
    second = client.put(f"/kyc/{submissions[0]}/accept", headers=auth(admin_token))

    assert second.status_code == 200
    assert second.json()["data"]["kyc"]["status"] == "accepted"
    assert stored() == before


def test_reject_requires_reason(client, admin_token, submissions):
    for reason in ("", "   ", None):
        resp = client.put(f"/kyc/{submissions[0]}/reject", json={"reason": reason}, headers=auth(admin_token))
        assert resp.status_code == 400

    kyc = client.get("/kyc", params={"status": "pending"}, headers=auth(admin_token)).json()
    assert kyc["total"] == 3


def test_reject_stores_trimmed_reason(client, admin_token, submissions):
    resp = client.put(
        f"/kyc/{submissions[2]}/reject", json={"reason": "  Blurry licence scan  "}, headers=auth(admin_token)
    )

    assert resp.status_code == 200
    kyc = resp.json()["data"]["kyc"]
    assert kyc["status"] == "rejected"
    assert kyc["rejectionReason"] == "Blurry licence scan"


def test_terminal_status_is_not_reverted(client, admin_token, submissions):
    accepted, rejected = str(submissions[0]), str(submissions[1])
    client.put(f"/kyc/{accepted}/accept", headers=auth(admin_token))
    client.put(f"/kyc/{rejected}/reject", json={"reason": "Expired ID"}, headers=auth(admin_token))

    assert client.put(
        f"/kyc/{accepted}/reject", json={"reason": "changed my mind"}, headers=auth(admin_token)
    ).status_code == 409
    assert client.put(f"/kyc/{rejected}/accept", headers=auth(admin_token)).status_code == 409

    statuses = {k["id"]: k["status"] for k in client.get("/kyc", headers=auth(admin_token)).json()["items"]}
    assert statuses[accepted] == "accepted"
    assert statuses[rejected] == "rejected"


def test_unknown_or_malformed_kyc_id(client, admin_token, submissions):
    assert client.put(f"/kyc/{UNKNOWN_ID}/accept", headers=auth(admin_token)).status_code == 404
    assert client.put("/kyc/not-an-id/accept", headers=auth(admin_token)).status_code == 404
    assert client.put(
        "/kyc/not-an-id/reject", json={"reason": "bad"}, headers=auth(admin_token)
    ).status_code == 404


def test_kyc_sorting(client, admin_token, submissions):
    body = client.get(
        "/kyc", params={"sortBy": "submittedAt", "sortOrder": "asc"}, headers=auth(admin_token)
    ).json()
    assert [k["id"] for k in body["items"]] == [str(s) for s in reversed(submissions)]

    assert client.get("/kyc", params={"sortBy": "lawyerId"}, headers=auth(admin_token)).status_code == 400
