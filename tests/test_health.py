def test_health_reports_both_databases(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "db": "connected", "lawyerDb": "connected", "env": "test"}


def test_unknown_route_is_404(client):
    assert client.get("/nope").status_code == 404
