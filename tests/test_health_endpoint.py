def test_liveness(client):
    res = client.get("/health")

    assert res.status_code == 200
    assert res.json() == {"status": "ok", "service": "marketplace-bookings"}


def test_liveness_alias(client):
    assert client.get("/health/live").status_code == 200


def test_database_check_with_sqlite(client):
    res = client.get("/health/db")

    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


def test_readiness(client):
    res = client.get("/health/ready")

    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"
