from bookstore import __version__


def test_health(client):
    body = client.get("/api/health").json()
    assert body["status"] == "OK"
    assert body["version"] == __version__


def test_api_info(client):
    body = client.get("/api").json()
    assert body["endpoints"]["orders"] == "/api/orders"
    assert body["documentation"] == "/api-docs"


def test_docs_are_served(client):
    assert client.get("/api-docs").status_code == 200
