from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from miniparty.core.errors import StorageError
from miniparty.main import create_app

JANE = {
    "name": "Jane Doe",
    "email": "jane@example.com",
    "phone": "+1234567890",
    "date": "2026-03-15",
    "time": "18:00",
    "duration": 3,
    "guests": 25,
}

def test_create_booking_scenario(client):
    response = client.post("/book", json=JANE)

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Booking confirmed!"
    booking = data["booking"]
    assert isinstance(booking["id"], int)
    assert {k: v for k, v in booking.items() if k != "id"} == JANE

def test_create_booking_trims_contact_fields(client):
    payload = {**JANE, "name": "  Jane Doe ", "email": " jane@example.com ", "phone": " +1234567890  "}
    response = client.post("/book", json=payload)

    assert response.status_code == 201
    booking = response.json()["booking"]
    assert booking["name"] == "Jane Doe"
    assert booking["email"] == "jane@example.com"
    assert booking["phone"] == "+1234567890"

def test_create_booking_validation_errors(client):
    response = client.post("/book", json={**JANE, "name": "", "duration": 9, "guests": 0})

    assert response.status_code == 400
    assert response.json() == {"errors": [
        "Name is required",
        "Duration must be between 1 and 8 hours",
        "Guests must be between 1 and 100",
    ]}

def test_create_booking_empty_object_lists_every_error(client):
    response = client.post("/book", json={})
    assert response.status_code == 400
    assert len(response.json()["errors"]) == 7

def test_create_booking_malformed_json(client):
    response = client.post("/book", content="{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}

def test_create_booking_wrong_types_are_malformed(client):
    for payload in ({**JANE, "duration": "3"}, {**JANE, "guests": 2.5}, {**JANE, "name": 42}, [JANE]):
        response = client.post("/book", json=payload)
        assert response.status_code == 400, payload
        assert response.json() == {"error": "Invalid request body"}

def test_create_booking_null_fields_are_validation_errors(client):
    response = client.post("/book", json={**JANE, "name": None, "guests": None})
    assert response.status_code == 400
    assert response.json() == {"errors": [
        "Name is required",
        "Guests must be between 1 and 100",
    ]}

def test_create_booking_storage_failure(client, store):
    with patch.object(store, "insert", new_callable=AsyncMock) as mock_insert:
        mock_insert.side_effect = StorageError("disk full")
        response = client.post("/book", json=JANE)

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to save booking"}

# --- Admin gate ---

def test_list_bookings_without_configured_secret(client, no_admin_secret):
    for headers in ({}, {"X-Admin-Token": "anything"}, {"X-Admin-Token": ""}):
        response = client.get("/bookings", headers=headers)
        assert response.status_code == 500
        assert response.json() == {"error": "Admin access is not configured"}

def test_list_bookings_missing_token(client, admin_secret):
    response = client.get("/bookings")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}

def test_list_bookings_wrong_token(client, admin_secret):
    response = client.get("/bookings", headers={"X-Admin-Token": admin_secret + "x"})
    assert response.status_code == 401

def test_list_bookings_empty(client, admin_secret):
    response = client.get("/bookings", headers={"X-Admin-Token": admin_secret})
    assert response.status_code == 200
    assert response.json() == []

def test_list_bookings_round_trip_and_order(client, admin_secret):
    later = client.post("/book", json={**JANE, "date": "2026-01-02"}).json()["booking"]
    earlier = client.post("/book", json={**JANE, "date": "2026-01-01"}).json()["booking"]

    response = client.get("/bookings", headers={"X-Admin-Token": admin_secret})

    assert response.status_code == 200
    assert response.json() == [earlier, later]

def test_list_bookings_storage_failure(client, store, admin_secret):
    with patch.object(store, "list_all", new_callable=AsyncMock) as mock_list:
        mock_list.side_effect = StorageError("locked")
        response = client.get("/bookings", headers={"X-Admin-Token": admin_secret})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch bookings"}

# --- Health, CORS, SPA ---

def test_health_ok(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"

def test_health_unhealthy_when_store_unreachable(client, store):
    with patch.object(store, "ping", new_callable=AsyncMock) as mock_ping:
        mock_ping.side_effect = StorageError("unable to open database file")
        response = client.get("/health")

    assert response.status_code == 503
    assert response.json() == {"status": "unhealthy", "error": "unable to open database file"}

def test_cors_preflight_allows_admin_header(client):
    response = client.options("/bookings", headers={
        "Origin": "http://localhost:5173",
        "Access-Control-Request-Method": "GET",
        "Access-Control-Request-Headers": "X-Admin-Token",
    })
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"

def test_unknown_route_without_frontend(client):
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}

def test_spa_fallback(store, tmp_path):
    dist = tmp_path / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "index.html").write_text("<html>miniparty</html>")
    (dist / "assets" / "app.js").write_text("console.log('party')")

    with TestClient(create_app(store=store, dist_path=str(dist))) as spa_client:
        asset = spa_client.get("/assets/app.js")
        assert asset.status_code == 200
        assert asset.text == "console.log('party')"

        page = spa_client.get("/admin")
        assert page.status_code == 200
        assert "miniparty" in page.text

        # API routes still win over the fallback
        assert spa_client.get("/health").json()["status"] == "ok"

def test_spa_without_index_is_not_found(store, tmp_path):
    dist = tmp_path / "dist"
    dist.mkdir()

    with TestClient(create_app(store=store, dist_path=str(dist))) as spa_client:
        response = spa_client.get("/whatever")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
