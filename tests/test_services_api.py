"""
Tests for the service catalog endpoints.
"""

from conftest import MONDAY


class TestServices:
    def test_create_and_list_active(self, client, make_service):
        make_service(name="Pedicure", duration=60, price=40)
        retired = make_service(name="Acrylic Nails", duration=120, price=60)
        client.put(f"/api/services/{retired['id']}", json={"isActive": False})

        response = client.get("/api/services")

        assert response.status_code == 200
        assert [s["name"] for s in response.json()] == ["Pedicure"]

    def test_list_is_ordered_by_name(self, client, make_service):
        make_service(name="Pedicure")
        make_service(name="French Manicure")

        names = [s["name"] for s in client.get("/api/services").json()]
        assert names == ["French Manicure", "Pedicure"]

    def test_validation(self, client):
        for payload in (
            {"name": "X", "duration": 0, "price": 10},
            {"name": "X", "duration": 30, "price": 0},
            {"name": " ", "duration": 30, "price": 5},
        ):
            assert client.post("/api/services", json=payload).status_code == 422

    def test_partial_update(self, client, make_service):
        service = make_service(name="Gel Nails", duration=150, price=70, description="Gel extensions")

        response = client.put(f"/api/services/{service['id']}", json={"price": 75})

        assert response.status_code == 200
        body = response.json()
        assert body["price"] == 75
        assert body["duration"] == 150
        assert body["description"] == "Gel extensions"

        cleared = client.put(f"/api/services/{service['id']}", json={"description": None})
        assert cleared.json()["description"] is None

    def test_update_missing(self, client):
        assert client.put("/api/services/999", json={"price": 10}).status_code == 404

    def test_delete_unused(self, client, make_service):
        service = make_service()

        assert client.delete(f"/api/services/{service['id']}").json() == {"success": True}
        assert client.get("/api/services").json() == []

    def test_delete_used_by_appointment(self, client, make_service, make_customer, book):
        service = make_service()
        book(make_customer(), None, [service], f"{MONDAY}T10:00:00")

        response = client.delete(f"/api/services/{service['id']}")
        assert response.status_code == 400
