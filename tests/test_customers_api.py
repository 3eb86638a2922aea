"""
Tests for the customer endpoints.
"""

from conftest import MONDAY


class TestCustomers:
    def test_create_normalises_phone(self, client):
        response = client.post(
            "/api/customers",
            json={"name": " Eleni ", "phone": "691 234-5678", "email": "Eleni@Example.com"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Eleni"
        assert body["phone"] == "6912345678"
        assert body["email"] == "eleni@example.com"

    def test_duplicate_phone_is_rejected(self, client, make_customer):
        make_customer(phone="6912345678")

        response = client.post("/api/customers", json={"name": "Other", "phone": "6912345678"})
        assert response.status_code == 409

    def test_invalid_input(self, client):
        for payload in (
            {"name": "", "phone": "6912345678"},
            {"name": "A", "phone": "12"},
            {"name": "A", "phone": "6912345678", "email": "nope"},
        ):
            assert client.post("/api/customers", json=payload).status_code == 422

    def test_list_includes_appointment_counts(self, client, make_customer, make_service, book):
        first = make_customer(name="First")
        make_customer(name="Second")
        service = make_service()
        assert book(first, None, [service], f"{MONDAY}T10:00:00").status_code == 201

        response = client.get("/api/customers/list")

        assert response.status_code == 200
        counts = {c["name"]: c["appointmentCount"] for c in response.json()}
        assert counts == {"First": 1, "Second": 0}

    def test_search_by_phone(self, client, make_customer, make_service, book):
        customer = make_customer(phone="6955555555")
        service = make_service()
        book(customer, None, [service], f"{MONDAY}T10:00:00")

        response = client.get("/api/customers/search", params={"phone": "695 555 5555"})

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == customer["id"]
        assert len(body["appointments"]) == 1
        assert body["appointments"][0]["services"][0]["service"]["name"] == service["name"]

    def test_search_unknown_phone(self, client):
        missing = client.get("/api/customers/search", params={"phone": "6900000000"})
        assert missing.status_code == 404
        assert client.get("/api/customers/search", params={"phone": "12"}).status_code == 400

    def test_update(self, client, make_customer):
        customer = make_customer()
        other = make_customer()

        response = client.put(
            f"/api/customers/{customer['id']}",
            json={"name": "Renamed", "phone": customer["phone"], "preferences": "Pastels"},
        )
        assert response.status_code == 200
        assert response.json()["preferences"] == "Pastels"

        clash = client.put(
            f"/api/customers/{customer['id']}", json={"name": "Renamed", "phone": other["phone"]}
        )
        assert clash.status_code == 409

    def test_delete(self, client, make_customer, make_service, book):
        free = make_customer()
        busy = make_customer()
        book(busy, None, [make_service()], f"{MONDAY}T10:00:00")

        assert client.delete(f"/api/customers/{free['id']}").json() == {"success": True}
        assert client.get(f"/api/customers/{free['id']}").status_code == 404
        assert client.delete(f"/api/customers/{busy['id']}").status_code == 400
