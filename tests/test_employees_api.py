"""
Tests for the employee endpoints.
"""

from conftest import MONDAY, WEEKDAY_HOURS


class TestEmployees:
    def test_create_links_services(self, client, make_service):
        manicure = make_service(name="Manicure")
        pedicure = make_service(name="Pedicure")

        response = client.post(
            "/api/employees",
            json={
                "name": "Sofia",
                "email": "sofia@example.com",
                "specialties": [manicure["id"], pedicure["id"], manicure["id"]],
                "workingHours": WEEKDAY_HOURS,
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert sorted(body["specialties"]) == sorted([manicure["id"], pedicure["id"]])
        assert {s["name"] for s in body["services"]} == {"Manicure", "Pedicure"}
        assert body["workingHours"]["monday"] == {
            "start": "09:00",
            "end": "17:00",
            "isWorking": True,
        }

    def test_unknown_service_is_rejected(self, client):
        response = client.post("/api/employees", json={"name": "Sofia", "specialties": [42]})
        assert response.status_code == 400

    def test_invalid_working_hours_are_rejected(self, client):
        for hours in (
            {"monday": {"start": "18:00", "end": "09:00", "isWorking": True}},
            {"monday": {"start": "9am", "end": "17:00", "isWorking": True}},
            {"someday": {"start": "09:00", "end": "17:00", "isWorking": True}},
        ):
            response = client.post("/api/employees", json={"name": "Sofia", "workingHours": hours})
            assert response.status_code == 422

    def test_invalid_email_is_rejected(self, client):
        response = client.post("/api/employees", json={"name": "Sofia", "email": "not-an-email"})
        assert response.status_code == 422

    def test_list_ordered_by_name(self, client, make_employee):
        make_employee(name="Zoe")
        make_employee(name="Anna")

        names = [e["name"] for e in client.get("/api/employees").json()]
        assert names == ["Anna", "Zoe"]

    def test_detail_includes_recent_appointments(
        self, client, make_employee, make_service, make_customer, book
    ):
        employee = make_employee()
        service = make_service(duration=30)
        customer = make_customer()
        for hour in range(9, 17):
            response = book(customer, employee, [service], f"{MONDAY}T{hour:02d}:00:00")
            assert response.status_code == 201

        response = client.get(f"/api/employees/{employee['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["appointmentCount"] == 8
        assert len(body["appointments"]) == 8
        assert body["appointments"][0]["time"] == "16:00"

    def test_detail_caps_recent_appointments(
        self, client, make_employee, make_service, make_customer, book
    ):
        employee = make_employee()
        service = make_service(duration=30)
        customer = make_customer()
        for half_hour in range(12):
            start = f"{MONDAY}T{9 + half_hour // 2:02d}:{30 * (half_hour % 2):02d}:00"
            assert book(customer, employee, [service], start).status_code == 201

        body = client.get(f"/api/employees/{employee['id']}").json()
        assert body["appointmentCount"] == 12
        assert len(body["appointments"]) == 10

    def test_update_replaces_services_and_hours(self, client, make_employee, make_service):
        old = make_service(name="Old")
        new = make_service(name="New")
        employee = make_employee(specialties=[old["id"]])

        response = client.put(
            f"/api/employees/{employee['id']}",
            json={
                "specialties": [new["id"]],
                "workingHours": {"monday": {"start": "10:00", "end": "14:00", "isWorking": True}},
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["specialties"] == [new["id"]]
        assert list(body["workingHours"]) == ["monday"]
        assert body["name"] == employee["name"]

    def test_missing_employee(self, client):
        assert client.get("/api/employees/999").status_code == 404
        assert client.put("/api/employees/999", json={"name": "X"}).status_code == 404
        assert client.delete("/api/employees/999").status_code == 404

    def test_delete_keeps_appointments(
        self, client, make_employee, make_service, make_customer, book
    ):
        employee = make_employee()
        created = book(make_customer(), employee, [make_service()], f"{MONDAY}T10:00:00").json()

        response = client.delete(f"/api/employees/{employee['id']}")

        assert response.status_code == 200
        appointment = client.get(f"/api/appointments/{created['id']}").json()
        assert appointment["employeeId"] is None
