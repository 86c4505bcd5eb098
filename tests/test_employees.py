def test_list_active_employees(client, make_employee):
    make_employee(name="Valeria")
    make_employee(name="Bea")
    make_employee(name="Carla", active=False)

    r = client.get("/api/employees")
    assert r.status_code == 200
    assert [e["name"] for e in r.json()] == ["Bea", "Valeria"]


def test_employee_carries_calendar_color(client, make_employee):
    employee_id = make_employee(name="Bea", color="#2196f3")

    assert client.get("/api/employees").json() == [
        {"id": employee_id, "name": "Bea", "color": "#2196f3", "active": True}
    ]
