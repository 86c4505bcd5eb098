import pytest


@pytest.fixture
def staff(make_employee):
    return {"ana": make_employee(name="Ana"), "bea": make_employee(name="Bea", color="#2196f3")}


def pay(client, appointment_id, *lines):
    r = client.post(
        f"/api/payments/{appointment_id}",
        json=[{"method": method, "amount": amount} for method, amount in lines],
    )
    assert r.status_code == 201, r.text


def test_daily_report_views_agree(client, staff, make_service, make_appointment):
    color = make_service("Color", price=200)
    corte = make_service("Corte", price=100.05)

    a1 = make_appointment(staff["ana"], color, starts_at="2025-10-27T10:00:00")
    pay(client, a1["id"], ("CASH", 120), ("TRANSFER", 80))
    a2 = make_appointment(staff["ana"], corte, starts_at="2025-10-27T15:00:00")
    pay(client, a2["id"], ("CASH", 100.05))
    b1 = make_appointment(staff["bea"], corte, starts_at="2025-10-27T11:00:00")
    pay(client, b1["id"], ("CARD", 100.05))

    r = client.get("/api/cash/daily", params={"date": "2025-10-27"})
    assert r.status_code == 200
    report = r.json()

    assert report["fecha"] == "2025-10-27"
    assert report["total_general"] == pytest.approx(420.10)

    by_method = {(row["employee_name"], row["method"]): row["total_monto"] for row in report["totales_por_metodo"]}
    assert by_method == {
        ("Ana", "CASH"): pytest.approx(220.05),
        ("Ana", "TRANSFER"): pytest.approx(80),
        ("Bea", "CARD"): pytest.approx(100.05),
    }

    summaries = {s["employee_name"]: s for s in report["resumen_por_empleada"]}
    assert summaries["Ana"]["total_bruto"] == pytest.approx(300.05)
    assert summaries["Ana"]["para_empleada"] == pytest.approx(150.03)
    assert summaries["Ana"]["para_local"] == pytest.approx(150.02)
    assert summaries["Bea"]["total_bruto"] == pytest.approx(100.05)
    assert summaries["Bea"]["para_empleada"] == pytest.approx(50.03)
    assert summaries["Bea"]["para_local"] == pytest.approx(50.02)

    assert report["agrupado_por_empleada"] == {
        "Ana": {"CASH": pytest.approx(220.05), "TRANSFER": pytest.approx(80)},
        "Bea": {"CARD": pytest.approx(100.05)},
    }

    for summary in summaries.values():
        name = summary["employee_name"]
        assert summary["total_bruto"] == pytest.approx(sum(report["agrupado_por_empleada"][name].values()))
        assert summary["para_empleada"] + summary["para_local"] == pytest.approx(summary["total_bruto"])


def test_only_done_appointments_of_the_day_count(client, staff, make_service, make_appointment):
    color = make_service("Color", price=200)

    done = make_appointment(staff["ana"], color, starts_at="2025-10-27T10:00:00")
    pay(client, done["id"], ("CASH", 200))
    partial = make_appointment(staff["ana"], color, starts_at="2025-10-27T12:00:00")
    pay(client, partial["id"], ("CASH", 50))
    other_day = make_appointment(staff["bea"], color, starts_at="2025-10-28T10:00:00")
    pay(client, other_day["id"], ("CARD", 200))
    cancelled = make_appointment(staff["bea"], color, starts_at="2025-10-27T16:00:00")
    client.patch(f"/api/appointments/{cancelled['id']}", json={"status": "CANCELLED"})

    report = client.get("/api/cash/daily", params={"date": "2025-10-27"}).json()

    assert report["total_general"] == pytest.approx(200)
    assert [s["employee_name"] for s in report["resumen_por_empleada"]] == ["Ana"]
    assert report["agrupado_por_empleada"] == {"Ana": {"CASH": pytest.approx(200)}}


def test_business_day_boundary_uses_local_time(client, staff, make_service, make_appointment):
    color = make_service("Color", price=100)
    late = make_appointment(staff["ana"], color, starts_at="2025-10-28T02:30:00Z")
    pay(client, late["id"], ("CASH", 100))

    assert client.get("/api/cash/daily", params={"date": "2025-10-27"}).json()["total_general"] == 100
    assert client.get("/api/cash/daily", params={"date": "2025-10-28"}).json()["total_general"] == 0


def test_empty_day(client):
    report = client.get("/api/cash/daily", params={"date": "2025-01-01"}).json()
    assert report == {
        "fecha": "2025-01-01",
        "totales_por_metodo": [],
        "resumen_por_empleada": [],
        "agrupado_por_empleada": {},
        "total_general": 0,
    }


@pytest.mark.parametrize("params", [{}, {"date": ""}, {"date": "2025-13-40"}, {"date": "ayer"}])
def test_date_is_required_and_validated(client, params):
    r = client.get("/api/cash/daily", params=params)
    assert r.status_code == 400
    assert "error" in r.json()


def test_employees_sharing_a_name_stay_apart(client, make_employee, make_service, make_appointment):
    first = make_employee(name="Ana")
    second = make_employee(name="Ana", color="#4caf50")
    color = make_service("Color", price=100)
    for employee in (first, second):
        appointment = make_appointment(employee, color)
        pay(client, appointment["id"], ("CASH", 100))

    report = client.get("/api/cash/daily", params={"date": "2025-10-27"}).json()

    assert report["total_general"] == 200
    assert sum(s["total_bruto"] for s in report["resumen_por_empleada"]) == 200
    assert report["agrupado_por_empleada"] == {
        f"Ana (#{first})": {"CASH": 100},
        f"Ana (#{second})": {"CASH": 100},
    }
