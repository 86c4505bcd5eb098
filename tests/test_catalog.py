import random

import pytest


def ranks(client, include_inactive=False):
    """{name: rank} for the listed services"""
    path = "/api/services/admin" if include_inactive else "/api/services"
    r = client.get(path)
    assert r.status_code == 200
    return {s["name"]: s["orden_prioridad"] for s in r.json()}


def assert_dense(client):
    ranked = sorted(rank for rank in ranks(client).values() if rank != 999)
    assert ranked == list(range(1, len(ranked) + 1))


def test_create_defaults_to_unordered(client):
    r = client.post("/api/services", json={"name": "  Manicura   clásica "})
    assert r.status_code == 201
    body = r.json()
    assert body["name"] == "Manicura clásica"
    assert body["orden_prioridad"] == 999
    assert body["base_price"] == 0
    assert body["base_duration_minutes"] == 60
    assert body["active"] is True


def test_create_requires_name(client):
    r = client.post("/api/services", json={"base_price": 10})
    assert r.status_code == 400
    assert "error" in r.json()


def test_create_with_rank_shifts_following_services(client, make_service):
    make_service("A", rank=1)
    make_service("B", rank=2)
    make_service("C", rank=1)

    assert ranks(client) == {"C": 1, "A": 2, "B": 3}


def test_create_rank_past_the_end_is_clamped(client, make_service):
    make_service("A", rank=1)
    make_service("B", rank=40)

    assert ranks(client) == {"A": 1, "B": 2}


def test_move_down_within_ranked_set(client, make_service):
    make_service("X", rank=1)
    a = make_service("A", rank=2)
    make_service("B", rank=3)
    make_service("C")

    r = client.patch(f"/api/services/{a}", json={"orden_prioridad": 3})
    assert r.status_code == 200
    assert r.json()["orden_prioridad"] == 3

    assert ranks(client) == {"X": 1, "B": 2, "A": 3, "C": 999}


def test_move_up_within_ranked_set(client, make_service):
    make_service("X", rank=1)
    make_service("A", rank=2)
    b = make_service("B", rank=3)

    client.patch(f"/api/services/{b}", json={"orden_prioridad": 1})

    assert ranks(client) == {"B": 1, "X": 2, "A": 3}


def test_move_to_unordered_closes_gap(client, make_service):
    a = make_service("A", rank=1)
    make_service("B", rank=2)
    make_service("C", rank=3)

    client.patch(f"/api/services/{a}", json={"orden_prioridad": 999})

    assert ranks(client) == {"B": 1, "C": 2, "A": 999}


def test_unordered_service_gets_a_rank(client, make_service):
    make_service("A", rank=1)
    make_service("B", rank=2)
    c = make_service("C")

    client.patch(f"/api/services/{c}", json={"orden_prioridad": 2})

    assert ranks(client) == {"A": 1, "C": 2, "B": 3}


def test_same_rank_update_changes_nothing(client, make_service):
    a = make_service("A", rank=1)
    make_service("B", rank=2)

    r = client.patch(f"/api/services/{a}", json={"orden_prioridad": 1, "base_price": 250})
    assert r.status_code == 200
    assert r.json()["base_price"] == 250
    assert ranks(client) == {"A": 1, "B": 2}


def test_ranks_stay_dense_under_random_operations(client, make_service):
    rng = random.Random(1234)
    ids = []
    for step in range(40):
        if not ids or rng.random() < 0.4:
            ids.append(make_service(f"S{step}", rank=rng.randint(1, len(ids) + 3)))
        else:
            target = rng.choice(ids)
            new_rank = rng.choice([rng.randint(1, len(ids) + 2), 999])
            r = client.patch(f"/api/services/{target}", json={"orden_prioridad": new_rank})
            assert r.status_code == 200
        assert_dense(client)


def test_listing_order_puts_unordered_last_by_category_then_name(client, make_service):
    make_service("Zeta", category="Uñas")
    make_service("Alfa", category="Uñas")
    make_service("Beta", category="Cejas")
    make_service("Primero", rank=1, category="Uñas")

    names = [s["name"] for s in client.get("/api/services").json()]
    assert names == ["Primero", "Beta", "Alfa", "Zeta"]


def test_duplicate_name_conflicts_on_create(client, make_service):
    make_service("Pedicura")
    r = client.post("/api/services", json={"name": "Pedicura"})
    assert r.status_code == 409
    assert r.json() == {"error": "A service with that name already exists"}


def test_rename_conflict_rolls_back_rank_changes(client, make_service):
    make_service("A", rank=1)
    b = make_service("B", rank=2)
    make_service("C", rank=3)

    r = client.patch(f"/api/services/{b}", json={"name": "A", "orden_prioridad": 1})
    assert r.status_code == 409

    assert ranks(client) == {"A": 1, "B": 2, "C": 3}


def test_update_unknown_service_is_not_found(client):
    r = client.patch("/api/services/999", json={"name": "Nada"})
    assert r.status_code == 404
    assert r.json() == {"error": "Service not found"}


def test_delete_unused_service_is_hard_delete(client, make_service):
    s = make_service("Temporal", rank=1)

    r = client.delete(f"/api/services/{s}")
    assert r.status_code == 200
    assert r.json()["service"] is None
    assert ranks(client, include_inactive=True) == {}


def test_delete_booked_service_is_soft_delete_and_keeps_rank(
    client, make_service, make_employee, make_appointment
):
    make_service("A", rank=1)
    b = make_service("B", rank=2)
    make_service("C", rank=3)
    make_appointment(make_employee(), b)

    r = client.delete(f"/api/services/{b}")
    assert r.status_code == 200
    assert r.json()["service"]["active"] is False

    assert ranks(client) == {"A": 1, "C": 3}
    assert ranks(client, include_inactive=True) == {"A": 1, "B": 2, "C": 3}


def test_deactivated_name_can_be_reused(client, make_service, make_employee, make_appointment):
    s = make_service("Alisado")
    make_appointment(make_employee(), s)
    client.delete(f"/api/services/{s}")

    r = client.post("/api/services", json={"name": "Alisado"})
    assert r.status_code == 201


def test_delete_unknown_service_is_not_found(client):
    assert client.delete("/api/services/42").status_code == 404


def test_priorities_info(client, make_service, make_employee, make_appointment):
    assert client.get("/api/services/priorities/info").json() == {
        "usedPriorities": [],
        "nextAvailable": 1,
        "maxUsedPriority": 0,
    }

    make_service("A", rank=1)
    b = make_service("B", rank=2)
    make_service("C", rank=3)
    make_service("D")
    make_appointment(make_employee(), b)
    client.delete(f"/api/services/{b}")

    assert client.get("/api/services/priorities/info").json() == {
        "usedPriorities": [1, 3],
        "nextAvailable": 2,
        "maxUsedPriority": 3,
    }


def test_service_stats(client, make_service, make_employee, make_appointment):
    s = make_service("Color", price=200)
    employee = make_employee()
    done = make_appointment(employee, s, starts_at="2025-10-01T10:00:00")
    make_appointment(employee, s, starts_at="2025-10-05T10:00:00", final_price=100)
    client.post(f"/api/payments/{done['id']}", json=[{"method": "CASH", "amount": 200}])

    stats = client.get(f"/api/services/{s}/stats").json()
    assert stats["total_appointments"] == 2
    assert stats["completed_appointments"] == 1
    assert stats["average_price"] == pytest.approx(150.0)
    assert stats["total_revenue"] == pytest.approx(200.0)
    assert stats["first_appointment"].startswith("2025-10-01")
    assert stats["last_appointment"].startswith("2025-10-05")


def test_inactive_service_is_created_unordered(client, make_service):
    make_service("A", rank=1)
    make_service("B", rank=2)

    r = client.post("/api/services", json={"name": "X", "orden_prioridad": 1, "active": False})
    assert r.status_code == 201
    assert r.json()["orden_prioridad"] == 999
    assert r.json()["active"] is False

    assert ranks(client) == {"A": 1, "B": 2}
    assert ranks(client, include_inactive=True) == {"A": 1, "B": 2, "X": 999}


def test_null_clears_category(client, make_service):
    s = make_service("Perfilado", category="Cejas")

    r = client.patch(f"/api/services/{s}", json={"category": None, "name": None})
    assert r.status_code == 200
    assert r.json()["category"] is None
    assert r.json()["name"] == "Perfilado"
