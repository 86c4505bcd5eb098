import os

# Must be set before salonpos.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_LOG_SLOW_QUERIES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from salonpos.database import Base, get_db
from salonpos.main import app
from salonpos.models import Employee


@pytest.fixture
def engine():
    # One shared in-memory connection so every session sees the same data
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_employee(session_factory):
    def _make(name="Ana", color="#e91e63", active=True):
        with session_factory() as db:
            employee = Employee(name=name, color=color, active=active)
            db.add(employee)
            db.commit()
            return employee.id

    return _make


@pytest.fixture
def make_service(client):
    def _make(name, rank=None, price=100, duration=60, category=None):
        body = {"name": name, "base_price": price, "base_duration_minutes": duration}
        if rank is not None:
            body["orden_prioridad"] = rank
        if category is not None:
            body["category"] = category
        r = client.post("/api/services", json=body)
        assert r.status_code == 201, r.text
        return r.json()["id"]

    return _make


@pytest.fixture
def make_appointment(client):
    def _make(employee_id, service_id, starts_at="2025-10-27T10:00:00", **fields):
        body = {"employee_id": employee_id, "service_id": service_id, "starts_at": starts_at}
        body.update(fields)
        r = client.post("/api/appointments", json=body)
        assert r.status_code == 201, r.text
        return r.json()

    return _make
