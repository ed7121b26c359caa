# tests/test_vehicles_api.py
"""HTTP tests for the vehicle endpoints (FastAPI TestClient + in-memory SQLite)."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from app.config import settings
from app.database import build_engine, create_tables, get_db
from app.main import app

API = "/api/v1"


@pytest.fixture
def client(monkeypatch):
    engine = build_engine("sqlite://")
    create_tables(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    monkeypatch.setattr(settings, "CAR_CAPACITY", 2)
    monkeypatch.setattr(settings, "MOTORCYCLE_CAPACITY", 1)
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
    engine.dispose()


def post_car(client, plate, **extra):
    return client.post(f"{API}/vehicles", json={"plate": plate, "vehicle_type": "CAR", **extra})


class TestCreateVehicle:
    def test_create_returns_201_with_location_and_alert(self, client):
        resp = post_car(client, "AAA111", owner_name="Ana")

        assert resp.status_code == 201
        body = resp.json()
        assert body["plate"] == "AAA111"
        assert body["vehicle_type"] == "CAR"
        assert resp.headers["location"] == f"{API}/vehicles/{body['id']}"
        assert resp.headers[f"x-{settings.APP_NAME}-alert".lower()] == f"{settings.APP_NAME}.vehicle.created"
        assert resp.headers[f"x-{settings.APP_NAME}-params".lower()] == str(body["id"])

    def test_create_with_id_rejected(self, client):
        resp = post_car(client, "AAA111", id=5)

        assert resp.status_code == 400
        assert resp.json()["errorKey"] == "idexists"
        assert resp.json()["entityName"] == "vehicle"
        assert resp.headers[f"x-{settings.APP_NAME}-error".lower()] == "error.idexists"

    def test_duplicate_rejected(self, client):
        post_car(client, "AAA111")
        resp = post_car(client, "AAA111")
        assert resp.status_code == 400
        assert resp.json()["errorKey"] == "placaexist"

    def test_car_capacity(self, client):
        assert post_car(client, "AAA111").status_code == 201
        assert post_car(client, "BBB222").status_code == 201

        resp = post_car(client, "CCC333")
        assert resp.status_code == 400
        assert resp.json()["errorKey"] == "carromax"
        assert len(client.get(f"{API}/vehicles").json()) == 2

    def test_motorcycle_capacity(self, client):
        payload = {"plate": "M1", "vehicle_type": "MOTORCYCLE"}
        assert client.post(f"{API}/vehicles", json=payload).status_code == 201

        resp = client.post(f"{API}/vehicles", json={"plate": "M2", "vehicle_type": "MOTORCYCLE"})
        assert resp.status_code == 400
        assert resp.json()["errorKey"] == "motomax"

    def test_invalid_type_is_422(self, client):
        resp = client.post(f"{API}/vehicles", json={"plate": "AAA111", "vehicle_type": "TRUCK"})
        assert resp.status_code == 422


class TestUpdateVehicle:
    def test_put_without_id_creates(self, client):
        resp = client.put(f"{API}/vehicles", json={"plate": "AAA111", "vehicle_type": "CAR"})
        assert resp.status_code == 201
        assert resp.json()["id"] is not None

    def test_put_without_id_applies_rules(self, client):
        post_car(client, "AAA111")
        resp = client.put(f"{API}/vehicles", json={"plate": "AAA111", "vehicle_type": "CAR"})
        assert resp.status_code == 400
        assert resp.json()["errorKey"] == "placaexist"

    def test_put_with_id_updates(self, client):
        created = post_car(client, "AAA111", owner_name="Ana").json()

        resp = client.put(f"{API}/vehicles", json={**created, "owner_name": "Luis"})

        assert resp.status_code == 200
        assert resp.json()["owner_name"] == "Luis"
        assert resp.headers[f"x-{settings.APP_NAME}-alert".lower()] == f"{settings.APP_NAME}.vehicle.updated"
        assert client.get(f"{API}/vehicles/{created['id']}").json()["owner_name"] == "Luis"


    def test_put_unknown_id_is_404(self, client):
        resp = client.put(f"{API}/vehicles", json={"id": 777, "plate": "AAA111", "vehicle_type": "CAR"})
        assert resp.status_code == 404
        assert client.get(f"{API}/vehicles").json() == []

    def test_put_unknown_id_cannot_exceed_capacity(self, client):
        assert post_car(client, "A1").status_code == 201
        assert post_car(client, "B2").status_code == 201
        assert post_car(client, "C3").json()["errorKey"] == "carromax"

        resp = client.put(f"{API}/vehicles", json={"id": 777, "plate": "C3", "vehicle_type": "CAR"})

        assert resp.status_code == 404
        cars = client.get(f"{API}/vehicles", params={"vehicle_type": "CAR"}).json()
        assert [v["plate"] for v in cars] == ["A1", "B2"]
        assert client.get(f"{API}/vehicles/777").status_code == 404


class TestReadAndDelete:
    def test_get_unknown_is_404(self, client):
        assert client.get(f"{API}/vehicles/999").status_code == 404

    def test_list_with_type_filter(self, client):
        post_car(client, "C1")
        client.post(f"{API}/vehicles", json={"plate": "M1", "vehicle_type": "MOTORCYCLE"})

        assert len(client.get(f"{API}/vehicles").json()) == 2
        motos = client.get(f"{API}/vehicles", params={"vehicle_type": "MOTORCYCLE"}).json()
        assert [v["plate"] for v in motos] == ["M1"]

    def test_delete_frees_slot(self, client):
        first = post_car(client, "AAA111").json()
        post_car(client, "BBB222")
        assert post_car(client, "CCC333").status_code == 400

        resp = client.delete(f"{API}/vehicles/{first['id']}")
        assert resp.status_code == 200
        assert resp.headers[f"x-{settings.APP_NAME}-alert".lower()] == f"{settings.APP_NAME}.vehicle.deleted"
        assert client.get(f"{API}/vehicles/{first['id']}").status_code == 404
        assert post_car(client, "CCC333").status_code == 201

    def test_delete_returns_empty_body(self, client):
        created = post_car(client, "AAA111").json()
        resp = client.delete(f"{API}/vehicles/{created['id']}")
        assert resp.status_code == 200
        assert resp.content == b""

    def test_delete_unknown_is_idempotent(self, client):
        resp = client.delete(f"{API}/vehicles/999")
        assert resp.status_code == 200
        assert resp.content == b""

    def test_delete_unknown_strict(self, client, monkeypatch):
        monkeypatch.setattr(settings, "STRICT_DELETE", True)
        assert client.delete(f"{API}/vehicles/999").status_code == 404

    def test_capacity_endpoint(self, client):
        post_car(client, "AAA111")

        resp = client.get(f"{API}/vehicles/capacity")

        assert resp.status_code == 200
        status = {s["vehicle_type"]: s for s in resp.json()}
        assert status["CAR"]["current_count"] == 1
        assert status["CAR"]["max_capacity"] == 2
        assert status["CAR"]["available"] == 1
        assert status["MOTORCYCLE"]["is_full"] is False


class TestHealth:
    def test_health_ok(self, client):
        resp = client.get(f"{API}/health")
        assert resp.status_code == 200
        assert resp.json()["database"] == "ok"
