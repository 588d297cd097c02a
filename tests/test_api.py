from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from hospital import api_main, services
from hospital.api_main import app


def test_index_serves_client(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "/api/chart" in r.text


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_health_reports_broken_store(client, tmp_path, monkeypatch):
    monkeypatch.setattr(services, "DB_PATH", tmp_path / "missing.db")

    r = client.get("/health")
    assert r.status_code == 500
    assert r.json() == {"status": "db_error"}


def test_startup_creates_schema():
    with TestClient(app) as c:
        assert c.get("/health").json() == {"status": "ok"}
        assert c.get("/api/doctors").json() == []


def test_scenario_doctor_patient_chart_cascade(client):
    r = client.post("/api/doctors", json={"name": "Dr. A", "specialty": "Cardiology"})
    assert r.status_code == 201
    assert client.get("/api/doctors").json() == [{"id": 1, "name": "Dr. A", "specialty": "Cardiology"}]

    r = client.post("/api/patients", json={"name": "P1", "ailment": "Flu", "doctor_id": 1})
    assert r.status_code == 201
    assert client.get("/api/chart").json() == {"labels": ["Dr. A"], "counts": [1]}

    assert client.get("/api/patients").json()[0]["doctor_name"] == "Dr. A"

    r = client.delete("/api/doctors/1")
    assert r.status_code == 200

    patients = client.get("/api/patients").json()
    assert len(patients) == 1
    assert patients[0]["id"] == 1
    assert patients[0]["doctor_id"] == 0
    assert "doctor_name" not in patients[0]
    assert client.get("/api/chart").json() == {"labels": [], "counts": []}


def test_created_doctor_listed_once_with_higher_id(client):
    first = client.post("/api/doctors", json={"name": "Dr. X", "specialty": ""}).json()["id"]
    client.delete(f"/api/doctors/{first}")
    second = client.post("/api/doctors", json={"name": "Dr. Y", "specialty": "ENT"}).json()["id"]

    assert second > first
    doctors = client.get("/api/doctors").json()
    assert [d["id"] for d in doctors].count(second) == 1


def test_get_update_doctor(client):
    did = client.post("/api/doctors", json={"name": "Dr. B", "specialty": "Skin"}).json()["id"]

    r = client.put(f"/api/doctors/{did}", json={"name": "Dr. B", "specialty": "Dermatology"})
    assert r.status_code == 200
    assert client.get(f"/api/doctors/{did}").json() == {"id": did, "name": "Dr. B", "specialty": "Dermatology"}


def test_put_unknown_ids_still_succeed(client):
    assert client.put("/api/doctors/77", json={"name": "Nobody", "specialty": ""}).status_code == 200
    assert client.put("/api/patients/77", json={"name": "Nobody", "ailment": "", "doctor_id": 0}).status_code == 200
    assert client.get("/api/doctors").json() == []
    assert client.get("/api/patients").json() == []


def test_not_found_has_empty_body(client):
    for path in ("/api/doctors/123", "/api/patients/123"):
        r = client.get(path)
        assert r.status_code == 404
        assert r.content == b""


def test_delete_unknown_ids_succeed(client):
    assert client.delete("/api/doctors/5").status_code == 200
    assert client.delete("/api/patients/5").status_code == 200


def test_patient_round_trip_and_delete(client):
    did = client.post("/api/doctors", json={"name": "Dr. C", "specialty": "GP"}).json()["id"]
    pid = client.post("/api/patients", json={"name": "Anna", "ailment": "Asthma", "doctor_id": did}).json()["id"]

    assert client.get(f"/api/patients/{pid}").json() == {
        "id": pid,
        "name": "Anna",
        "ailment": "Asthma",
        "doctor_id": did,
    }

    r = client.put(f"/api/patients/{pid}", json={"name": "Anna", "ailment": "Asthma", "doctor_id": 0})
    assert r.status_code == 200
    assert client.get(f"/api/patients/{pid}").json()["doctor_id"] == 0

    assert client.delete(f"/api/patients/{pid}").status_code == 200
    assert client.get(f"/api/patients/{pid}").status_code == 404


def test_chart_includes_doctors_without_patients(client):
    a = client.post("/api/doctors", json={"name": "Dr. A", "specialty": ""}).json()["id"]
    client.post("/api/doctors", json={"name": "Dr. B", "specialty": ""})
    client.post("/api/patients", json={"name": "P1", "ailment": "", "doctor_id": a})
    client.post("/api/patients", json={"name": "P2", "ailment": "", "doctor_id": a})

    assert client.get("/api/chart").json() == {"labels": ["Dr. A", "Dr. B"], "counts": [2, 0]}


def test_malformed_bodies_are_client_errors(client):
    r = client.post("/api/doctors", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400

    assert client.post("/api/doctors", json={"specialty": "x"}).status_code == 400
    assert client.post("/api/doctors", json={"name": "", "specialty": "x"}).status_code == 400
    assert client.post("/api/patients", json={"name": "P", "ailment": "", "doctor_id": -1}).status_code == 400
    assert client.post("/api/patients", json={"name": "P", "doctor_id": "abc"}).status_code == 400
    assert client.put("/api/doctors/1", json={}).status_code == 400

    assert client.get("/api/doctors").json() == []
    assert client.get("/api/patients").json() == []


def test_store_failure_is_opaque_500(client, monkeypatch):
    def boom():
        raise OperationalError("SELECT id FROM doctors", {}, Exception("disk I/O error"))

    monkeypatch.setattr(api_main, "list_doctors", boom)

    r = client.get("/api/doctors")
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}


def test_ids_beyond_integer_range_are_not_found(client):
    huge = "99999999999999999999"
    for path in (f"/api/doctors/{huge}", f"/api/patients/{huge}", f"/api/doctors/-{huge}"):
        r = client.get(path)
        assert r.status_code == 404
        assert r.content == b""

    assert client.delete(f"/api/doctors/{huge}").status_code == 404
    assert client.put(f"/api/patients/{huge}", json={"name": "P", "ailment": "", "doctor_id": 0}).status_code == 404


def test_largest_storable_id_is_a_plain_miss(client):
    r = client.get(f"/api/doctors/{2**63 - 1}")
    assert r.status_code == 404


def test_oversized_doctor_reference_is_rejected(client):
    r = client.post("/api/patients", json={"name": "P", "ailment": "", "doctor_id": 2**63})
    assert r.status_code == 400
    assert client.get("/api/patients").json() == []

    r = client.post("/api/patients", json={"name": "P", "ailment": "", "doctor_id": 2**63 - 1})
    assert r.status_code == 201


def test_non_integer_path_id_is_not_found(client):
    for path in ("/api/doctors/abc", "/api/patients/1.5"):
        r = client.get(path)
        assert r.status_code == 404
        assert r.content == b""

    # body errors stay client errors even on a valid id
    assert client.put("/api/doctors/1", json={"specialty": "x"}).status_code == 400
