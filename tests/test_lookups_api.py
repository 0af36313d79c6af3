"""
Lookup API tests: phases, subphases, development types, activity types.
"""

from effort_estimator.config import settings


def test_phases(client):
    client.post("/api/phases/", json={"name": "Build", "sort_order": 2})
    client.post("/api/phases/", json={"name": "Analysis", "sort_order": 1, "color": "#3366ff"})
    phases = client.get("/api/phases/").json()
    assert [p["name"] for p in phases] == ["Analysis", "Build"]
    assert phases[0]["show_in_timeline"] is True


def test_subphases_filter_by_phase(client):
    analysis = client.post("/api/phases/", json={"name": "Analysis"}).json()
    build = client.post("/api/phases/", json={"name": "Build"}).json()
    client.post("/api/subphases/", json={"name": "Workshops", "phase_id": analysis["id"]})
    client.post("/api/subphases/", json={"name": "Sprint 1", "phase_id": build["id"]})

    assert len(client.get("/api/subphases/").json()) == 2
    filtered = client.get(f"/api/subphases/?phase_id={build['id']}").json()
    assert [s["name"] for s in filtered] == ["Sprint 1"]


def test_subphase_unknown_phase(client):
    response = client.post("/api/subphases/", json={"name": "Orphan", "phase_id": 42})
    assert response.status_code == 404


def test_development_types(client):
    created = client.post("/api/development-types/", json={
        "name": "Plugin", "default_description": "Server-side plugin",
    }).json()
    assert client.get(f"/api/development-types/{created['id']}").json()["default_description"] == "Server-side plugin"
    assert client.get("/api/development-types/999").status_code == 404


def test_activity_types_are_seeded(client):
    options = client.get("/api/activity-types/").json()
    assert [o["code"] for o in options] == [
        settings.DEVELOPMENT_CODE, settings.PROCESS_CODE, settings.SUPPORT_CODE,
    ]
    assert [o["category"] for o in options] == ["development", "process", "support"]


def test_activity_type_synonym(client, estimation):
    response = client.post("/api/activity-types/", json={
        "code": 100000010, "label": "Suporte", "category": "support",
    })
    assert response.status_code == 200

    client.post(f"/api/estimations/{estimation['id']}/lines", json={"sizing": 10})
    client.post(f"/api/estimations/{estimation['id']}/lines", json={
        "activity_type": "Suporte", "development_share": 50,
    })
    data = client.get(f"/api/estimations/{estimation['id']}").json()
    assert data["total_support_hours"] == 5
    assert data["total_project_hours"] == 15


def test_duplicate_activity_type(client):
    response = client.post("/api/activity-types/", json={
        "code": settings.PROCESS_CODE, "label": "Anything", "category": "process",
    })
    assert response.status_code == 409
    response = client.post("/api/activity-types/", json={
        "code": 1, "label": settings.PROCESS_LABEL,
    })
    assert response.status_code == 409


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
