"""
Template API and template import tests.

Tests:
1-3. Template CRUD
4-7. Import appends lines in order and recalculates
8-9. Import rejects empty and unknown template lists
"""

from effort_estimator import models


def _create_template(client, name, lines):
    response = client.post("/api/templates/", json={"name": name, "lines": lines})
    assert response.status_code == 200, response.text
    return response.json()


def _crm_template(client):
    return _create_template(client, "CRM baseline", [
        {"activity_type": "Development", "sizing": 20, "module": "Accounts"},
        {"activity_type": "Support", "development_share": 20, "sizing": 80, "module": "Hypercare"},
        {"activity_type": "Process", "sizing": 4, "module": "Kickoff"},
    ])


def _portal_template(client):
    return _create_template(client, "Portal add-on", [
        {"sizing": 10, "module": "Portal"},
    ])


# ============================================================
# Templates
# ============================================================

def test_create_template(client):
    template = _crm_template(client)
    assert template["name"] == "CRM baseline"
    assert [line["module"] for line in template["lines"]] == ["Accounts", "Hypercare", "Kickoff"]
    assert [line["sort_order"] for line in template["lines"]] == [0, 1, 2]
    # Support sizing is derived on import, never stored from the client
    assert template["lines"][1]["sizing"] == 0


def test_add_template_line(client):
    template = _portal_template(client)
    response = client.post(f"/api/templates/{template['id']}/lines", json={
        "activity_type": "Process", "sizing": 2, "module": "Handover",
    })
    assert response.status_code == 200
    assert response.json()["sort_order"] == 1

    lines = client.get(f"/api/templates/{template['id']}").json()["lines"]
    assert [line["module"] for line in lines] == ["Portal", "Handover"]
    assert lines[0]["activity_type"] == "Development"


def test_delete_template_keeps_imported_lines(client, estimation, db):
    template = _portal_template(client)
    client.post(f"/api/estimations/{estimation['id']}/import", json={"template_ids": [template["id"]]})

    assert client.delete(f"/api/templates/{template['id']}").status_code == 200
    assert client.get(f"/api/templates/{template['id']}").status_code == 404

    data = client.get(f"/api/estimations/{estimation['id']}").json()
    assert data["template_id"] is None
    assert len(data["lines"]) == 1
    assert db.query(models.TemplateLine).count() == 0


# ============================================================
# Import
# ============================================================

def test_import_recalculates(client, estimation):
    template = _crm_template(client)
    response = client.post(f"/api/estimations/{estimation['id']}/import", json={"template_ids": [template["id"]]})
    assert response.status_code == 200
    data = response.json()

    assert data["template_id"] == template["id"]
    assert data["total_development_hours"] == 20
    assert data["total_support_hours"] == 4
    assert data["total_project_hours"] == 24
    by_module = {line["module"]: line for line in data["lines"]}
    assert by_module["Accounts"]["final_estimate"] == 24
    assert by_module["Hypercare"]["sizing"] == 4
    assert by_module["Kickoff"]["final_estimate"] == 4


def test_import_appends_after_existing_lines(client, estimation):
    client.post(f"/api/estimations/{estimation['id']}/lines", json={"sizing": 5, "module": "Existing"})
    template = _crm_template(client)
    client.post(f"/api/estimations/{estimation['id']}/import", json={"template_ids": [template["id"]]})

    lines = client.get(f"/api/estimations/{estimation['id']}/lines").json()
    assert [line["module"] for line in lines] == ["Existing", "Accounts", "Hypercare", "Kickoff"]
    assert [line["sort_order"] for line in lines] == [0, 1, 2, 3]


def test_import_several_templates_in_request_order(client, estimation):
    crm = _crm_template(client)
    portal = _portal_template(client)
    response = client.post(f"/api/estimations/{estimation['id']}/import", json={
        "template_ids": [portal["id"], crm["id"]],
    })
    data = response.json()

    assert [line["module"] for line in data["lines"]] == ["Portal", "Accounts", "Hypercare", "Kickoff"]
    assert data["template_id"] == crm["id"]
    # dev total 30 → support ceil(0.2 × 30) = 6
    assert data["total_development_hours"] == 30
    assert data["total_support_hours"] == 6


def test_importing_twice_duplicates_lines(client, estimation):
    template = _portal_template(client)
    for _ in range(2):
        client.post(f"/api/estimations/{estimation['id']}/import", json={"template_ids": [template["id"]]})
    data = client.get(f"/api/estimations/{estimation['id']}").json()
    assert len(data["lines"]) == 2
    assert data["total_project_hours"] == 20


def test_import_rejects_empty_list(client, estimation):
    response = client.post(f"/api/estimations/{estimation['id']}/import", json={"template_ids": []})
    assert response.status_code == 400


def test_import_unknown_template_writes_nothing(client, estimation, db):
    template = _portal_template(client)
    response = client.post(f"/api/estimations/{estimation['id']}/import", json={
        "template_ids": [template["id"], 404],
    })
    assert response.status_code == 404
    assert db.query(models.EstimationLine).count() == 0
    assert client.post("/api/estimations/999/import", json={"template_ids": [template["id"]]}).status_code == 404
