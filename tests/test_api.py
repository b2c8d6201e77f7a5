"""
Tests for the REST API endpoints.
"""
import pytest
from fastapi.testclient import TestClient

from main import create_app
from services.nrm2_templates import NRM2TemplateProvider
from store.repository import CostRepository


def create_model(http, **body):
    body.setdefault("projectName", "Test")
    response = http.post("/api/models", json=body)
    assert response.status_code == 201
    return response.json()["data"]


class TestBasicRoutes:
    """Tests for root, health and unknown routes."""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["message"] == "Cost Insight Dashboard API"

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_unknown_route(self, client):
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found", "message": "Cannot GET /api/nope"}


class TestListModels:
    """Tests for GET /api/models"""

    def test_empty(self, client):
        response = client.get("/api/models")
        assert response.status_code == 200
        assert response.json() == {"success": True, "count": 0, "data": []}

    def test_lists_seeded_models(self, client, repository):
        repository.seed_data()
        data = client.get("/api/models").json()

        assert data["count"] == 3
        first = data["data"][0]
        assert first["projectName"] == "Block A Residential Development"
        assert first["projectRef"] == "PRJ-2024-001"
        assert first["totalCost"] == 110000.00
        assert first["status"] == "draft"
        assert "createdAt" in first and "updatedAt" in first


class TestGetModel:
    """Tests for GET /api/models/{id}"""

    def test_model_with_works(self, client):
        created = create_model(client)
        model_id = created["model"]["id"]

        response = client.get(f"/api/models/{model_id}")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["model"]["id"] == model_id
        assert data["worksCount"] == len(data["works"]) == created["worksCount"]

    def test_unknown_model(self, client):
        response = client.get("/api/models/cm_missing")
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": "Not Found",
            "message": "Cost model with ID 'cm_missing' not found",
        }


class TestCreateModel:
    """Tests for POST /api/models"""

    def test_create_then_calculate(self, client, templates):
        response = client.post("/api/models", json={"projectName": "Test", "gifa": 100})
        assert response.status_code == 201

        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Cost model created successfully"

        model = body["data"]["model"]
        works = body["data"]["works"]
        assert model["totalCost"] == 0
        assert model["gifa"] == 100
        assert model["status"] == "draft"
        assert "projectRef" not in model
        assert len(works) == body["data"]["worksCount"] == len(templates.get_defaults())
        assert [w["elementCode"] for w in works] == [e.code for e in templates.get_defaults()]
        assert all(w["quantity"] == 0 and w["unitRate"] == 0 and w["totalCost"] == 0 for w in works)
        assert all(w["costModelId"] == model["id"] for w in works)

        response = client.post(f"/api/models/{model['id']}/calculate")
        assert response.status_code == 200
        assert response.json()["data"]["totalCost"] == 0

    def test_all_fields(self, client):
        data = create_model(
            client,
            projectName="School Extension Project",
            projectRef="PRJ-2024-003",
            client="Local Education Authority",
            gifa=950.5,
            status="archived",
            preparedBy="Mike Brown",
        )
        model = data["model"]
        assert model["client"] == "Local Education Authority"
        assert model["status"] == "archived"
        assert model["preparedBy"] == "Mike Brown"

    @pytest.mark.parametrize("body,field", [
        ({}, "projectName"),
        ({"projectName": ""}, "projectName"),
        ({"projectName": "x" * 201}, "projectName"),
        ({"projectName": "Test", "projectRef": "x" * 51}, "projectRef"),
        ({"projectName": "Test", "client": "x" * 201}, "client"),
        ({"projectName": "Test", "preparedBy": "x" * 101}, "preparedBy"),
        ({"projectName": "Test", "gifa": 0}, "gifa"),
        ({"projectName": "Test", "gifa": -5}, "gifa"),
        ({"projectName": "Test", "gifa": "100"}, "gifa"),
        ({"projectName": "Test", "status": "pending"}, "status"),
        ({"projectName": "Test", "projectRef": None}, "projectRef"),
        ({"projectName": "Test", "client": None}, "client"),
        ({"projectName": "Test", "gifa": None}, "gifa"),
        ({"projectName": "Test", "preparedBy": None}, "preparedBy"),
    ])
    def test_validation_errors(self, client, body, field):
        response = client.post("/api/models", json=body)
        assert response.status_code == 400

        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Validation Error"
        assert field in [d["field"] for d in data["details"]]

    def test_broken_configuration(self, repository, tmp_path):
        app = create_app(
            repository=repository,
            templates=NRM2TemplateProvider(tmp_path / "missing.json"),
        )
        with TestClient(app) as client:
            response = client.post("/api/models", json={"projectName": "Test"})
            assert response.status_code == 500
            assert response.json()["message"] == "Server configuration error"
            assert client.get("/api/models").json()["count"] == 0


class TestCalculate:
    """Tests for POST /api/models/{id}/calculate"""

    def test_sums_work_totals(self, client):
        data = create_model(client)
        model_id = data["model"]["id"]
        works = data["works"]

        client.patch(f"/api/measured-works/{works[0]['id']}", json={"quantity": 150, "unitRate": 450})
        client.patch(f"/api/measured-works/{works[1]['id']}", json={"quantity": 50, "unitRate": 850})

        # Not recalculated until asked
        assert client.get(f"/api/models/{model_id}").json()["data"]["model"]["totalCost"] == 0

        response = client.post(f"/api/models/{model_id}/calculate")
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Total cost recalculated successfully"
        assert body["data"]["totalCost"] == 110000.00
        assert body["data"]["model"]["totalCost"] == 110000.00

    def test_unknown_model(self, client):
        response = client.post("/api/models/cm_missing/calculate")
        assert response.status_code == 404


class TestAddWork:
    """Tests for POST /api/models/{id}/works"""

    WORK = {
        "elementCode": "2.1",
        "elementName": "Frame",
        "description": "Structural frame works",
        "quantity": 50,
        "unit": "m2",
        "unitRate": 850,
    }

    def test_add_work(self, client):
        model_id = create_model(client)["model"]["id"]
        response = client.post(f"/api/models/{model_id}/works", json=self.WORK)

        assert response.status_code == 201
        work = response.json()["data"]
        assert work["costModelId"] == model_id
        assert work["totalCost"] == 42500.00
        assert "notes" not in work

    def test_unknown_model(self, client):
        response = client.post("/api/models/cm_missing/works", json=self.WORK)
        assert response.status_code == 404

    def test_invalid_unit(self, client):
        model_id = create_model(client)["model"]["id"]
        response = client.post(f"/api/models/{model_id}/works", json={**self.WORK, "unit": "kg"})
        assert response.status_code == 400

    def test_null_notes(self, client):
        model_id = create_model(client)["model"]["id"]
        response = client.post(f"/api/models/{model_id}/works", json={**self.WORK, "notes": None})
        assert response.status_code == 400
        assert "notes" in [d["field"] for d in response.json()["details"]]

    def test_total_overflow(self, client, repository):
        model_id = create_model(client)["model"]["id"]
        works_before = len(repository.get_works_by_model_id(model_id))

        response = client.post(
            f"/api/models/{model_id}/works",
            json={**self.WORK, "quantity": 1e300, "unitRate": 1e10},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Cost total is out of range"
        assert len(repository.get_works_by_model_id(model_id)) == works_before


class TestUpdateWork:
    """Tests for PATCH /api/measured-works/{id}"""

    @pytest.fixture
    def work(self, client):
        return create_model(client)["works"][0]

    def test_update_quantity_and_rate(self, client, work):
        response = client.patch(
            f"/api/measured-works/{work['id']}",
            json={"quantity": 150, "unitRate": 450},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Measured work updated successfully"
        assert body["data"]["totalCost"] == 67500.00

    def test_update_notes_keeps_total(self, client, work):
        client.patch(f"/api/measured-works/{work['id']}", json={"quantity": 2, "unitRate": 5})
        response = client.patch(f"/api/measured-works/{work['id']}", json={"notes": "Checked"})

        data = response.json()["data"]
        assert data["notes"] == "Checked"
        assert data["quantity"] == 2
        assert data["unitRate"] == 5
        assert data["totalCost"] == 10

    def test_empty_body(self, client, work):
        response = client.patch(f"/api/measured-works/{work['id']}", json={})
        assert response.status_code == 400
        assert response.json()["message"] == "No update fields provided"

    def test_unknown_field(self, client, work):
        response = client.patch(f"/api/measured-works/{work['id']}", json={"totalCost": 5})
        assert response.status_code == 400
        assert "totalCost" in [d["field"] for d in response.json()["details"]]

    @pytest.mark.parametrize("body", [
        {"quantity": -1},
        {"unitRate": -0.01},
        {"quantity": "5"},
        {"quantity": None},
        {"unit": "kg"},
        {"elementCode": ""},
        {"elementName": "x" * 201},
        {"description": "x" * 501},
        {"notes": "x" * 501},
    ])
    def test_invalid_values(self, client, work, body):
        response = client.patch(f"/api/measured-works/{work['id']}", json=body)
        assert response.status_code == 400

    @pytest.mark.parametrize("body", [
        {"quantity": 1e308, "unitRate": 10},
        {"quantity": 1e300, "unitRate": 1e10},
    ])
    def test_total_overflow(self, client, repository, work, body):
        client.patch(f"/api/measured-works/{work['id']}", json={"quantity": 2, "unitRate": 5})

        response = client.patch(f"/api/measured-works/{work['id']}", json=body)
        assert response.status_code == 400
        assert response.json()["message"] == "Cost total is out of range"

        # Rejected update leaves the work as it was
        stored = repository.find_work_by_id(work["id"])
        assert stored.quantity == 2
        assert stored.unit_rate == 5
        assert stored.total_cost == 10

    def test_unknown_work(self, client):
        response = client.patch("/api/measured-works/mw_missing", json={"notes": "x"})
        assert response.status_code == 404
        assert response.json()["message"] == "Measured work with ID 'mw_missing' not found"


class TestDeletes:
    """Tests for DELETE endpoints"""

    def test_delete_model_cascades(self, client, repository):
        data = create_model(client)
        model_id = data["model"]["id"]

        response = client.delete(f"/api/models/{model_id}")
        assert response.status_code == 204
        assert response.content == b""

        assert client.get(f"/api/models/{model_id}").status_code == 404
        assert repository.get_works_by_model_id(model_id) == []

    def test_delete_unknown_model(self, client):
        assert client.delete("/api/models/cm_missing").status_code == 404

    def test_delete_work(self, client):
        data = create_model(client)
        work_id = data["works"][0]["id"]

        assert client.delete(f"/api/measured-works/{work_id}").status_code == 204
        assert client.delete(f"/api/measured-works/{work_id}").status_code == 404

        detail = client.get(f"/api/models/{data['model']['id']}").json()["data"]
        assert detail["worksCount"] == data["worksCount"] - 1


class TestStartup:
    """Tests for application startup."""

    def test_seed_on_startup(self, monkeypatch, templates):
        from config import settings

        monkeypatch.setattr(settings, "SEED_DATA", True)
        repository = CostRepository()
        with TestClient(create_app(repository=repository, templates=templates)) as client:
            assert client.get("/api/models").json()["count"] == 3
