"""
Tests for the configuration service API
"""
import pytest
from fastapi.testclient import TestClient

from conftest import FUNKSVD_SCRIPT, ITEMITEM_SCRIPT
from service.app import app, start
from service.configuration_service import ConfigurationService


@pytest.fixture
def client():
    ConfigurationService.reset_instance()
    yield TestClient(app)
    ConfigurationService.reset_instance()


def test_health_check(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_components(client):
    response = client.get("/components", params={"kind": "baseline"})
    assert response.status_code == 200
    names = [c["name"] for c in response.json()]
    assert "org.grouplens.lenskit.baseline.ItemUserMeanPredictor" in names
    assert len(names) == 5

    modules = client.get("/components", params={"kind": "module"}).json()
    item = next(m for m in modules if m["aliases"] == ["ItemItem"])
    paths = {p["path"]: p for p in item["parameters"]}
    assert paths["knn.similarityDamping"]["default"] == 100.0
    assert paths["core.baseline"]["component_kind"] == "baseline"


def test_unknown_component_kind_is_rejected(client):
    assert client.get("/components", params={"kind": "gizmo"}).status_code == 422


def test_bundled_algorithms(client):
    response = client.get("/algorithms")
    assert response.status_code == 200
    names = sorted(a["name"] for a in response.json()["algorithms"])
    assert names == ["FunkSVD", "ItemItem"]

    item = client.get("/algorithms/itemitem").json()
    assert item["module"] == "org.grouplens.lenskit.knn.item.ItemRecommenderModule"
    assert item["parameters"]["knn.similarityDamping"] == 50.0
    assert "rec.module.knn.similarityDamping = 50" in item["script"]

    assert client.get("/algorithms/nothing").status_code == 404


def test_parse_script(client):
    response = client.post("/algorithms/parse", json={"script": FUNKSVD_SCRIPT})
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "FunkSVD"
    assert body["effective_parameters"]["clampingFunction"] == (
        "org.grouplens.lenskit.svd.RatingRangeClamp"
    )
    assert body["source"] == "<request>"


def test_parse_name_fallback(client):
    script = "rec.module = ItemItem\nrec.module.knn.neighborhoodSize = 40\n"
    body = client.post("/algorithms/parse", json={"script": script, "name": "wide"}).json()
    assert body["name"] == "wide"
    assert body["effective_parameters"]["knn.neighborhoodSize"] == 40


def test_parse_validation_errors(client):
    script = ITEMITEM_SCRIPT + "rec.module.knn.neighborhoodSize = 0\nrec.bogus = 1\n"
    response = client.post("/algorithms/parse", json={"script": script})
    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "ConfigurationValidationError"
    assert len(body["errors"]) == 2

    lenient = client.post("/algorithms/parse", json={"script": script, "strict": False})
    assert lenient.status_code == 422
    assert len(lenient.json()["errors"]) == 1


def test_parse_syntax_error(client):
    response = client.post("/algorithms/parse", json={"script": "rec.name = \n"})
    assert response.status_code == 422
    assert response.json()["error"] == "ScriptSyntaxError"


def test_parse_requires_script(client):
    assert client.post("/algorithms/parse", json={"script": "   "}).status_code == 422
    assert client.post("/algorithms/parse", json={}).status_code == 422


def test_broken_script_does_not_hide_the_others(client, monkeypatch, tmp_path):
    (tmp_path / "broken.rec").write_text("rec.module = ItemItem\nrec.module.knn.bogus = 1\n")
    (tmp_path / "wide.rec").write_text("rec.module = ItemItem\nrec.module.knn.neighborhoodSize = 40\n")
    monkeypatch.setenv("RECCONFIG_SCRIPT_DIRS", str(tmp_path))
    ConfigurationService.reset_instance()

    response = client.get("/algorithms")
    assert response.status_code == 200
    names = sorted(a["name"] for a in response.json()["algorithms"])
    assert names == ["FunkSVD", "ItemItem", "wide"]

    assert client.get("/algorithms/wide").status_code == 200
    assert client.get("/algorithms/broken").status_code == 404


def test_run_module_reuses_app_start():
    import service.run

    assert service.run.start is start
    assert not hasattr(service.run, "logging")
