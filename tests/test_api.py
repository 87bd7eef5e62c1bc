"""
Tests for the HTTP shell, with the store dependency pointed at mongomock.
"""

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from models.configurators.Settings import Settings
from pipelines.dependencies import get_reference_store
from pipelines.main import create_app
from tests.conftest import make_raw_reference


@pytest.fixture
def client(store):
    app = create_app(settings=Settings())
    app.dependency_overrides[get_reference_store] = lambda: store
    return TestClient(app)


FLAT_FORM = {
    "titulo": "Quintais agroflorestais",
    "autores": "Pedro Lima",
    "ano": "2021",
    "comunidades[0][nome]": "Quilombo do Campinho",
    "comunidades[0][municipio]": "Paraty",
    "comunidades[0][estado]": "RJ",
    "comunidades[0][plantas][0][nomeCientifico]": "Mikania glomerata",
    "comunidades[0][plantas][0][nomeVernacular]": "guaco",
    "comunidades[0][plantas][0][tipoUso]": "medicinal",
}


def submit(client, payload=None):
    response = client.post("/acquisition/references", json=payload or make_raw_reference())
    assert response.status_code == 201
    return response.json()["id"]


class TestAcquisitionRoutes:
    def test_submit_json(self, client):
        response = client.post("/acquisition/references", json=make_raw_reference())

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["status"] == "pending"
        assert ObjectId.is_valid(body["id"])

    def test_submit_flat_form(self, client):
        response = client.post("/acquisition/references", data=FLAT_FORM)

        assert response.status_code == 201
        reference = client.get(f"/curation/references/{response.json()['id']}").json()
        assert reference["communities"][0]["state"] == "Rio de Janeiro"
        assert reference["communities"][0]["plants"][0]["vernacular_names"] == ["guaco"]

    def test_submit_invalid(self, client):
        response = client.post("/acquisition/references", json=make_raw_reference(titulo="", ano="3000"))

        assert response.status_code == 422
        assert response.json()["detail"]["errors"] == [
            "Título é obrigatório",
            "Ano deve estar entre 1500 e 2100",
        ]

    def test_submit_form_with_non_decimal_index(self, client):
        response = client.post(
            "/acquisition/references",
            data={"titulo": "T", "comunidades[²][nome]": "X"},
        )
        assert response.status_code == 422
        assert "Pelo menos uma comunidade é obrigatória" in response.json()["detail"]["errors"]

    def test_submit_malformed_json(self, client):
        response = client.post(
            "/acquisition/references",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400

    def test_community_types(self, client):
        types = client.get("/acquisition/community-types").json()["community_types"]
        assert len(types) == 27
        assert "Caiçaras" in types


class TestCurationRoutes:
    def test_get_reference(self, client):
        reference_id = submit(client)

        response = client.get(f"/curation/references/{reference_id}")

        assert response.status_code == 200
        assert response.json()["authors"] == ["SILVA, M.", "SOUZA, J."]

    def test_get_missing_reference(self, client):
        assert client.get(f"/curation/references/{ObjectId()}").status_code == 404
        assert client.get("/curation/references/not-an-id").status_code == 404

    def test_update_reference(self, client):
        reference_id = submit(client)

        response = client.put(
            f"/curation/references/{reference_id}",
            json=make_raw_reference(titulo="Título revisado"),
        )

        assert response.status_code == 200
        assert response.json()["title"] == "Título revisado"
        assert response.json()["status"] == "pending"

    def test_update_invalid_returns_preserved_reference(self, client):
        reference_id = submit(client)
        edit = make_raw_reference(titulo="Título revisado", autores="")

        response = client.put(f"/curation/references/{reference_id}", json=edit)

        assert response.status_code == 422
        body = response.json()
        assert body["errors"] == ["Pelo menos um autor é obrigatório"]
        assert body["reference"]["title"] == "Título revisado"
        assert body["reference"]["authors"] == ["SILVA, M.", "SOUZA, J."]

    def test_update_missing_reference(self, client):
        response = client.put(f"/curation/references/{ObjectId()}", json=make_raw_reference())
        assert response.status_code == 404

    def test_status_changes(self, client):
        reference_id = submit(client)

        response = client.post(f"/curation/references/{reference_id}/status", json={"status": "approved"})
        assert response.status_code == 200
        assert response.json()["status"] == "approved"

        response = client.post(f"/curation/references/{reference_id}/status", json={"status": "archived"})
        assert response.status_code == 400

        response = client.post(f"/curation/references/{ObjectId()}/status", json={"status": "approved"})
        assert response.status_code == 404

    def test_list_references(self, client):
        first = submit(client, make_raw_reference(titulo="Alfa"))
        submit(client, make_raw_reference(titulo="Beta"))
        client.post(f"/curation/references/{first}/status", json={"status": "approved"})

        listing = client.get("/curation/references", params={"sort": "titulo", "order": "asc"}).json()
        pending = client.get("/curation/references", params={"status": "pending"}).json()

        assert listing["total"] == 2
        assert [item["title"] for item in listing["items"]] == ["Alfa", "Beta"]
        assert [item["title"] for item in pending["items"]] == ["Beta"]

    def test_list_rejects_bad_order(self, client):
        assert client.get("/curation/references", params={"order": "sideways"}).status_code == 422


class TestPresentationRoutes:
    def test_search_only_returns_approved(self, client):
        approved = submit(client, make_raw_reference(titulo="Aprovada"))
        submit(client, make_raw_reference(titulo="Pendente"))
        client.post(f"/curation/references/{approved}/status", json={"status": "approved"})

        body = client.get("/presentation/search", params={"planta": "erva", "estado": "rio de janeiro"}).json()

        assert body["total"] == 1
        assert body["total_pages"] == 1
        assert body["items"][0]["title"] == "Aprovada"

    def test_search_body(self, client):
        approved = submit(client)
        client.post(f"/curation/references/{approved}/status", json={"status": "approved"})

        response = client.post(
            "/presentation/search",
            json={"filters": {"comunidade": "aventureiro"}, "page": 1, "limit": 10},
        )

        assert response.status_code == 200
        assert response.json()["limit"] == 10
        assert response.json()["total"] == 1

    def test_search_limit_bounds(self, client):
        assert client.get("/presentation/search", params={"limit": 500}).status_code == 422


class TestApp:
    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] == "ok"
        assert body["database_connected"] is False

    def test_single_context(self, store):
        app = create_app(contexts=["presentation"], settings=Settings())
        app.dependency_overrides[get_reference_store] = lambda: store
        client = TestClient(app)

        assert client.get("/presentation/search").status_code == 200
        assert client.get("/acquisition/community-types").status_code == 404

    def test_unknown_context(self):
        with pytest.raises(ValueError):
            create_app(contexts=["billing"], settings=Settings())

    def test_store_unavailable(self):
        client = TestClient(create_app(settings=Settings()))
        assert client.get("/presentation/search").status_code == 503
