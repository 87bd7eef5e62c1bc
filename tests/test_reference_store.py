"""
Tests for the MongoDB reference store, run against mongomock.
"""

import asyncio
from datetime import datetime

import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

from clients.mongo.ReferenceStore import ReferenceStore
from clients.mongo.errors import ReferenceNotFoundError, ReferenceStoreError
from models.engines.FormMapper import normalize_record
from models.entities.workflow.ReferenceStatus import InvalidStatusError
from tests.conftest import make_raw_reference


def run(coro):
    return asyncio.run(coro)


def insert_reference(store, **overrides):
    return run(store.insert(normalize_record(make_raw_reference(**overrides))))


class FailingCollection:
    """Collection whose every call fails like a lost connection."""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise PyMongoError("connection refused")
        return fail


class FailingClient:
    def get_collection(self, name=None):
        return FailingCollection()


class TestInsertAndFind:
    def test_insert_applies_creation_defaults(self, store, mongo_client):
        stored = insert_reference(store)

        assert ObjectId.is_valid(stored.id)
        assert stored.status == "pending"
        assert stored.created_at is not None
        assert stored.created_at == stored.updated_at

        doc = mongo_client.collection.sync.find_one({"_id": ObjectId(stored.id)})
        assert doc["titulo"] == "Plantas medicinais de comunidades caiçaras"
        assert doc["status"] == "pending"
        assert doc["comunidades"][0]["estado"] == "Rio de Janeiro"
        assert doc["comunidades"][0]["plantas"][0]["nomeVernacular"] == ["erva-doce"]

    def test_insert_keeps_explicit_status(self, store):
        reference = normalize_record(make_raw_reference())
        reference.status = "approved"
        assert run(store.insert(reference)).status == "approved"

    def test_find_by_id(self, store):
        stored = insert_reference(store)

        found = run(store.find_by_id(stored.id))

        assert found.id == stored.id
        assert found.authors == ["SILVA, M.", "SOUZA, J."]
        assert found.communities[0].plants[1].use_types == ["medicinal", "alimentício"]

    def test_find_by_id_missing_or_malformed(self, store):
        assert run(store.find_by_id(str(ObjectId()))) is None
        assert run(store.find_by_id("not-an-id")) is None
        assert run(store.find_by_id(None)) is None

    def test_find_and_count(self, store):
        insert_reference(store, titulo="A")
        insert_reference(store, titulo="B")

        assert run(store.count()) == 2
        assert run(store.count({"titulo": "A"})) == 1
        titles = [r.title for r in run(store.find(sort=[("titulo", 1)]))]
        assert titles == ["A", "B"]
        assert len(run(store.find(skip=1, limit=1))) == 1


class TestUpdates:
    def test_replace_keeps_status_and_creation_time(self, store):
        stored = insert_reference(store)
        run(store.set_status(stored.id, "approved"))
        before = run(store.find_by_id(stored.id))

        edited = normalize_record(make_raw_reference(titulo="Novo título", ano="2020"))
        edited.communities = edited.communities[:1]
        edited.communities[0].plants = edited.communities[0].plants[:1]
        updated = run(store.replace(stored.id, edited))

        assert updated.title == "Novo título"
        assert updated.year == 2020
        assert updated.status == "approved"
        assert updated.created_at == before.created_at
        assert updated.updated_at >= before.updated_at
        assert len(updated.communities[0].plants) == 1

    def test_replace_missing_reference(self, store):
        reference = normalize_record(make_raw_reference())
        with pytest.raises(ReferenceNotFoundError):
            run(store.replace(str(ObjectId()), reference))
        with pytest.raises(ReferenceNotFoundError):
            run(store.replace("xyz", reference))

    def test_set_status(self, store):
        stored = insert_reference(store)

        updated = run(store.set_status(stored.id, "rejected"))

        assert updated.status == "rejected"
        assert run(store.find_by_id(stored.id)).status == "rejected"

    def test_updates_refresh_only_the_update_time(self, store, mongo_client):
        stored = insert_reference(store)
        old = datetime(2000, 1, 1)

        def age_update_time():
            mongo_client.collection.sync.update_one(
                {"_id": ObjectId(stored.id)}, {"$set": {"updatedAt": old}}
            )
            return run(store.find_by_id(stored.id))

        before = age_update_time()
        changed = run(store.set_status(stored.id, "approved"))
        assert changed.updated_at.replace(tzinfo=None) > old
        assert changed.created_at == before.created_at

        before = age_update_time()
        replaced = run(store.replace(stored.id, normalize_record(make_raw_reference(titulo="Outro"))))
        assert replaced.updated_at.replace(tzinfo=None) > old
        assert replaced.created_at == before.created_at
        assert replaced.status == "approved"

    def test_set_status_rejects_unknown_status_before_writing(self, store):
        stored = insert_reference(store)
        with pytest.raises(InvalidStatusError):
            run(store.set_status(stored.id, "archived"))
        assert run(store.find_by_id(stored.id)).status == "pending"

    def test_set_status_missing_reference(self, store):
        with pytest.raises(ReferenceNotFoundError):
            run(store.set_status(str(ObjectId()), "approved"))
        with pytest.raises(ReferenceNotFoundError):
            run(store.set_status("123", "approved"))

    def test_delete(self, store):
        stored = insert_reference(store)

        assert run(store.delete(stored.id)) is True
        assert run(store.find_by_id(stored.id)) is None
        with pytest.raises(ReferenceNotFoundError):
            run(store.delete(stored.id))
        with pytest.raises(ReferenceNotFoundError):
            run(store.delete("bad"))


class TestPagination:
    def test_search_pages(self, store):
        for index in range(5):
            stored = insert_reference(store, titulo=f"Referência {index}")
            run(store.set_status(stored.id, "approved"))
        insert_reference(store, titulo="Pendente")

        first = run(store.search(None, page=1, limit=2))
        last = run(store.search(None, page=3, limit=2))

        assert first.total == 5
        assert first.total_pages == 3
        assert len(first.items) == 2
        assert first.has_next and not first.has_prev
        assert len(last.items) == 1
        assert not last.has_next

    def test_search_with_no_matches(self, store):
        result = run(store.search({"planta": "inexistente"}))
        assert result.total == 0
        assert result.total_pages == 0
        assert result.items == []

    def test_invalid_page_arguments(self, store):
        with pytest.raises(ValueError):
            run(store.search(None, page=0, limit=10))
        with pytest.raises(ValueError):
            run(store.search(None, page=1, limit=0))

    def test_list_references(self, store):
        first = insert_reference(store, titulo="Beta")
        insert_reference(store, titulo="Alfa")
        run(store.set_status(first.id, "approved"))

        everything = run(store.list_references(sort="titulo", order="asc"))
        approved = run(store.list_references(status="approved"))
        unknown_status = run(store.list_references(status="archived"))

        assert [r.title for r in everything.items] == ["Alfa", "Beta"]
        assert everything.items[0].communities == []
        assert [r.title for r in approved.items] == ["Beta"]
        assert unknown_status.total == 2

    def test_list_references_ignores_unknown_sort_field(self, store):
        insert_reference(store)
        assert run(store.list_references(sort="$where")).total == 1


class TestDriverFailures:
    def test_errors_are_wrapped(self):
        store = ReferenceStore(FailingClient())
        reference = normalize_record(make_raw_reference())

        with pytest.raises(ReferenceStoreError, match="Falha ao salvar referência"):
            run(store.insert(reference))
        with pytest.raises(ReferenceStoreError, match="Falha ao buscar referência"):
            run(store.find_by_id(str(ObjectId())))
        with pytest.raises(ReferenceStoreError, match="Falha ao atualizar status"):
            run(store.set_status(str(ObjectId()), "approved"))
        with pytest.raises(ReferenceStoreError, match="Falha na busca"):
            run(store.search())

    def test_not_found_is_a_store_error(self):
        error = ReferenceNotFoundError("abc")
        assert isinstance(error, ReferenceStoreError)
        assert str(error) == "Referência não encontrada"
