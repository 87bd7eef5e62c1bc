"""
Shared fixtures.

The store talks to the async pymongo API; in tests it runs against mongomock
through a thin awaitable wrapper, so queries are evaluated by mongomock's
MongoDB query emulation.
"""

import mongomock
import pytest

from clients.mongo.ReferenceStore import ReferenceStore


class AsyncMockCursor:
    def __init__(self, cursor):
        self._cursor = cursor

    def sort(self, spec):
        self._cursor = self._cursor.sort(spec)
        return self

    def skip(self, count):
        self._cursor = self._cursor.skip(count)
        return self

    def limit(self, count):
        self._cursor = self._cursor.limit(count)
        return self

    async def to_list(self, length=None):
        docs = list(self._cursor)
        return docs if length is None else docs[:length]


class AsyncMockCollection:
    def __init__(self, collection):
        self.sync = collection

    async def insert_one(self, document):
        return self.sync.insert_one(document)

    async def find_one(self, query, *args, **kwargs):
        return self.sync.find_one(query, *args, **kwargs)

    def find(self, query=None, projection=None):
        return AsyncMockCursor(self.sync.find(query or {}, projection))

    async def count_documents(self, query):
        return self.sync.count_documents(query)

    async def find_one_and_update(self, query, update, **kwargs):
        return self.sync.find_one_and_update(query, update, **kwargs)

    async def delete_one(self, query):
        return self.sync.delete_one(query)


class MockMongoClient:
    """Stands in for a connected clients.mongo.MongoClient."""

    def __init__(self):
        self.is_connected = True
        self.collection = AsyncMockCollection(mongomock.MongoClient().etnodb.etnodb)

    def get_collection(self, name=None):
        return self.collection


def make_raw_reference(**overrides):
    """A nested submission that passes validation."""
    raw = {
        "titulo": "Plantas medicinais de comunidades caiçaras",
        "autores": "Maria Silva, João Souza",
        "ano": "2019",
        "resumo": "Levantamento etnobotânico.",
        "DOI": "10.1000/xyz123",
        "comunidades": [
            {
                "nome": "Vila do Aventureiro",
                "tipo": "Caiçaras",
                "municipio": "Angra dos Reis",
                "estado": "RJ",
                "local": "Ilha Grande",
                "atividadesEconomicas": "pesca, turismo",
                "observacoes": "",
                "plantas": [
                    {
                        "nomeCientifico": "Foeniculum vulgare",
                        "nomeVernacular": "Erva Doce",
                        "tipoUso": "medicinal",
                    },
                    {
                        "nomeCientifico": "Bidens pilosa L.",
                        "nomeVernacular": "picão",
                        "tipoUso": "medicinal, alimentício",
                    },
                ],
            }
        ],
    }
    raw.update(overrides)
    return raw


@pytest.fixture
def mongo_client():
    return MockMongoClient()


@pytest.fixture
def store(mongo_client):
    return ReferenceStore(mongo_client)


@pytest.fixture
def raw_reference():
    return make_raw_reference()
