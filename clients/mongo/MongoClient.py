"""
MongoDB client for the ethnobotanical reference collection.

Owns the connection lifecycle (connect, reconnect, close) and the index set
the searches rely on. The client is built explicitly and handed to the store,
so there is no module-level connection state.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING, TEXT, AsyncMongoClient
from pymongo.errors import ConnectionFailure, OperationFailure, PyMongoError

from clients.mongo.errors import ReferenceStoreError
from models.configurators.MongoDBConfig import MongoDBConfig

logger = logging.getLogger(__name__)

# Server error codes meaning "an equivalent index already exists"
INDEX_CONFLICT_CODES = {85, 86}

INDEXES: List[Dict[str, Any]] = [
    # Status filter for curation and the approved-only public search
    {"name": "status_1", "keys": [("status", ASCENDING)]},
    # Most recent references first in listings
    {"name": "createdAt_-1", "keys": [("createdAt", DESCENDING)]},
    # Exact-match filters of the public search
    {"name": "comunidades.estado_1", "keys": [("comunidades.estado", ASCENDING)]},
    {"name": "comunidades.municipio_1", "keys": [("comunidades.municipio", ASCENDING)]},
    # A collection holds a single text index, so every searchable text field shares it
    {
        "name": "referencias_text",
        "keys": [
            ("titulo", TEXT),
            ("comunidades.nome", TEXT),
            ("comunidades.plantas.nomeCientifico", TEXT),
            ("comunidades.plantas.nomeVernacular", TEXT),
        ],
        "options": {"default_language": "portuguese"},
    },
]


class MongoClient:
    """Client for interacting with MongoDB for reference storage."""

    def __init__(self, config: Optional[MongoDBConfig] = None):
        """Initialize MongoDB client.

        Args:
            config: MongoDB configuration. If None, loads from environment.
        """
        self.config = config or MongoDBConfig.from_env()
        self.client = None
        self.db = None
        self.is_connected = False

    async def connect(self) -> bool:
        """Establish connection to MongoDB.

        Returns:
            True if connection successful, False otherwise
        """
        if self.is_connected and self.client is not None:
            logger.debug("Already connected to MongoDB")
            return True

        try:
            self.client = AsyncMongoClient(
                self.config.uri,
                maxPoolSize=self.config.max_pool_size,
                minPoolSize=self.config.min_pool_size,
                serverSelectionTimeoutMS=self.config.server_selection_timeout,
                socketTimeoutMS=self.config.socket_timeout,
            )

            # Test connection
            await self.client.admin.command('ping')

            self.db = self.client[self.config.database]
            self.is_connected = True

            logger.info(f"Successfully connected to MongoDB database: {self.config.database}")
            return True

        except ConnectionFailure as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
        except PyMongoError as e:
            logger.error(f"Unexpected error connecting to MongoDB: {e}")

        await self._discard_client()
        return False

    async def reconnect(self, max_retries: int = 5, retry_delay: float = 3.0) -> bool:
        """Retry ``connect`` with a fixed delay between attempts."""
        for attempt in range(1, max_retries + 1):
            logger.info(f"Reconnection attempt {attempt}/{max_retries}")
            if await self.connect():
                return True
            if attempt < max_retries:
                logger.info(f"Retry in {retry_delay}s...")
                await asyncio.sleep(retry_delay)

        logger.error(f"Failed to reconnect after {max_retries} attempts")
        return False

    def get_collection(self, name: Optional[str] = None):
        """Return the reference collection (or ``name``)."""
        if not self.is_connected or self.db is None:
            raise ReferenceStoreError("Banco de dados não conectado")
        return self.db[name or self.config.collection]

    async def create_indexes(self) -> List[str]:
        """Create the indexes used by curation listings and public search.

        Returns:
            Names of the indexes present on the collection afterwards
        """
        collection = self.get_collection()
        for index in INDEXES:
            try:
                await collection.create_index(index["keys"], name=index["name"], **index.get("options", {}))
                logger.info(f"Index created: {index['name']}")
            except OperationFailure as e:
                if e.code in INDEX_CONFLICT_CODES:
                    logger.info(f"Index already exists: {index['name']}")
                else:
                    logger.error(f"Failed to create index {index['name']}: {e}")
                    raise ReferenceStoreError(f"Falha ao criar índice {index['name']}: {e}") from e

        existing = await collection.index_information()
        logger.info(f"Total indexes on collection '{self.config.collection}': {len(existing)}")
        return sorted(existing)

    async def drop_indexes(self):
        """Drop every index except the mandatory ``_id`` one."""
        try:
            await self.get_collection().drop_indexes()
            logger.info("All custom indexes dropped")
        except PyMongoError as e:
            logger.error(f"Failed to drop indexes: {e}")
            raise ReferenceStoreError(f"Falha ao remover índices: {e}") from e

    async def _discard_client(self):
        if self.client is not None:
            await self.client.close()
        self.client = None
        self.db = None
        self.is_connected = False

    async def close(self):
        """Close MongoDB connection."""
        if self.client is not None:
            await self._discard_client()
            logger.info("Disconnected from MongoDB")
