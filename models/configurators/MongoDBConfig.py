"""
MongoDB configuration for the ethnobotanical reference store.

Connection parameters come from the environment (optionally a .env file);
the defaults target a local development server.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass
class MongoDBConfig:
    """Configuration class for MongoDB connections."""

    uri: str = "mongodb://localhost:27017/etnodb"
    database: str = "etnodb"
    collection: str = "etnodb"
    max_pool_size: int = 10
    min_pool_size: int = 2
    server_selection_timeout: int = 5000  # milliseconds
    socket_timeout: int = 45000  # milliseconds

    @classmethod
    def from_env(cls) -> 'MongoDBConfig':
        """Create configuration from environment variables.

        Environment variables:
            MONGO_URI: Connection string (default: mongodb://localhost:27017/etnodb)
            MONGODB_DATABASE: Database name (default: etnodb)
            MONGODB_COLLECTION: Collection holding references (default: etnodb)
            MONGODB_MAX_POOL_SIZE: Maximum pooled connections (default: 10)
            MONGODB_MIN_POOL_SIZE: Minimum pooled connections (default: 2)
            MONGODB_TIMEOUT: Server selection timeout in ms (default: 5000)
            MONGODB_SOCKET_TIMEOUT: Socket timeout in ms (default: 45000)

        Returns:
            MongoDBConfig instance
        """
        load_dotenv()
        return cls(
            uri=os.getenv("MONGO_URI", cls.uri),
            database=os.getenv("MONGODB_DATABASE", cls.database),
            collection=os.getenv("MONGODB_COLLECTION", cls.collection),
            max_pool_size=int(os.getenv("MONGODB_MAX_POOL_SIZE", "10")),
            min_pool_size=int(os.getenv("MONGODB_MIN_POOL_SIZE", "2")),
            server_selection_timeout=int(os.getenv("MONGODB_TIMEOUT", "5000")),
            socket_timeout=int(os.getenv("MONGODB_SOCKET_TIMEOUT", "45000")),
        )
