"""
Configuration settings for the ethnobotanical reference system.

Centralizes the service-level parameters (ports per context, logging,
environment) next to the MongoDB configuration.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from models.configurators.MongoDBConfig import MongoDBConfig


@dataclass
class Settings:
    """Main configuration container."""
    mongodb: MongoDBConfig = field(default_factory=MongoDBConfig)

    # One port per context when served separately
    acquisition_port: int = 3001
    curation_port: int = 3002
    presentation_port: int = 3003
    api_host: str = "0.0.0.0"

    # Global settings
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def port_for(self, context: str) -> int:
        ports = {
            "acquisition": self.acquisition_port,
            "curation": self.curation_port,
            "presentation": self.presentation_port,
        }
        if context not in ports:
            raise ValueError(f"Unknown context: {context}")
        return ports[context]

    @classmethod
    def from_env(cls) -> 'Settings':
        """Create settings from environment variables."""
        load_dotenv()
        return cls(
            mongodb=MongoDBConfig.from_env(),
            acquisition_port=int(os.getenv("PORT_ACQUISITION", "3001")),
            curation_port=int(os.getenv("PORT_CURATION", "3002")),
            presentation_port=int(os.getenv("PORT_PRESENTATION", "3003")),
            api_host=os.getenv("API_HOST", "0.0.0.0"),
            environment=os.getenv("ENVIRONMENT", "development"),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
