import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load the appropriate .env file on module import
env = os.environ.get("CATALOG_ENV", "development").lower()
env_file = f".env.{env}"
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    # Fall back to the default .env file
    load_dotenv()


STORAGE_BACKENDS = ("postgres", "memory")


@dataclass
class Config:
    environment: str
    database_url: Optional[str]
    storage_backend: str
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            environment=env,
            database_url=os.environ.get("DATABASE_URL"),
            storage_backend=os.environ.get("CATALOG_STORAGE", "postgres").lower(),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )


config = Config.from_env()
