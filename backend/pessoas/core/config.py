import os
from typing import Optional

from sqlalchemy.engine import URL

# connection pool upper bound, not configurable at runtime
POOL_MAX_SIZE: int = 16
POOL_TIMEOUT_SECONDS: float = 30.0

HOST: str = "0.0.0.0"


class Settings:
    PROJECT_NAME: str = "Pessoas"

    # database (defaults match the local docker-compose postgres)
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
    DB_USER: str = os.getenv("DB_USER", "postgres")
    DB_NAME: str = os.getenv("DB_NAME", "postgres")
    DB_PASS: str = os.getenv("DB_PASS", "password")
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")  # overrides the DB_* values when set

    # logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: Optional[str] = os.getenv("LOG_DIR")

    PORT: int = int(os.getenv("PORT", "80"))

    def database_url(self):
        """url for the backing store, DATABASE_URL wins over the DB_* parts"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            "postgresql+psycopg2",
            username=self.DB_USER,
            password=self.DB_PASS,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        )

settings = Settings()
