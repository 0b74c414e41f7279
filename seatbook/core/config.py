import logging
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Seatbook API"
    API_V1_STR: str = "/api/v1"

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "seatbook"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: Optional[str] = None

    LOG_LEVEL: str = "INFO"

    # Ticket value that may repeat across bookings (compared case/whitespace-insensitively)
    FREE_TICKET_SENTINEL: str = "freikarte"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    def assemble_db_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"


def configure_logging(level: str) -> None:
    """Root logging setup; timestamps are ISO-8601 so failures can be correlated."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )


settings = Settings()
settings.DATABASE_URL = settings.assemble_db_url()
