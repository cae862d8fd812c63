from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    # Connection parts, used when DATABASE_URL is not given
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "influencer_mapping"
    DB_SCHEMA: str = "public"

    DATABASE_URL: Optional[str] = None
    DB_CONNECT_TIMEOUT: int = 10
    DB_ECHO: bool = False

    HOST: str = "0.0.0.0"
    PORT: int = 3000
    STATIC_DIR: str = "public"
    LOG_LEVEL: str = "info"
    CORS_ORIGINS: List[str] = ["*"]

    # This tells Pydantic to read from the .env file
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL

        # URL.create escapes special characters in the credentials
        url = URL.create(
            "postgresql+asyncpg",
            username=self.DB_USER,
            password=self.DB_PASSWORD or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        )
        return url.render_as_string(hide_password=False)


# Create a single instance of the settings to use everywhere
settings = Settings()
