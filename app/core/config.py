from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Demo-grade default; override through the environment outside of local runs
    SECRET_KEY: str = "notes-demo-secret-2025"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    TOKEN_ISSUER: str = "notes-api"
    TOKEN_AUDIENCE: str = "notes-users"

    BCRYPT_ROUNDS: int = 12

    FREE_PLAN_NOTE_LIMIT: int = 3
    SEED_SAMPLE_NOTES: bool = True

    ENVIRONMENT: str = "development"  # "development" or "production"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    @property
    def is_production(self):
        return self.ENVIRONMENT == "production"

    @property
    def access_token_ttl_seconds(self):
        return self.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
