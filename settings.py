from pydantic_settings import BaseSettings, SettingsConfigDict

from geodist.calc import DistanceTier


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "geodist API"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    # CORS: "*" for dev; in production set to comma-separated origins
    cors_origins: str = "*"
    rate_limit: str = "100/minute"  # slowapi limit string applied per client IP

    default_tier: DistanceTier = DistanceTier.APPROXIMATE
    # Upper bound on positions across both geometries of one request (cost is O(n * m))
    max_positions: int = 10_000


def get_settings() -> Settings:
    return Settings()
