# app/config.py
from pydantic_settings import BaseSettings
from pydantic import field_validator

class Settings(BaseSettings):
    """Environment settings"""

    # API
    app_name: str = "SnapScape API"
    debug: bool = False

    # Database
    database_url: str = "sqlite:///./snapscape.db"

    # JWT (token verification only, tokens are issued by the auth service)
    secret_key: str = "change-me-change-me-change-me-change-me"
    algorithm: str = "HS256"

    # Cron trigger
    cron_secret: str = "default-secret"

    # Logging
    log_dir: str = "logs"

    # Achievements cache
    achievements_cache_ttl_seconds: int = 300

    @field_validator('secret_key')
    def validate_secret_key(cls, v):
        if len(v) < 32:
            raise ValueError('SECRET_KEY must be at least 32 characters long')
        return v

    @field_validator('achievements_cache_ttl_seconds')
    def validate_cache_ttl(cls, v):
        if v < 0:
            raise ValueError('ACHIEVEMENTS_CACHE_TTL_SECONDS cannot be negative')
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False

# Singleton instance
settings = Settings()
