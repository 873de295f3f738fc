# File: inventory/core/config.py

import os
from functools import lru_cache
from typing import List

from pydantic import BaseModel, ConfigDict, field_validator


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Settings(BaseModel):
    # env-derived defaults arrive as strings; run them through the validators
    model_config = ConfigDict(validate_default=True)

    # Basic app info
    PROJECT_NAME: str = "Dynasty Inventory API"
    VERSION: str = "0.1.0"

    api_prefix: str = "/api"
    debug: bool = _env_flag("DEBUG", "false")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS (the React dev server runs on Vite's default port)
    backend_cors_origins: List[str] = os.getenv(
        "BACKEND_CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173",
    )

    # Database
    database_url: str = os.getenv(
        "DATABASE_URL",
        "mysql+pymysql://root:@localhost:3306/dynasty_inventory",
    )
    db_pool_size: int = int(os.getenv("DB_POOL_SIZE", "10"))
    create_tables_on_startup: bool = _env_flag("CREATE_TABLES_ON_STARTUP", "true")
    default_categories: List[str] = os.getenv("DEFAULT_CATEGORIES", "")

    # Security / auth
    secret_key: str = os.getenv("JWT_SECRET", "CHANGE_ME_IN_PRODUCTION")
    algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    access_token_expire_minutes: int = 60 * 24  # 24h
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

    @field_validator("backend_cors_origins", "default_categories", mode="before")
    @classmethod
    def split_comma_list(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
