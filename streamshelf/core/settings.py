# streamshelf/core/settings.py
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- Auth ---
    jwt_secret: str = Field(alias="JWT_SECRET")  # required, no default
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    token_expire_days: int = Field(default=7, ge=1, alias="TOKEN_EXPIRE_DAYS")
    bcrypt_rounds: int = Field(default=10, ge=4, le=31, alias="BCRYPT_ROUNDS")

    # --- Storage ---
    data_dir: str = Field(default="db", alias="DATA_DIR")

    # --- HTTP ---
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=4000, alias="PORT")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
