from __future__ import annotations

from functools import lru_cache
from typing import List, Optional
from pydantic import BaseModel, Field, AliasChoices, field_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    prefix: str = "/api"

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False


class DBConfig(BaseModel):
    driver: str = "postgresql+psycopg"
    host: str = "localhost"
    port: int = 5432
    name: str = "personcore"
    user: str = "personuser"
    password: str = "personpass"
    # "public" means: no explicit schema on the metadata
    schema_name: str = Field(default="public", alias="DB_SCHEMA")
    echo: bool = False
    pool_size: int = 10
    max_overflow: int = 20
    pool_pre_ping: bool = True
    pool_recycle: int = 1800

    # Optional single URL (if set, it takes precedence)
    url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "database_url"),
    )

    @computed_field  # type: ignore[misc]
    @property
    def effective_url(self) -> str:
        if self.url:
            return self.url
        return f"{self.driver}://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"


class CacheConfig(BaseModel):
    enabled: bool = True
    # None = keep until a tag bust
    people_index_ttl_sec: Optional[int] = None
    family_index_ttl_sec: int = Field(24 * 60 * 60, ge=1)
    reference_ttl_sec: Optional[int] = None
    max_entries: int = Field(4096, ge=1)

    @field_validator("enabled", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v, default=True)


class PeopleConfig(BaseModel):
    # Identity-card type tags the writer persists; anything else is dropped.
    card_identity_types: List[str] = Field(
        default_factory=lambda: ["nik", "passport", "npwp", "bpjs", "kk", "sim", "ihs"]
    )
    index_limit: int = Field(25, ge=1, description="Default page size for the person index")
    index_limit_max: int = Field(200, ge=1)


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "personcore"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"
    tz: str = "UTC"

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    db: DBConfig = DBConfig()
    cache: CacheConfig = CacheConfig()
    people: PeopleConfig = PeopleConfig()

    # -------- Testcontainers / CI toggles --------
    use_testcontainers: bool = False
    test_db_image: str = "postgres:15-alpine"
    test_db_wait_timeout_sec: int = 30

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("use_testcontainers", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v)

    # ===== Convenience: DB URL & schema =====
    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        return self.db.effective_url

    @computed_field  # type: ignore[misc]
    @property
    def db_schema(self) -> str:
        return self.db.schema_name


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from personcore.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings will read from .env automatically
