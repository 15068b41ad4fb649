"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backend credentials are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from potracker.core.constants import COLLECTION_SEARCH_INDEX

DATABASE_BACKENDS = ("firestore", "memory")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except the Firestore credentials,
    which validate_backend requires when database_backend is 'firestore'.
    """

    # App
    app_name: str = "potracker"
    app_version: str = "1.0.0"
    debug: bool = False

    # Document store: "firestore" (REST API) or "memory" (in-process, dev/tests)
    database_backend: str = "firestore"

    # Firebase / Firestore: use key (env) or path (file). For serverless, use key.
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Admin operations (index rebuild): callers send X-Admin-Secret with this value.
    admin_secret: SecretStr | None = None

    # Search index
    search_index_collection: str = COLLECTION_SEARCH_INDEX
    search_candidate_limit: int = 100
    search_default_limit: int = 20
    search_max_limit: int = 50

    # Fallback scan (used when the index query fails)
    search_fallback_enabled: bool = True
    search_fallback_scan_limit: int = 50
    search_fallback_order_field: str = "createdAt"

    # OpenTelemetry
    telemetry_enabled: bool = True
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_backend(self) -> "Settings":
        """Validate the document store backend and search limits.

        - Firestore: FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH required.
        - Memory: no credentials; data lives for the process lifetime only.
        """
        if self.database_backend == "firestore":
            has_key = (
                self.firebase_service_account_key
                and self.firebase_service_account_key.get_secret_value()
            )
            if not has_key and not self.firebase_service_account_path:
                raise ValueError(
                    "When database_backend is 'firestore', set FIREBASE_SERVICE_ACCOUNT_KEY (full JSON string) "
                    "or FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file)."
                )
        elif self.database_backend not in DATABASE_BACKENDS:
            raise ValueError(
                f"database_backend must be one of {DATABASE_BACKENDS}, got: {self.database_backend!r}"
            )
        if self.search_candidate_limit < 1:
            raise ValueError("SEARCH_CANDIDATE_LIMIT must be at least 1")
        if not 1 <= self.search_default_limit <= self.search_max_limit:
            raise ValueError(
                "SEARCH_DEFAULT_LIMIT must be between 1 and SEARCH_MAX_LIMIT"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
