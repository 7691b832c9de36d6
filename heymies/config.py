from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Runtime ---
    ENV: str = "dev"  # dev|prod
    HEYMIES_DB_URL: str = "sqlite+aiosqlite:///./heymies.db"

    # --- Ops routes (jobs/debug) ---
    # Send: X-API-Key: <key>
    API_KEY: str | None = None

    # --- Admin panel (HTTP Basic) ---
    # Both must be set, otherwise every /admin request is refused.
    ADMIN_USER: str | None = None
    ADMIN_PASS: str | None = None

    # --- Transactional email (Resend) ---
    RESEND_API_KEY: str | None = None
    RESEND_BASE_URL: str = "https://api.resend.com"
    EMAIL_FROM: str | None = None
    LEAD_NOTIFY_TO: str | None = None

    # --- Listing copy generation (OpenAI) ---
    OPENAI_API_KEY: str | None = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-4.1-mini"

    # --- Outbound HTTP resilience ---
    HTTP_TIMEOUT_S: float = 30.0
    HTTP_MAX_RETRIES: int = 3
    HTTP_BACKOFF_BASE_S: float = 0.5
    HTTP_RATE_LIMIT_RPS: float = 5.0
    HTTP_CIRCUIT_FAIL_THRESHOLD: int = 5
    HTTP_CIRCUIT_RESET_S: float = 60.0

    # --- Email outbox ---
    OUTBOX_BATCH_SIZE: int = 50
    OUTBOX_MAX_ATTEMPTS: int = 10
    OUTBOX_BACKOFF_BASE_S: float = 5.0
    OUTBOX_BACKOFF_CAP_S: float = 3600.0  # 1 hour cap

    # --- Scheduler tuning ---
    SCHED_DISPATCH_INTERVAL_MINUTES: int = 5


settings = Settings()
