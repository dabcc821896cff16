import os
from typing import List
from dotenv import load_dotenv

# grab env vars from .env file
load_dotenv()


class Settings:
    # app settings
    APP_ENV: str = os.getenv("APP_ENV", "dev")
    APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT: int = int(os.getenv("APP_PORT", "8000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change_me_very_long")
    ACCESS_TOKEN_EXPIRES_MIN: int = int(os.getenv("ACCESS_TOKEN_EXPIRES_MIN", "720"))

    # CORS stuff
    _origins_raw: str = os.getenv("ALLOWED_ORIGINS", "*")
    ALLOWED_ORIGINS: List[str] = [o.strip() for o in _origins_raw.split(",") if o.strip()] if _origins_raw else ["*"]

    # database config with separate creds (only used by the database settings backend)
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
    DB_NAME: str = os.getenv("DB_NAME", "storefront")
    DB_USER: str = os.getenv("DB_USER", "storefront_user")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")
    DB_SSL_MODE: str = os.getenv("DB_SSL_MODE", "require")
    DB_CONNECTION_TIMEOUT: int = int(os.getenv("DB_CONNECTION_TIMEOUT", "5"))
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "5"))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "10"))

    @property
    def DATABASE_URL(self) -> str:
        """build DATABASE_URL from individual components or use explicit override"""
        # check if DATABASE_URL is explicitly set in env (for testing)
        explicit_url = os.getenv("DATABASE_URL")
        if explicit_url:
            return explicit_url

        return (
            f"postgresql+psycopg://{self.DB_USER}:{self.DB_PASSWORD}@"
            f"{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
            f"?sslmode={self.DB_SSL_MODE}&connect_timeout={self.DB_CONNECTION_TIMEOUT}"
        )

    # restaurant settings storage: file | database | memory
    SETTINGS_BACKEND: str = os.getenv("SETTINGS_BACKEND", "file")
    SETTINGS_FILE: str = os.getenv("SETTINGS_FILE", os.path.join("data", "admin-settings.json"))
    SETTINGS_CACHE_TTL_SECONDS: float = float(os.getenv("SETTINGS_CACHE_TTL_SECONDS", "60"))
    SETTINGS_STORE_TIMEOUT_SECONDS: float = float(os.getenv("SETTINGS_STORE_TIMEOUT_SECONDS", "2"))

    # admin credential (bcrypt hash, see scripts/hash_admin_password.py)
    ADMIN_EMAIL: str = os.getenv("ADMIN_EMAIL", "admin@example.com")
    ADMIN_PASSWORD_HASH: str | None = os.getenv("ADMIN_PASSWORD_HASH")

    # ordering window policy
    PICKUP_GRACE_MINUTES: int = int(os.getenv("PICKUP_GRACE_MINUTES", "30"))
    ASAP_LEAD_MINUTES: int = int(os.getenv("ASAP_LEAD_MINUTES", "15"))
    SLOT_STEP_MINUTES: int = int(os.getenv("SLOT_STEP_MINUTES", "15"))
    MIN_PREP_MINUTES: int = int(os.getenv("MIN_PREP_MINUTES", "30"))

    # payment provider
    PAYMENTS_PROVIDER: str = os.getenv("PAYMENTS_PROVIDER", "mock")
    WEBHOOK_SECRET: str = os.getenv("WEBHOOK_SECRET", "whsec_dev")
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")


settings = Settings()
