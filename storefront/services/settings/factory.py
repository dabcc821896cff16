from storefront.core.config import settings
from storefront.db.session import get_session_factory
from .backends import SettingsBackend, JsonFileBackend, DatabaseBackend, MemoryBackend
from .store import ConfigurationStore


def get_settings_backend(kind: str | None = None) -> SettingsBackend:
    provider = (kind or settings.SETTINGS_BACKEND).lower()
    if provider == "database":
        return DatabaseBackend(get_session_factory())
    if provider == "memory":
        return MemoryBackend()
    # default to the JSON file
    return JsonFileBackend(settings.SETTINGS_FILE)


def create_store(backend: SettingsBackend | None = None) -> ConfigurationStore:
    return ConfigurationStore(
        backend or get_settings_backend(),
        ttl_seconds=settings.SETTINGS_CACHE_TTL_SECONDS,
        timeout_seconds=settings.SETTINGS_STORE_TIMEOUT_SECONDS,
    )
