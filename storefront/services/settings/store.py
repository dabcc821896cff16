"""
TTL-cached configuration store.

Reads are served from an in-process cache for `ttl_seconds`. A backend read or
write that fails or exceeds `timeout_seconds` never breaks the "can I order"
decision: reads fall back to the last known good rules (or the defaults),
flagged as stale. Writes are serialized and refresh the writer's cache.
"""
import time
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeout
from dataclasses import dataclass
from typing import Callable, Optional

from storefront.core.errors import StorageUnavailable
from storefront.schemas.business_rules import BusinessRules
from .backends import SettingsBackend
from .defaults import default_rules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RulesSnapshot:
    """rules as served to callers, with their freshness."""
    rules: BusinessRules
    stale: bool = False
    # clock reading of the last successful backend read or write
    loaded_at: Optional[float] = None


class ConfigurationStore:
    """holds the current BusinessRules on top of a persistence backend."""

    def __init__(
        self,
        backend: SettingsBackend,
        ttl_seconds: float = 60.0,
        timeout_seconds: float = 2.0,
        retry_after_seconds: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.backend = backend
        self.ttl_seconds = ttl_seconds
        self.timeout_seconds = timeout_seconds
        self.retry_after_seconds = retry_after_seconds
        self._clock = clock
        self._cache_lock = threading.Lock()
        self._write_lock = threading.Lock()
        self._cached: Optional[BusinessRules] = None
        self._stale = False
        self._loaded_at: Optional[float] = None
        self._expires_at = 0.0
        self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="settings-store")

    def _call(self, fn, *args):
        future = self._executor.submit(fn, *args)
        try:
            return future.result(timeout=self.timeout_seconds)
        except FuturesTimeout as e:
            raise StorageUnavailable(
                f"Settings backend '{self.backend.name}' timed out after {self.timeout_seconds}s"
            ) from e

    def _remember(self, rules: BusinessRules, stale: bool = False, ttl: Optional[float] = None) -> None:
        with self._cache_lock:
            self._cached = rules
            self._stale = stale
            now = self._clock()
            if not stale:
                self._loaded_at = now
            self._expires_at = now + (self.ttl_seconds if ttl is None else ttl)

    def _fallback(self) -> RulesSnapshot:
        with self._cache_lock:
            cached = self._cached
        rules = cached if cached is not None else default_rules()
        # retry the backend soon, but do not hammer it on every request
        self._remember(rules, stale=True, ttl=self.retry_after_seconds)
        return RulesSnapshot(rules=rules, stale=True, loaded_at=self._loaded_at)

    def snapshot(self, use_cache: bool = True) -> RulesSnapshot:
        """current rules; never raises for backend trouble."""
        if use_cache:
            with self._cache_lock:
                if self._cached is not None and self._clock() < self._expires_at:
                    return RulesSnapshot(rules=self._cached, stale=self._stale, loaded_at=self._loaded_at)

        try:
            rules = self._call(self.backend.read)
        except StorageUnavailable as e:
            logger.warning(f"Settings read failed, serving last known rules: {e.message}")
            return self._fallback()

        if rules is None:
            logger.info("No stored settings found, using defaults")
            rules = default_rules()

        self._remember(rules)
        return RulesSnapshot(rules=rules, stale=False, loaded_at=self._loaded_at)

    def get(self) -> BusinessRules:
        return self.snapshot().rules

    def save(self, rules: BusinessRules) -> BusinessRules:
        """persist the whole value; raises StorageUnavailable on failure."""
        with self._write_lock:
            self._call(self.backend.write, rules)
            self._remember(rules)
        return rules

    def bootstrap(self) -> BusinessRules:
        """persist the default rules on first boot."""
        with self._write_lock:
            try:
                existing = self._call(self.backend.read)
                if existing is None:
                    existing = default_rules()
                    self._call(self.backend.write, existing)
                    logger.info(f"Seeded default business rules into '{self.backend.name}' backend")
            except StorageUnavailable as e:
                logger.error(f"Could not bootstrap settings: {e.message}")
                return self._fallback().rules
            self._remember(existing)
        return existing

    def invalidate(self) -> None:
        with self._cache_lock:
            self._expires_at = 0.0

    def close(self) -> None:
        self._executor.shutdown(wait=False)
