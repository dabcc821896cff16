"""Error taxonomy for the ordering service."""

from typing import Any, Optional


class StorefrontError(Exception):
    """Base exception carrying a machine readable code."""

    def __init__(
        self,
        message: str,
        code: str = "STOREFRONT_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(StorefrontError):
    """Malformed or out-of-range business rules, rejected before persisting."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, "CONFIG_INVALID", details)


class StorageUnavailable(StorefrontError):
    """Transient failure of the settings backend."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, "STORAGE_UNAVAILABLE", details)


class AuthorizationError(StorefrontError):
    """Bad administrator credentials."""

    def __init__(self, message: str = "Invalid credentials", details: Optional[dict[str, Any]] = None):
        super().__init__(message, "UNAUTHORIZED", details)


class ValidationError(StorefrontError):
    """Requested pickup time refused, with the reason code that refused it."""

    def __init__(self, message: str, reason: str, details: Optional[dict[str, Any]] = None):
        self.reason = reason
        super().__init__(message, "PICKUP_REJECTED", details)
