import logging

from storefront.core.config import settings
from .base import PaymentsProvider
from .mock import MockPayments

logger = logging.getLogger(__name__)


def get_payments_provider() -> PaymentsProvider:
    # only the mock gateway ships with the service
    if settings.PAYMENTS_PROVIDER.lower() != MockPayments.name:
        logger.warning(f"Unknown payments provider '{settings.PAYMENTS_PROVIDER}', using mock")
    return MockPayments()


__all__ = ["PaymentsProvider", "MockPayments", "get_payments_provider"]
