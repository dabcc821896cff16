from decimal import Decimal
from typing import Any, Dict

from storefront.core.config import settings
from .base import PaymentsProvider


class MockPayments(PaymentsProvider):
    name = "mock"

    def init(self, reference: str, amount: Decimal) -> Dict[str, Any]:
        if amount <= 0:
            return {"status": "error", "reason": "invalid_amount"}
        return {
            "status": "ok",
            "checkout_url": f"https://pay.example.test/checkout/{reference}?amount={amount}",
            "success_url": f"{settings.FRONTEND_URL}/#/payment-success?ref={reference}",
        }
