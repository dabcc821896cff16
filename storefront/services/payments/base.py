from decimal import Decimal
from typing import Any, Dict
import hmac
import hashlib

from storefront.core.config import settings


class PaymentsProvider:
    """base payments gateway interface: a total in, a redirect URL out."""

    name = "base"

    def init(self, reference: str, amount: Decimal) -> Dict[str, Any]:  # pragma: no cover
        return {"status": "skipped", "reason": "not_implemented"}

    @staticmethod
    def verify_signature(body: bytes, signature: str | None) -> bool:
        if not signature:
            return False
        secret = (settings.WEBHOOK_SECRET or "").encode()
        computed = hmac.new(secret, body, hashlib.sha256).hexdigest()
        return hmac.compare_digest(computed, signature)
