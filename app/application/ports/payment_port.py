from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from app.application.dto.registration_checkout import CheckoutBackUrls
from app.domain.entities.registration import CheckoutSession


class PaymentPort(Protocol):
    def create_checkout_session(
        self,
        *,
        title: str,
        unit_price: Decimal,
        payer_name: str,
        payer_email: str,
        back_urls: CheckoutBackUrls,
    ) -> CheckoutSession:
        ...
