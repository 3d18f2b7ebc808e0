from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
import logging

import httpx

from app.application.dto.registration_checkout import CheckoutBackUrls
from app.application.ports.payment_port import PaymentPort
from app.domain.entities.registration import CheckoutSession
from app.domain.exceptions import PaymentGatewayError
from app.infrastructure.clients.response_body import decimal_to_json_number, decode_response_body


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MercadoPagoClientSettings:
    api_base: str
    access_token: str
    timeout_seconds: float


class MercadoPagoClient(PaymentPort):
    """Checkout Pro: cria uma preference e devolve id + init_point."""

    def __init__(
        self,
        settings: MercadoPagoClientSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ):
        self._settings = settings
        self._transport = transport

    def create_checkout_session(
        self,
        *,
        title: str,
        unit_price: Decimal,
        payer_name: str,
        payer_email: str,
        back_urls: CheckoutBackUrls,
    ) -> CheckoutSession:
        payload = {
            "items": [
                {
                    "title": title,
                    "quantity": 1,
                    "unit_price": decimal_to_json_number(unit_price),
                }
            ],
            "payer": {"name": payer_name, "email": payer_email},
            "back_urls": {
                "success": back_urls.success,
                "failure": back_urls.failure,
                "pending": back_urls.pending,
            },
            "auto_return": "approved",
        }
        url = f"{self._settings.api_base.rstrip('/')}/checkout/preferences"
        try:
            with httpx.Client(timeout=self._settings.timeout_seconds, transport=self._transport) as client:
                response = client.post(
                    url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self._settings.access_token}"},
                )
        except httpx.HTTPError as exc:
            logger.warning("mercadopago_client: create_preference_transport_failed error=%s", exc)
            raise PaymentGatewayError("Falha ao conectar no Mercado Pago.", details=str(exc)) from exc

        logger.info("mercadopago_client: create_preference status=%s", response.status_code)
        logger.debug("mercadopago_client: create_preference body=%s", response.text)
        body = decode_response_body(response.text)
        if not response.is_success:
            raise PaymentGatewayError("Erro ao criar checkout no Mercado Pago.", details=body)

        preference = body if isinstance(body, dict) else {}
        init_point = preference.get("init_point")
        if not init_point:
            raise PaymentGatewayError("Resposta do Mercado Pago sem init_point.", details=body)

        preference_id = preference.get("id")
        return CheckoutSession(
            id=str(preference_id) if preference_id is not None else None,
            init_point=str(init_point),
        )
