from __future__ import annotations

from dataclasses import replace
import logging

from app.application.dto.registration_checkout import (
    CheckoutBackUrls,
    CreateRegistrationCheckoutInput,
    CreateRegistrationCheckoutOutput,
)
from app.application.ports.payment_port import PaymentPort
from app.application.ports.registration_port import RegistrationPort
from app.domain.entities.registration import Registration
from app.domain.services.module_pricing import checkout_title


class CreateRegistrationCheckoutUseCase:
    """Grava a inscricao, cria o checkout e vincula os dois (best-effort).

    Erros de `create_registration` e `create_checkout_session` propagam.
    Falha no vinculo so e logada: o checkout ja existe e o pagamento
    nao pode ser bloqueado por ela.
    """

    def __init__(
        self,
        *,
        registration_port: RegistrationPort,
        payment_port: PaymentPort,
        back_urls: CheckoutBackUrls,
        logger: logging.Logger | None = None,
    ):
        self._registration_port = registration_port
        self._payment_port = payment_port
        self._back_urls = back_urls
        self._logger = logger or logging.getLogger(__name__)

    def execute(self, command: CreateRegistrationCheckoutInput) -> CreateRegistrationCheckoutOutput:
        draft = command.draft

        registration = self._registration_port.create_registration(draft=draft)
        self._logger.info(
            "create_registration_checkout: registration_created id=%s module=%s price=%s",
            registration.id,
            draft.module,
            draft.price,
        )

        session = self._payment_port.create_checkout_session(
            title=checkout_title(draft),
            unit_price=draft.price,
            payer_name=draft.name,
            payer_email=draft.email,
            back_urls=self._back_urls,
        )
        self._logger.info(
            "create_registration_checkout: checkout_created session_id=%s registration_id=%s",
            session.id,
            registration.id,
        )

        if registration.id and session.id:
            registration = self._link(registration=registration, checkout_session_id=session.id)
        else:
            self._logger.warning(
                "create_registration_checkout: link_skipped registration_id=%s session_id=%s",
                registration.id,
                session.id,
            )

        return CreateRegistrationCheckoutOutput(
            registration=registration,
            checkout_session_id=session.id,
            checkout_url=session.init_point,
        )

    def _link(self, *, registration: Registration, checkout_session_id: str) -> Registration:
        try:
            self._registration_port.attach_checkout_session(
                registration_id=registration.id,
                checkout_session_id=checkout_session_id,
            )
        except Exception as exc:
            self._logger.warning(
                "create_registration_checkout: link_failed registration_id=%s session_id=%s error=%s",
                registration.id,
                checkout_session_id,
                exc,
            )
            return registration
        return replace(registration, checkout_session_id=checkout_session_id)
