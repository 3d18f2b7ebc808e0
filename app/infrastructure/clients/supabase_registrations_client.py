from __future__ import annotations

from dataclasses import dataclass
import logging

import httpx

from app.application.ports.registration_port import RegistrationPort
from app.domain.entities.registration import Registration, RegistrationDraft
from app.domain.exceptions import StorageError
from app.infrastructure.clients.response_body import decimal_to_json_number, decode_response_body


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SupabaseRegistrationsClientSettings:
    base_url: str
    service_key: str
    table: str
    timeout_seconds: float


class SupabaseRegistrationsClient(RegistrationPort):
    def __init__(
        self,
        settings: SupabaseRegistrationsClientSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ):
        self._settings = settings
        self._transport = transport

    def create_registration(self, *, draft: RegistrationDraft) -> Registration:
        url = self._table_url()
        payload = {
            "nome": draft.name,
            "whatsapp": draft.contact_number,
            "email": draft.email,
            "curso": draft.course,
            "modulo": draft.module,
            "valor": decimal_to_json_number(draft.price),
        }
        logger.info("supabase_registrations_client: insert url=%s", url)
        try:
            with self._client() as client:
                response = client.post(
                    url,
                    json=payload,
                    headers={**self._auth_headers(), "Prefer": "return=representation"},
                )
        except httpx.HTTPError as exc:
            logger.warning("supabase_registrations_client: insert_transport_failed error=%s", exc)
            raise StorageError("Falha ao conectar no Supabase.", details=str(exc)) from exc

        logger.info("supabase_registrations_client: insert status=%s", response.status_code)
        logger.debug("supabase_registrations_client: insert body=%s", response.text)
        body = decode_response_body(response.text)
        if not response.is_success:
            raise StorageError("Erro ao salvar inscrição no banco.", details=body)

        row = _first_row(body)
        registration_id = row.get("id") if row else None
        return Registration(
            id=str(registration_id) if registration_id is not None else None,
            name=draft.name,
            contact_number=draft.contact_number,
            email=draft.email,
            course=draft.course,
            module=draft.module,
            price=draft.price,
        )

    def attach_checkout_session(self, *, registration_id: str, checkout_session_id: str) -> None:
        with self._client() as client:
            response = client.patch(
                self._table_url(),
                params={"id": f"eq.{registration_id}"},
                json={"mercadopago_preference_id": checkout_session_id},
                headers=self._auth_headers(),
            )
        logger.info(
            "supabase_registrations_client: patch_preference_id registration_id=%s status=%s",
            registration_id,
            response.status_code,
        )
        response.raise_for_status()

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self._settings.timeout_seconds, transport=self._transport)

    def _table_url(self) -> str:
        base = self._settings.base_url.rstrip("/")
        return f"{base}/rest/v1/{self._settings.table}"

    def _auth_headers(self) -> dict[str, str]:
        key = self._settings.service_key
        return {"apikey": key, "Authorization": f"Bearer {key}"}


def _first_row(body: object) -> dict | None:
    # "return=representation" devolve array com a linha criada
    if isinstance(body, list) and body and isinstance(body[0], dict):
        return body[0]
    return None
