"""Handler de inscricao + checkout no formato de invocacao serverless.

Recebe um evento (metodo, path, corpo) e devolve
``{"statusCode", "headers", "body"}`` com corpo JSON. Toda falha vira
resposta JSON; nenhuma excecao escapa de ``handle``.
"""
from __future__ import annotations

import base64
from collections.abc import Callable, Mapping
from dataclasses import dataclass
import json
import logging
from time import perf_counter
from typing import Any

from app.api.schemas.registration_checkout import ErrorResponse, RegistrationCheckoutResponse
from app.application.dto.registration_checkout import CreateRegistrationCheckoutInput
from app.application.use_cases.create_registration_checkout import CreateRegistrationCheckoutUseCase
from app.domain.exceptions import (
    ConfigurationError,
    InvalidModuleError,
    RegistrationInputError,
    UpstreamError,
)
from app.domain.services.module_pricing import ModulePriceTable, price_registration
from app.domain.services.registration_form import FORM_FIELDS, parse_registration_form
from app.shared.config import Settings, require_checkout_settings


UseCaseFactory = Callable[[Settings], CreateRegistrationCheckoutUseCase]


@dataclass(frozen=True)
class InvocationEvent:
    http_method: str
    path: str | None = None
    body: str | bytes | None = None
    is_base64_encoded: bool = False

    @classmethod
    def from_mapping(cls, event: Mapping[str, Any]) -> "InvocationEvent":
        return cls(
            http_method=str(event.get("httpMethod") or ""),
            path=event.get("path"),
            body=event.get("body"),
            is_base64_encoded=bool(event.get("isBase64Encoded", False)),
        )


def json_response(status_code: int, body: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, ensure_ascii=False),
    }


def error_response(status_code: int, error: ErrorResponse) -> dict[str, Any]:
    return json_response(status_code, error.model_dump(exclude_unset=True))


def parse_event_body(event: InvocationEvent) -> dict[str, Any]:
    """Corpo ausente, JSON invalido ou nao-objeto viram registro vazio."""
    raw = event.body
    if not raw:
        return {}
    try:
        if event.is_base64_encoded:
            raw = base64.b64decode(raw)
        data = json.loads(raw)
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class RegistrationCheckoutHandler:
    def __init__(
        self,
        *,
        price_table_provider: Callable[[], ModulePriceTable],
        settings_provider: Callable[[], Settings],
        use_case_factory: UseCaseFactory,
        logger: logging.Logger | None = None,
    ):
        self._price_table_provider = price_table_provider
        self._settings_provider = settings_provider
        self._use_case_factory = use_case_factory
        self._logger = logger or logging.getLogger(__name__)

    def handle(self, event: InvocationEvent) -> dict[str, Any]:
        started_at = perf_counter()
        try:
            return self._handle(event, started_at)
        except ConfigurationError as exc:
            self._logger.error(
                "registration_checkout: bad_settings missing=%s invalid=%s",
                ",".join(exc.missing),
                ",".join(exc.invalid),
            )
            return error_response(500, ErrorResponse(error=str(exc), details=exc.as_details()))
        except Exception as exc:
            self._logger.exception("registration_checkout: handler_error error=%s", exc)
            return error_response(500, ErrorResponse(error="Erro interno", details=str(exc)))

    def _handle(self, event: InvocationEvent, started_at: float) -> dict[str, Any]:
        self._logger.info(
            "registration_checkout: request method=%s path=%s",
            event.http_method,
            event.path,
        )
        if event.http_method != "POST":
            return error_response(405, ErrorResponse(error="Método não permitido. Use POST."))

        payload = parse_event_body(event)
        self._logger.info(
            "registration_checkout: payload %s curso=%s modulo=%s",
            " ".join(f"has_{field}={bool(payload.get(field))}" for field in FORM_FIELDS),
            payload.get("curso"),
            payload.get("modulo"),
        )

        try:
            form = parse_registration_form(payload)
            draft = price_registration(form, self._price_table_provider())
        except RegistrationInputError as exc:
            return error_response(400, ErrorResponse(error=str(exc)))
        except InvalidModuleError as exc:
            self._logger.info("registration_checkout: invalid_module received=%r", exc.received)
            return error_response(400, ErrorResponse(error=str(exc), received=exc.received))

        # ConfigurationError sobe para handle()
        settings = self._settings_provider()
        require_checkout_settings(settings)

        use_case = self._use_case_factory(settings)
        try:
            output = use_case.execute(CreateRegistrationCheckoutInput(draft=draft))
        except UpstreamError as exc:
            self._logger.warning(
                "registration_checkout: upstream_error kind=%s error=%s",
                type(exc).__name__,
                exc,
            )
            return error_response(500, ErrorResponse(error=str(exc), details=exc.details))

        self._logger.info(
            "registration_checkout: success ms=%s linked=%s",
            int((perf_counter() - started_at) * 1000),
            output.linked,
        )
        body = RegistrationCheckoutResponse(checkout_url=output.checkout_url)
        return json_response(200, body.model_dump(by_alias=True))
