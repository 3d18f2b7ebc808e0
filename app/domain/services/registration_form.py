from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.domain.entities.registration import RegistrationForm
from app.domain.exceptions import InvalidModuleError, RegistrationInputError


# campo do formulario -> atributo do dominio
FORM_FIELDS = {
    "nome": "name",
    "whatsapp": "contact_number",
    "email": "email",
    "curso": "course",
    "modulo": "module",
}


def missing_form_fields(payload: Mapping[str, Any]) -> list[str]:
    return [field for field in FORM_FIELDS if not payload.get(field)]


def parse_registration_form(payload: Mapping[str, Any]) -> RegistrationForm:
    if missing_form_fields(payload):
        raise RegistrationInputError("Dados incompletos")

    module = payload["modulo"]
    if not isinstance(module, str):
        raise InvalidModuleError("Módulo inválido", received=module)

    return RegistrationForm(
        name=str(payload["nome"]),
        contact_number=str(payload["whatsapp"]),
        email=str(payload["email"]),
        course=str(payload["curso"]),
        module=module,
    )
