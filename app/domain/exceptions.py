from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base para erros de dominio."""


class RegistrationInputError(DomainError):
    """Formulario de inscricao incompleto."""


class InvalidModuleError(DomainError):
    """Modulo fora da tabela de precos."""

    def __init__(self, message: str, *, received: Any):
        super().__init__(message)
        self.received = received


class ConfigurationError(DomainError):
    """Configuracao obrigatoria ausente ou invalida no ambiente."""

    def __init__(self, message: str, *, missing: list[str] | None = None, invalid: list[str] | None = None):
        super().__init__(message)
        self.missing = missing or []
        self.invalid = invalid or []

    def as_details(self) -> dict[str, list[str]]:
        details: dict[str, list[str]] = {}
        if self.missing:
            details["missing"] = self.missing
        if self.invalid:
            details["invalid"] = self.invalid
        return details


class UpstreamError(DomainError):
    """Falha em servico externo (transporte ou status nao-2xx)."""

    def __init__(self, message: str, *, details: Any = None):
        super().__init__(message)
        self.details = details


class StorageError(UpstreamError):
    """Falha ao gravar inscricao no Supabase."""


class PaymentGatewayError(UpstreamError):
    """Falha ao criar checkout no Mercado Pago."""
