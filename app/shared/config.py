from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from app.domain.exceptions import ConfigurationError
from app.domain.services.module_pricing import ModulePriceTable


load_dotenv()

INVALID_SETTINGS_MESSAGE = "Variáveis de ambiente inválidas."


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _json(name: str) -> dict:
    value = _env(name)
    if not value:
        return {}
    try:
        data = json.loads(value)
    except ValueError as exc:
        raise ConfigurationError(INVALID_SETTINGS_MESSAGE, invalid=[name]) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(INVALID_SETTINGS_MESSAGE, invalid=[name])
    return data


def _float(name: str, default: str) -> float:
    try:
        return float(_env(name, default))
    except ValueError as exc:
        raise ConfigurationError(INVALID_SETTINGS_MESSAGE, invalid=[name]) from exc


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_service_key: str
    supabase_registrations_table: str
    supabase_timeout_seconds: float
    mercadopago_token: str
    mercadopago_api_base: str
    mercadopago_timeout_seconds: float
    site_url: str
    module_prices: dict


# atributo -> variavel de ambiente
REQUIRED_CHECKOUT_SETTINGS = {
    "supabase_url": "SUPABASE_URL",
    "supabase_service_key": "SUPABASE_SERVICE_KEY",
    "mercadopago_token": "MERCADOPAGO_TOKEN",
    "site_url": "SITE_URL",
}


def get_settings() -> Settings:
    """Le o ambiente; valor opcional mal formado vira ConfigurationError."""
    return Settings(
        supabase_url=_env("SUPABASE_URL", ""),
        supabase_service_key=_env("SUPABASE_SERVICE_KEY", ""),
        supabase_registrations_table=_env("SUPABASE_REGISTRATIONS_TABLE", "inscricoes"),
        supabase_timeout_seconds=_float("SUPABASE_TIMEOUT_SECONDS", "10"),
        mercadopago_token=_env("MERCADOPAGO_TOKEN", ""),
        mercadopago_api_base=_env("MERCADOPAGO_API_BASE", "https://api.mercadopago.com"),
        mercadopago_timeout_seconds=_float("MERCADOPAGO_TIMEOUT_SECONDS", "10"),
        site_url=_env("SITE_URL", ""),
        module_prices=_json("MODULE_PRICES"),
    )


def missing_checkout_settings(settings: Settings) -> list[str]:
    return [env_name for attr, env_name in REQUIRED_CHECKOUT_SETTINGS.items() if not getattr(settings, attr)]


def require_checkout_settings(settings: Settings) -> None:
    missing = missing_checkout_settings(settings)
    if missing:
        raise ConfigurationError("Variáveis de ambiente não configuradas.", missing=missing)


def build_price_table(settings: Settings) -> ModulePriceTable:
    if not settings.module_prices:
        return ModulePriceTable.default()
    try:
        return ModulePriceTable.from_mapping(settings.module_prices)
    except (ArithmeticError, ValueError) as exc:
        raise ConfigurationError(INVALID_SETTINGS_MESSAGE, invalid=["MODULE_PRICES"]) from exc


def get_log_level() -> str:
    level = (_env("LOG_LEVEL", "INFO") or "INFO").upper()
    if isinstance(logging.getLevelName(level), int):
        return level
    return "INFO"
