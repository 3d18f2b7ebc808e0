from __future__ import annotations

from functools import lru_cache

from app.api.invocation import RegistrationCheckoutHandler
from app.application.dto.registration_checkout import CheckoutBackUrls
from app.application.use_cases.create_registration_checkout import CreateRegistrationCheckoutUseCase
from app.domain.services.module_pricing import ModulePriceTable
from app.infrastructure.clients.mercadopago_client import MercadoPagoClient, MercadoPagoClientSettings
from app.infrastructure.clients.supabase_registrations_client import (
    SupabaseRegistrationsClient,
    SupabaseRegistrationsClientSettings,
)
from app.shared.config import Settings, build_price_table, get_settings


@lru_cache(maxsize=1)
def _get_price_table() -> ModulePriceTable:
    return build_price_table(get_settings())


def build_create_registration_checkout_use_case(settings: Settings) -> CreateRegistrationCheckoutUseCase:
    return CreateRegistrationCheckoutUseCase(
        registration_port=SupabaseRegistrationsClient(
            SupabaseRegistrationsClientSettings(
                base_url=settings.supabase_url,
                service_key=settings.supabase_service_key,
                table=settings.supabase_registrations_table,
                timeout_seconds=settings.supabase_timeout_seconds,
            )
        ),
        payment_port=MercadoPagoClient(
            MercadoPagoClientSettings(
                api_base=settings.mercadopago_api_base,
                access_token=settings.mercadopago_token,
                timeout_seconds=settings.mercadopago_timeout_seconds,
            )
        ),
        back_urls=CheckoutBackUrls.for_site(settings.site_url),
    )


def get_registration_checkout_handler() -> RegistrationCheckoutHandler:
    return RegistrationCheckoutHandler(
        price_table_provider=_get_price_table,
        settings_provider=get_settings,
        use_case_factory=build_create_registration_checkout_use_case,
    )
