from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.registration import Registration, RegistrationDraft


@dataclass(frozen=True)
class CreateRegistrationCheckoutInput:
    draft: RegistrationDraft


@dataclass(frozen=True)
class CreateRegistrationCheckoutOutput:
    registration: Registration
    checkout_session_id: str | None
    checkout_url: str

    @property
    def registration_id(self) -> str | None:
        return self.registration.id

    @property
    def linked(self) -> bool:
        return self.registration.checkout_session_id is not None


@dataclass(frozen=True)
class CheckoutBackUrls:
    success: str
    failure: str
    pending: str

    @classmethod
    def for_site(cls, site_url: str) -> "CheckoutBackUrls":
        base = site_url.rstrip("/")
        return cls(
            success=f"{base}/sucesso.html",
            failure=f"{base}/erro.html",
            pending=f"{base}/erro.html",
        )
