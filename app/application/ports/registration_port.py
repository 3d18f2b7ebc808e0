from __future__ import annotations

from typing import Protocol

from app.domain.entities.registration import Registration, RegistrationDraft


class RegistrationPort(Protocol):
    def create_registration(self, *, draft: RegistrationDraft) -> Registration:
        ...

    def attach_checkout_session(self, *, registration_id: str, checkout_session_id: str) -> None:
        ...
