from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class RegistrationForm:
    name: str
    contact_number: str
    email: str
    course: str
    module: str


@dataclass(frozen=True)
class RegistrationDraft:
    name: str
    contact_number: str
    email: str
    course: str
    module: str
    price: Decimal


@dataclass(frozen=True)
class Registration:
    id: str | None
    name: str
    contact_number: str
    email: str
    course: str
    module: str
    price: Decimal
    checkout_session_id: str | None = None


@dataclass(frozen=True)
class CheckoutSession:
    id: str | None
    init_point: str
