from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RegistrationCheckoutResponse(BaseModel):
    checkout_url: str = Field(..., serialization_alias="checkoutUrl")


class ErrorResponse(BaseModel):
    error: str
    received: Any = None
    details: Any = None
