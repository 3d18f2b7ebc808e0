"""Entry point para plataformas serverless (evento -> resposta)."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.api.deps import get_registration_checkout_handler
from app.api.invocation import InvocationEvent


def handler(event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
    _ = context
    return get_registration_checkout_handler().handle(InvocationEvent.from_mapping(event))
