from __future__ import annotations

import json
from decimal import Decimal
from typing import Any


def decode_response_body(text: str) -> Any:
    """JSON do corpo da resposta; corpo nao-JSON vira {"raw": text}."""
    try:
        return json.loads(text)
    except ValueError:
        return {"raw": text}


def decimal_to_json_number(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)
