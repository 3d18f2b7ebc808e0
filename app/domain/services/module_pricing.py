from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType

from app.domain.entities.registration import RegistrationDraft, RegistrationForm
from app.domain.exceptions import InvalidModuleError


DEFAULT_MODULE_PRICES: Mapping[str, Decimal] = MappingProxyType(
    {
        "Básico": Decimal("50"),
        "Intermediário": Decimal("70"),
        "Avançado": Decimal("90"),
        "Pacote Completo": Decimal("180"),
    }
)


@dataclass(frozen=True)
class ModulePriceTable:
    """Tabela imutavel modulo -> preco, montada uma vez no startup."""

    prices: Mapping[str, Decimal]

    @classmethod
    def from_mapping(cls, data: Mapping) -> "ModulePriceTable":
        prices: dict[str, Decimal] = {}
        for module, value in data.items():
            price = Decimal(str(value))
            if not price.is_finite() or price <= 0:
                raise ValueError(f"Price for module '{module}' must be positive.")
            prices[str(module)] = price
        if not prices:
            raise ValueError("Module price table cannot be empty.")
        return cls(prices=MappingProxyType(prices))

    @classmethod
    def default(cls) -> "ModulePriceTable":
        return cls(prices=DEFAULT_MODULE_PRICES)

    def modules(self) -> list[str]:
        return list(self.prices)

    def price_for(self, module: object) -> Decimal:
        price = self.prices.get(module) if isinstance(module, str) else None
        if price is None:
            raise InvalidModuleError("Módulo inválido", received=module)
        return price


def price_registration(form: RegistrationForm, table: ModulePriceTable) -> RegistrationDraft:
    return RegistrationDraft(
        name=form.name,
        contact_number=form.contact_number,
        email=form.email,
        course=form.course,
        module=form.module,
        price=table.price_for(form.module),
    )


def checkout_title(draft: RegistrationDraft) -> str:
    return f"{draft.course} – {draft.module}"
