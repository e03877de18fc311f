"""
Security — Модель торгуемого инструмента

Immutable Pydantic модель инструмента с опциональной capability
валютной пары (base/quote). Только инструменты с этой capability
(FOREX, CRYPTO) поддерживаются cash buying power моделью; для остальных
все операции возвращают sentinel (False / 0).
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from src.core.math.numerical_safeguards import to_decimal

from .cash_book import Cash
from .fees import FeeModel, ZeroFeeModel


# =============================================================================
# ENUMS
# =============================================================================


class SecurityType(str, Enum):
    """Тип инструмента"""

    EQUITY = "equity"
    FOREX = "forex"
    CRYPTO = "crypto"


# =============================================================================
# NESTED MODELS
# =============================================================================


class SymbolProperties(BaseModel):
    """Свойства инструмента, заданные биржей."""

    description: str = Field(default="", description="Описание инструмента")
    quote_currency: str = Field(..., min_length=1, description="Код quote валюты")
    contract_multiplier: Decimal = Field(default=Decimal(1), gt=0, description="Множитель контракта")
    minimum_price_variation: Decimal = Field(
        default=Decimal("0.01"), gt=0, description="Минимальный шаг цены"
    )
    lot_size: Decimal = Field(default=Decimal(1), gt=0, description="Минимальный шаг количества")

    model_config = {"frozen": True}


class CurrencyPair(BaseModel):
    """Capability валютной пары: base торгуется против quote."""

    base_currency: str = Field(..., min_length=1)
    quote_currency: str = Field(..., min_length=1)

    model_config = {"frozen": True}


# =============================================================================
# SECURITY MODEL
# =============================================================================


class Security(BaseModel):
    """
    Торгуемый инструмент.

    quote_currency — снапшот Cash quote валюты (код и курс конверсии
    в валюту счёта). base_currency задан только для валютных пар.
    """

    symbol: str = Field(..., min_length=1, description="Инструмент (например, 'EURUSD')")
    security_type: SecurityType = Field(default=SecurityType.EQUITY, description="Тип инструмента")
    price: Decimal = Field(default=Decimal(0), ge=0, description="Текущая рыночная цена (quote)")
    quote_currency: Cash = Field(..., description="Quote валюта и её курс")
    base_currency: str | None = Field(default=None, description="Base валюта (только валютные пары)")
    symbol_properties: SymbolProperties = Field(..., description="Свойства инструмента")
    fee_model: FeeModel = Field(default_factory=ZeroFeeModel, description="Модель комиссий")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @model_validator(mode="after")
    def validate_quote_currency_consistent(self) -> "Security":
        """Quote валюта инструмента и symbol_properties должны совпадать."""
        if self.symbol_properties.quote_currency != self.quote_currency.symbol:
            raise ValueError(
                f"symbol_properties.quote_currency {self.symbol_properties.quote_currency!r} "
                f"does not match quote_currency {self.quote_currency.symbol!r}"
            )
        return self

    @property
    def lot_size(self) -> Decimal:
        return self.symbol_properties.lot_size

    @property
    def currency_pair(self) -> CurrencyPair | None:
        """Capability валютной пары или None."""
        if self.base_currency is None:
            return None
        return CurrencyPair(
            base_currency=self.base_currency,
            quote_currency=self.quote_currency.symbol,
        )

    def with_price(self, price: Decimal | int | str) -> "Security":
        """Новый экземпляр с другой ценой."""
        return self.model_copy(update={"price": to_decimal(price)})
