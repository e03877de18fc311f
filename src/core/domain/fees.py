"""
Fee Models — Модели комиссий ордеров

Комиссия всегда возвращается в валюте счёта и может зависеть от размера
ордера (PercentageFeeModel), поэтому максимальное количество не выражается
в замкнутой форме и ищется итеративно.

Любой объект с методом get_order_fee(security, order) удовлетворяет
протоколу FeeModel.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Literal, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from src.core.math.numerical_safeguards import ZERO, bps_to_fraction

if TYPE_CHECKING:
    from src.core.domain.orders import OrderBase
    from src.core.domain.security import Security


# =============================================================================
# PROTOCOL
# =============================================================================


@runtime_checkable
class FeeModel(Protocol):
    """Протокол модели комиссий."""

    def get_order_fee(self, security: Security, order: OrderBase) -> Decimal:
        """Комиссия ордера в валюте счёта (>= 0)."""
        ...


# =============================================================================
# IMPLEMENTATIONS
# =============================================================================


class ZeroFeeModel(BaseModel):
    """Без комиссий."""

    kind: Literal["zero"] = "zero"

    model_config = {"frozen": True}

    def get_order_fee(self, security: Security, order: OrderBase) -> Decimal:
        return ZERO


class ConstantFeeModel(BaseModel):
    """Фиксированная комиссия за ордер, независимо от размера."""

    kind: Literal["constant"] = "constant"
    fee: Decimal = Field(..., ge=0, description="Комиссия за ордер (валюта счёта)")

    model_config = {"frozen": True}

    def get_order_fee(self, security: Security, order: OrderBase) -> Decimal:
        return self.fee


class PercentageFeeModel(BaseModel):
    """
    Комиссия в bps от стоимости ордера с нижней границей.

    fee = max(|order_value| * fee_bps / 10000, minimum_fee)
    """

    kind: Literal["percentage"] = "percentage"
    fee_bps: Decimal = Field(..., ge=0, description="Комиссия в basis points от notional")
    minimum_fee: Decimal = Field(default=ZERO, ge=0, description="Минимальная комиссия")

    model_config = {"frozen": True}

    def get_order_fee(self, security: Security, order: OrderBase) -> Decimal:
        fee = abs(order.get_value(security)) * bps_to_fraction(self.fee_bps)
        return max(fee, self.minimum_fee)
