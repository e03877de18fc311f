"""
Orders — Модели ордеров (tagged variant по типу ордера)

Immutable Pydantic модели:
- MarketOrder: исполнение по текущей цене
- LimitOrder: limit_price
- StopMarketOrder: stop_price
- StopLimitOrder: stop_price + limit_price

Количество знаковое: > 0 покупка, < 0 продажа, 0 — HOLD.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Annotated, Literal, Union

from pydantic import BaseModel, Field

from src.core.math.numerical_safeguards import ZERO

if TYPE_CHECKING:
    from src.core.domain.security import Security


# =============================================================================
# ENUMS
# =============================================================================


class OrderDirection(str, Enum):
    """Направление ордера"""

    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


class OrderType(str, Enum):
    """Тип ордера"""

    MARKET = "market"
    LIMIT = "limit"
    STOP_MARKET = "stop_market"
    STOP_LIMIT = "stop_limit"


# =============================================================================
# BASE ORDER
# =============================================================================


class OrderBase(BaseModel):
    """
    Общие поля всех ордеров.

    Наследники добавляют поле type (discriminator) и свои ценовые поля.
    """

    id: int = Field(default=0, ge=0, description="Идентификатор ордера")
    symbol: str = Field(..., min_length=1, description="Инструмент (например, 'EURUSD')")
    quantity: Decimal = Field(..., description="Знаковое количество (> 0 buy, < 0 sell)")
    time_utc_ms: int = Field(default=0, ge=0, description="Время создания (UTC, миллисекунды)")
    tag: str = Field(default="", description="Произвольная метка")

    model_config = {"frozen": True}

    @property
    def absolute_quantity(self) -> Decimal:
        return abs(self.quantity)

    @property
    def direction(self) -> OrderDirection:
        if self.quantity > ZERO:
            return OrderDirection.BUY
        if self.quantity < ZERO:
            return OrderDirection.SELL
        return OrderDirection.HOLD

    def get_value(self, security: Security) -> Decimal:
        """
        Знаковая стоимость ордера в валюте счёта.

        quantity * оценка цены исполнения * contract_multiplier * курс quote валюты

        Args:
            security: Торгуемый инструмент

        Returns:
            Стоимость ордера (знак совпадает со знаком quantity)
        """
        return (
            self.quantity
            * self._fill_price_estimate(security)
            * security.symbol_properties.contract_multiplier
            * security.quote_currency.conversion_rate
        )

    def _fill_price_estimate(self, security: Security) -> Decimal:
        raise NotImplementedError


# =============================================================================
# ORDER VARIANTS
# =============================================================================


class MarketOrder(OrderBase):
    """Рыночный ордер: исполнение по текущей цене инструмента."""

    type: Literal[OrderType.MARKET] = OrderType.MARKET

    def _fill_price_estimate(self, security: Security) -> Decimal:
        return security.price


class LimitOrder(OrderBase):
    """
    Лимитный ордер.

    Покупка не дороже limit_price, продажа не дешевле: оценка цены
    исполнения — лучшая из limit_price и текущей цены.
    """

    type: Literal[OrderType.LIMIT] = OrderType.LIMIT
    limit_price: Decimal = Field(..., gt=0, description="Лимитная цена")

    def _fill_price_estimate(self, security: Security) -> Decimal:
        if self.direction == OrderDirection.BUY:
            return min(self.limit_price, security.price)
        return max(self.limit_price, security.price)


class StopMarketOrder(OrderBase):
    """Стоп-ордер: становится рыночным при достижении stop_price."""

    type: Literal[OrderType.STOP_MARKET] = OrderType.STOP_MARKET
    stop_price: Decimal = Field(..., gt=0, description="Стоп-цена")

    def _fill_price_estimate(self, security: Security) -> Decimal:
        # Худшая для нас цена из stop и текущей
        if self.direction == OrderDirection.BUY:
            return max(self.stop_price, security.price)
        return min(self.stop_price, security.price)


class StopLimitOrder(OrderBase):
    """Стоп-лимит ордер: при достижении stop_price выставляется limit_price."""

    type: Literal[OrderType.STOP_LIMIT] = OrderType.STOP_LIMIT
    stop_price: Decimal = Field(..., gt=0, description="Стоп-цена")
    limit_price: Decimal = Field(..., gt=0, description="Лимитная цена")

    def _fill_price_estimate(self, security: Security) -> Decimal:
        if self.direction == OrderDirection.BUY:
            return min(self.limit_price, security.price)
        return max(self.limit_price, security.price)


Order = Union[MarketOrder, LimitOrder, StopMarketOrder, StopLimitOrder]

# Поле с выбором варианта по "type" (dict из JSON → нужный класс ордера)
TaggedOrder = Annotated[Order, Field(discriminator="type")]
