"""Проверка достаточности buying power для ордера на cash-счёте.

BUY расходует quote валюту: стоимость ордера = |q| * reference price.
SELL расходует base валюту: стоимость ордера = |q|.

- MARKET: сравнение с максимальным количеством из solver'а (комиссии
  учитываются итеративно)
- остальные типы: одна оценка комиссии, переведённая в валюту расчёта,
  и линейное сравнение
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Final

from src.core.domain.orders import Order, OrderDirection, OrderType
from src.core.domain.portfolio import PortfolioSnapshot
from src.core.domain.security import Security
from src.core.math.numerical_safeguards import ZERO, to_decimal

from .max_quantity import (
    REASON_UNSUPPORTED_SECURITY,
    SLOW_CONVERGENCE_ITERATIONS_DEFAULT,
    solve_maximum_order_quantity,
)
from .order_price import get_order_price
from .reservation import get_open_orders_reserved_quantity

logger = logging.getLogger(__name__)


REASON_INSUFFICIENT_BUYING_POWER: Final[str] = "insufficient_buying_power"


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class BuyingPowerCheckResult:
    """Результат проверки buying power.

    Все количества — в валюте расчёта ордера (quote для BUY, base для SELL).
    """

    is_sufficient: bool
    reason: str

    order_quantity: Decimal  # Сколько валюты расходует ордер
    total_quantity: Decimal  # Баланс валюты расчёта
    reserved_quantity: Decimal  # Резерв открытых ордеров
    order_fee: Decimal  # Комиссия (только не-MARKET ордера)
    maximum_quantity: Decimal  # Предел из solver'а (только MARKET ордера)

    details: str


def _unsupported_result(security: Security) -> BuyingPowerCheckResult:
    return BuyingPowerCheckResult(
        is_sufficient=False,
        reason=REASON_UNSUPPORTED_SECURITY,
        order_quantity=ZERO,
        total_quantity=ZERO,
        reserved_quantity=ZERO,
        order_fee=ZERO,
        maximum_quantity=ZERO,
        details=f"{security.symbol}: no base/quote currency pair",
    )


# =============================================================================
# CHECK
# =============================================================================


def check_buying_power_for_order(
    portfolio: PortfolioSnapshot,
    security: Security,
    order: Order,
    slow_convergence_iterations: int = SLOW_CONVERGENCE_ITERATIONS_DEFAULT,
) -> BuyingPowerCheckResult:
    """Достаточно ли buying power для исполнения ордера сейчас.

    Args:
        portfolio: снапшот портфеля
        security: торгуемый инструмент
        order: проверяемый ордер
        slow_convergence_iterations: порог итераций solver'а для warning

    Returns:
        BuyingPowerCheckResult; is_sufficient=False для инструментов без
        валютной пары
    """
    pair = security.currency_pair
    if pair is None:
        logger.debug("Buying power check for %s: unsupported security", security.symbol)
        return _unsupported_result(security)

    cash_book = portfolio.cash_book
    is_buy = order.direction == OrderDirection.BUY

    if is_buy:
        # Доступно для покупки, в quote валюте
        settlement_currency = pair.quote_currency
        total_quantity = cash_book.get(pair.quote_currency).amount
        order_quantity = order.absolute_quantity * get_order_price(security, order)
    else:
        # Доступно для продажи, в base валюте
        settlement_currency = pair.base_currency
        total_quantity = cash_book.get(pair.base_currency).amount
        order_quantity = order.absolute_quantity

    reserved_quantity = get_open_orders_reserved_quantity(portfolio, security, order.direction)

    order_fee = ZERO
    maximum_quantity = ZERO

    if order.type == OrderType.MARKET:
        # Целевая стоимость в валюте счёта
        if is_buy:
            target_value = cash_book.convert_to_account_currency(
                total_quantity - reserved_quantity, pair.quote_currency
            )
        else:
            target_value = cash_book.convert_to_account_currency(
                reserved_quantity, pair.base_currency
            )

        solved = solve_maximum_order_quantity(
            portfolio,
            security,
            target_value,
            slow_convergence_iterations=slow_convergence_iterations,
        )
        maximum_quantity = solved.quantity
        if is_buy:
            maximum_quantity *= get_order_price(security, order)

        is_sufficient = order_quantity <= abs(maximum_quantity)
        details = (
            f"{order.type.value} {order.direction.value} {security.symbol}: "
            f"order={order_quantity} {settlement_currency}, max={abs(maximum_quantity)}, "
            f"reserved={reserved_quantity}"
        )
    else:
        # Для не-MARKET ордеров комиссия добавляется к стоимости
        order_fee = cash_book.convert(
            to_decimal(security.fee_model.get_order_fee(security, order)),
            cash_book.account_currency,
            settlement_currency,
        )
        available = total_quantity - reserved_quantity - order_fee

        is_sufficient = order_quantity <= available
        details = (
            f"{order.type.value} {order.direction.value} {security.symbol}: "
            f"order={order_quantity} {settlement_currency}, available={available} "
            f"(total={total_quantity}, reserved={reserved_quantity}, fee={order_fee})"
        )

    if not is_sufficient:
        logger.debug("Insufficient buying power: %s", details)

    return BuyingPowerCheckResult(
        is_sufficient=is_sufficient,
        reason="" if is_sufficient else REASON_INSUFFICIENT_BUYING_POWER,
        order_quantity=order_quantity,
        total_quantity=total_quantity,
        reserved_quantity=reserved_quantity,
        order_fee=order_fee,
        maximum_quantity=maximum_quantity,
        details=details,
    )
