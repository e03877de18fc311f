"""Максимальное количество рыночного ордера для целевой стоимости позиции.

Комиссия зависит от размера ордера, поэтому "место", оставшееся после
комиссии, меняется вместе с пробным количеством. Для произвольной модели
комиссий это не обращается в замкнутой форме: используется монотонно
убывающий цикл.

Алгоритм:
1. unit_price = стоимость 1 единицы / курс quote валюты
2. target_order_value = |target - current_holdings_value|
3. Начальное количество = target_order_value / unit_price, вниз до lot size
4. Цикл: q -= step; комиссия считается для текущего q;
   step = floor_lot(fee / unit_price), но не меньше одного лота;
   пока order_value > margin_remaining или order_value + fee > target_order_value

Завершение гарантировано: q строго убывает минимум на lot size за итерацию
и ограничено снизу нулём.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Final

from src.core.domain.orders import MarketOrder, OrderDirection
from src.core.domain.portfolio import PortfolioSnapshot
from src.core.domain.security import Security
from src.core.math.numerical_safeguards import (
    ZERO,
    lot_step,
    round_down_to_lot,
    safe_divide,
    to_decimal,
)

from .order_price import get_unit_price

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Порог итераций, после которого solver пишет warning (на результат не влияет)
SLOW_CONVERGENCE_ITERATIONS_DEFAULT: Final[int] = 10_000

REASON_UNSUPPORTED_SECURITY: Final[str] = "unsupported_security"
REASON_NO_MARKET_PRICE: Final[str] = "no_market_price"
REASON_NO_FUNDS_REMAINING: Final[str] = "no_funds_remaining"
REASON_BELOW_LOT_SIZE: Final[str] = "below_lot_size"
REASON_FEES_EXCEED_FUNDS: Final[str] = "fees_exceed_funds"


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class MaxQuantityResult:
    """Результат поиска максимального количества."""

    quantity: Decimal  # Знаковое количество (< 0 для SELL), кратно lot size
    reason: str  # Пусто, если решение найдено
    iterations: int

    details: str


def _zero_result(reason: str, details: str, iterations: int = 0) -> MaxQuantityResult:
    logger.debug("Maximum order quantity is 0: %s", details)
    return MaxQuantityResult(quantity=ZERO, reason=reason, iterations=iterations, details=details)


# =============================================================================
# SOLVER
# =============================================================================


def solve_maximum_order_quantity(
    portfolio: PortfolioSnapshot,
    security: Security,
    target_portfolio_value: Decimal,
    slow_convergence_iterations: int = SLOW_CONVERGENCE_ITERATIONS_DEFAULT,
) -> MaxQuantityResult:
    """Максимальное количество рыночного ордера для целевой стоимости позиции.

    Args:
        portfolio: снапшот портфеля
        security: инструмент
        target_portfolio_value: желаемая стоимость позиции (валюта счёта)
        slow_convergence_iterations: порог итераций для warning

    Returns:
        MaxQuantityResult; quantity == 0 для неподдерживаемого инструмента,
        отсутствия цены, отсутствия средств или если комиссии съедают
        весь доступный объём
    """
    target_portfolio_value = to_decimal(target_portfolio_value)

    pair = security.currency_pair
    if pair is None:
        return _zero_result(
            REASON_UNSUPPORTED_SECURITY,
            f"{security.symbol}: no base/quote currency pair",
        )

    base_cash = portfolio.cash_book.get(pair.base_currency)
    quote_position = portfolio.cash_book.get(pair.quote_currency).amount

    unit_price = get_unit_price(security)
    if unit_price == ZERO:
        return _zero_result(REASON_NO_MARKET_PRICE, f"{security.symbol}: no usable market price")

    current_holdings_value = base_cash.amount * base_cash.conversion_rate

    # Дальше работаем с абсолютными значениями, знак добавляется в конце
    target_order_value = abs(target_portfolio_value - current_holdings_value)
    direction = (
        OrderDirection.BUY
        if target_portfolio_value > current_holdings_value
        else OrderDirection.SELL
    )

    margin_remaining = quote_position if direction == OrderDirection.BUY else current_holdings_value
    if margin_remaining <= ZERO:
        return _zero_result(
            REASON_NO_FUNDS_REMAINING,
            f"{security.symbol}: no funds remaining for {direction.value} ({margin_remaining})",
        )

    lot_size = security.lot_size
    order_quantity = round_down_to_lot(safe_divide(target_order_value, unit_price), lot_size)
    if order_quantity <= ZERO:
        return _zero_result(
            REASON_BELOW_LOT_SIZE,
            f"{security.symbol}: target order value {target_order_value} is below one lot ({lot_size})",
        )

    step = ZERO
    iterations = 0
    while True:
        order_quantity -= step
        if order_quantity <= ZERO:
            return _zero_result(
                REASON_FEES_EXCEED_FUNDS,
                f"{security.symbol}: quantity collapsed to 0 after fees "
                f"(target_order_value={target_order_value}, margin_remaining={margin_remaining})",
                iterations=iterations,
            )

        iterations += 1
        if iterations == slow_convergence_iterations:
            logger.warning(
                "Maximum quantity solver for %s reached %d iterations (quantity=%s, lot_size=%s)",
                security.symbol,
                iterations,
                order_quantity,
                lot_size,
            )

        order = MarketOrder(symbol=security.symbol, quantity=order_quantity)
        order_value = order.get_value(security)
        order_fees = to_decimal(security.fee_model.get_order_fee(security, order))

        # Уменьшаем на fee / unit_price (быстрее, чем по одному лоту)
        step = lot_step(safe_divide(order_fees, unit_price), lot_size)

        if order_value <= margin_remaining and order_value + order_fees <= target_order_value:
            break

    quantity = -order_quantity if direction == OrderDirection.SELL else order_quantity
    details = (
        f"{security.symbol}: {direction.value} {order_quantity} "
        f"(value={order_value}, fees={order_fees}, iterations={iterations})"
    )
    logger.debug("Maximum order quantity solved: %s", details)
    return MaxQuantityResult(quantity=quantity, reason="", iterations=iterations, details=details)
