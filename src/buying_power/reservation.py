"""Reserved quantity открытых ордеров.

Открытые ордера уже "заняли" валюту, но ещё не потратили её. Несколько
инструментов могут расходовать одну и ту же валюту (например, EURUSD и
GBPUSD покупаются за USD), поэтому резерв считается по валюте, а не по
символу.

Алгоритм:
1. target_currency = quote (BUY) или base (SELL) запрошенного инструмента
2. Для каждой валютной пары портфеля: base == target → её SELL расходует
   target; иначе quote == target → её BUY расходует target
3. Фильтр открытых ордеров по (symbol, direction)
4. Вклад ордера: |q| * reference price, если quote ордера == target,
   иначе |q| (уже в base валюте)
"""

import logging
from decimal import Decimal

from src.core.domain.orders import OrderBase, OrderDirection
from src.core.domain.portfolio import PortfolioSnapshot
from src.core.domain.security import Security
from src.core.math.numerical_safeguards import ZERO

from .order_price import get_order_price

logger = logging.getLogger(__name__)


def get_open_orders_reserved_quantity(
    portfolio: PortfolioSnapshot,
    security: Security,
    direction: OrderDirection,
) -> Decimal:
    """Количество target валюты, зарезервированное открытыми ордерами.

    Вклад открытого ордера в quote валюте оценивается по reference price
    с ценовым правилом запрошенного инструмента (а не инструмента ордера):
    для MARKET ордеров это текущая цена security.

    Args:
        portfolio: снапшот портфеля
        security: инструмент предлагаемой сделки
        direction: направление предлагаемой сделки

    Returns:
        Резерв (>= 0) в валюте, которую расходует direction:
        quote для BUY, base для SELL; 0 для неподдерживаемых инструментов.
        HOLD (нулевое количество) тоже даёт 0 и не считается продажей:
        base валюту такой ордер не расходует
    """
    pair = security.currency_pair
    if pair is None:
        return ZERO

    if direction == OrderDirection.BUY:
        target_currency = pair.quote_currency
    elif direction == OrderDirection.SELL:
        target_currency = pair.base_currency
    else:
        return ZERO

    # symbol → направление, в котором ордер по этому символу расходует target
    consuming_directions: dict[str, OrderDirection] = {}
    for portfolio_security in portfolio.securities.values():
        candidate = portfolio_security.currency_pair
        if candidate is None:
            continue

        if candidate.base_currency == target_currency:
            consuming_directions[portfolio_security.symbol] = OrderDirection.SELL
        elif candidate.quote_currency == target_currency:
            consuming_directions[portfolio_security.symbol] = OrderDirection.BUY

    def _consumes_target(order: OrderBase) -> bool:
        return consuming_directions.get(order.symbol) == order.direction

    reserved = ZERO
    for open_order in portfolio.get_open_orders(_consumes_target):
        order_pair = portfolio.get_security(open_order.symbol).currency_pair

        quantity_in_target = open_order.absolute_quantity
        if order_pair.quote_currency == target_currency:
            quantity_in_target *= get_order_price(security, open_order)

        reserved += quantity_in_target

    logger.debug(
        "Reserved %s %s for %s %s by open orders",
        reserved,
        target_currency,
        direction.value,
        security.symbol,
    )
    return reserved
