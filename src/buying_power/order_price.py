"""Reference price ордера по его типу и цена одной единицы инструмента.

- MARKET → текущая цена инструмента
- LIMIT → limit_price
- STOP_MARKET → stop_price
- STOP_LIMIT → limit_price
- неизвестный тип → 0 (никогда не бросает исключение)
"""

from decimal import Decimal
from typing import Callable, Final

from src.core.domain.orders import MarketOrder, OrderBase, OrderType
from src.core.domain.security import Security
from src.core.math.numerical_safeguards import ONE, ZERO, safe_divide


_PRICE_BY_ORDER_TYPE: Final[dict[OrderType, Callable[[Security, OrderBase], Decimal]]] = {
    OrderType.MARKET: lambda security, order: security.price,
    OrderType.LIMIT: lambda security, order: order.limit_price,
    OrderType.STOP_MARKET: lambda security, order: order.stop_price,
    OrderType.STOP_LIMIT: lambda security, order: order.limit_price,
}


def get_order_price(security: Security, order: OrderBase) -> Decimal:
    """Reference price ордера.

    Внимание: для неподдерживаемых типов возвращается 0, то есть стоимость
    такого ордера занижается. Вызывающая сторона должна это учитывать.

    Args:
        security: инструмент (источник цены для MARKET)
        order: ордер

    Returns:
        Цена в quote валюте инструмента
    """
    price_of = _PRICE_BY_ORDER_TYPE.get(getattr(order, "type", None))
    if price_of is None:
        return ZERO
    return price_of(security, order)


def get_unit_price(security: Security) -> Decimal:
    """Цена одной единицы инструмента.

    Стоимость рыночного ордера на 1 единицу (в валюте счёта), делённая на
    курс quote валюты. 0 означает, что рыночной цены нет (или курс quote
    валюты неизвестен).
    """
    one_unit = MarketOrder(symbol=security.symbol, quantity=ONE)
    return safe_divide(one_unit.get_value(security), security.quote_currency.conversion_rate)
