"""Buying power — проверка доступности ордеров и sizing для cash-счетов.

- Reference price по типу ордера
- Резерв открытых ордеров по валюте расчёта
- Итеративный поиск максимального количества с учётом комиссий
- Проверка достаточности buying power для ордера
"""

from .affordability import (
    REASON_INSUFFICIENT_BUYING_POWER,
    BuyingPowerCheckResult,
    check_buying_power_for_order,
)
from .cash_buying_power_model import CashBuyingPowerConfig, CashBuyingPowerModel
from .max_quantity import (
    REASON_BELOW_LOT_SIZE,
    REASON_FEES_EXCEED_FUNDS,
    REASON_NO_FUNDS_REMAINING,
    REASON_NO_MARKET_PRICE,
    REASON_UNSUPPORTED_SECURITY,
    SLOW_CONVERGENCE_ITERATIONS_DEFAULT,
    MaxQuantityResult,
    solve_maximum_order_quantity,
)
from .order_price import get_order_price, get_unit_price
from .reservation import get_open_orders_reserved_quantity

__all__ = [
    # Model
    "CashBuyingPowerModel",
    "CashBuyingPowerConfig",
    # Results
    "BuyingPowerCheckResult",
    "MaxQuantityResult",
    # Functions
    "check_buying_power_for_order",
    "solve_maximum_order_quantity",
    "get_open_orders_reserved_quantity",
    "get_order_price",
    "get_unit_price",
    # Constants
    "SLOW_CONVERGENCE_ITERATIONS_DEFAULT",
    "REASON_UNSUPPORTED_SECURITY",
    "REASON_NO_MARKET_PRICE",
    "REASON_NO_FUNDS_REMAINING",
    "REASON_BELOW_LOT_SIZE",
    "REASON_FEES_EXCEED_FUNDS",
    "REASON_INSUFFICIENT_BUYING_POWER",
]
