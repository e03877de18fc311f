"""
Domain models and value objects.

Contains fundamental domain entities: Cash, CashBook, Security, Order
variants, fee models and PortfolioSnapshot.
"""

from src.core.domain.cash_book import Cash, CashBook
from src.core.domain.fees import (
    ConstantFeeModel,
    FeeModel,
    PercentageFeeModel,
    ZeroFeeModel,
)
from src.core.domain.orders import (
    LimitOrder,
    MarketOrder,
    Order,
    OrderBase,
    OrderDirection,
    OrderType,
    StopLimitOrder,
    StopMarketOrder,
    TaggedOrder,
)
from src.core.domain.portfolio import PortfolioSnapshot
from src.core.domain.security import (
    CurrencyPair,
    Security,
    SecurityType,
    SymbolProperties,
)

__all__ = [
    # Cash
    "Cash",
    "CashBook",
    # Fees
    "FeeModel",
    "ZeroFeeModel",
    "ConstantFeeModel",
    "PercentageFeeModel",
    # Orders
    "Order",
    "OrderBase",
    "OrderDirection",
    "OrderType",
    "MarketOrder",
    "LimitOrder",
    "StopMarketOrder",
    "StopLimitOrder",
    "TaggedOrder",
    # Security
    "Security",
    "SecurityType",
    "SymbolProperties",
    "CurrencyPair",
    # Portfolio
    "PortfolioSnapshot",
]
