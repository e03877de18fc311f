"""CashBuyingPowerModel — buying power модель для cash-счетов (без плеча).

Операции:
- get_leverage / set_leverage: плечо всегда 1, setter ничего не делает
- has_sufficient_buying_power_for_order: можно ли исполнить ордер сейчас
- get_maximum_order_quantity_for_target_value: максимальное количество
  рыночного ордера для целевой стоимости позиции
- get_reserved_buying_power_for_position: всегда 0
- get_buying_power: доступно единиц для покупки / продажи

Все операции — чистые запросы над снапшотом портфеля. Исключения не
бросаются: вырожденные случаи возвращают sentinel (False / 0).
Поддерживаются только инструменты с валютной парой (FOREX, CRYPTO).
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from src.core.domain.orders import Order, OrderDirection
from src.core.domain.portfolio import PortfolioSnapshot
from src.core.domain.security import Security
from src.core.math.numerical_safeguards import ONE, ZERO, safe_divide

from .affordability import BuyingPowerCheckResult, check_buying_power_for_order
from .max_quantity import (
    SLOW_CONVERGENCE_ITERATIONS_DEFAULT,
    MaxQuantityResult,
    solve_maximum_order_quantity,
)
from .order_price import get_unit_price

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class CashBuyingPowerConfig:
    """Конфигурация CashBuyingPowerModel.

    slow_convergence_iterations — после стольких итераций solver пишет
    warning (например, lot size слишком мал относительно ордера).
    """

    slow_convergence_iterations: int = SLOW_CONVERGENCE_ITERATIONS_DEFAULT

    def __post_init__(self) -> None:
        if self.slow_convergence_iterations < 1:
            raise ValueError(
                f"slow_convergence_iterations must be >= 1, got {self.slow_convergence_iterations}"
            )


# =============================================================================
# MODEL
# =============================================================================


class CashBuyingPowerModel:
    """Buying power модель для cash-счетов.

    Состояния между вызовами не хранит. Портфель передаётся снапшотом;
    вызывающая сторона отвечает за то, чтобы он не менялся во время вызова.
    """

    def __init__(self, config: CashBuyingPowerConfig | None = None):
        """
        Args:
            config: конфигурация модели (опционально, используется default)
        """
        self.config = config or CashBuyingPowerConfig()

    # -------------------------------------------------------------------------
    # Leverage
    # -------------------------------------------------------------------------

    def get_leverage(self, security: Security) -> Decimal:
        # Cash-счёт не имеет плеча
        return ONE

    def set_leverage(self, security: Security, leverage: Decimal) -> None:
        # Ничего не делает: плечо всегда 1
        logger.debug("Ignoring leverage %s for %s on cash account", leverage, security.symbol)

    # -------------------------------------------------------------------------
    # Affordability
    # -------------------------------------------------------------------------

    def check_buying_power_for_order(
        self,
        portfolio: PortfolioSnapshot,
        security: Security,
        order: Order,
    ) -> BuyingPowerCheckResult:
        """Проверка buying power с деталями (причина, резерв, комиссия)."""
        return check_buying_power_for_order(
            portfolio,
            security,
            order,
            slow_convergence_iterations=self.config.slow_convergence_iterations,
        )

    def has_sufficient_buying_power_for_order(
        self,
        portfolio: PortfolioSnapshot,
        security: Security,
        order: Order,
    ) -> bool:
        """True если buying power достаточно для исполнения ордера."""
        return self.check_buying_power_for_order(portfolio, security, order).is_sufficient

    # -------------------------------------------------------------------------
    # Sizing
    # -------------------------------------------------------------------------

    def solve_maximum_order_quantity(
        self,
        portfolio: PortfolioSnapshot,
        security: Security,
        target_portfolio_value: Decimal,
    ) -> MaxQuantityResult:
        """Поиск максимального количества с деталями (причина, итерации)."""
        return solve_maximum_order_quantity(
            portfolio,
            security,
            target_portfolio_value,
            slow_convergence_iterations=self.config.slow_convergence_iterations,
        )

    def get_maximum_order_quantity_for_target_value(
        self,
        portfolio: PortfolioSnapshot,
        security: Security,
        target_portfolio_value: Decimal,
    ) -> Decimal:
        """Максимальное знаковое количество рыночного ордера.

        Args:
            portfolio: снапшот портфеля
            security: инструмент
            target_portfolio_value: желаемая стоимость позиции в валюте счёта

        Returns:
            Количество, кратное lot size (< 0 для продажи), либо 0
        """
        return self.solve_maximum_order_quantity(
            portfolio, security, target_portfolio_value
        ).quantity

    # -------------------------------------------------------------------------
    # Buying power
    # -------------------------------------------------------------------------

    def get_reserved_buying_power_for_position(self, security: Security) -> Decimal:
        # Валюта покупается полностью, позиция не занимает buying power
        return ZERO

    def get_buying_power(
        self,
        portfolio: PortfolioSnapshot,
        security: Security,
        direction: OrderDirection,
    ) -> Decimal:
        """Buying power для сделки.

        Args:
            portfolio: снапшот портфеля
            security: инструмент
            direction: направление сделки

        Returns:
            BUY: сколько единиц можно купить на quote валюту;
            SELL: сколько единиц base валюты можно продать;
            0 для HOLD, неподдерживаемого инструмента или без цены
        """
        pair = security.currency_pair
        if pair is None:
            return ZERO

        unit_price = get_unit_price(security)
        if unit_price == ZERO:
            return ZERO

        if direction == OrderDirection.BUY:
            quote_position = portfolio.cash_book.get(pair.quote_currency).amount
            return safe_divide(quote_position, unit_price)

        if direction == OrderDirection.SELL:
            return portfolio.cash_book.get(pair.base_currency).amount

        return ZERO
