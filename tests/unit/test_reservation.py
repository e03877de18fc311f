"""
Тесты для резерва открытых ордеров

Проверяет:
1. Резерв quote валюты открытыми BUY ордерами (несколько символов, одна валюта)
2. Резерв base валюты открытыми SELL ордерами и BUY ордерами, котируемыми в ней
3. Фильтрацию по направлению и инструментам без валютной пары
4. Sentinel (0) для HOLD и неподдерживаемых инструментов
"""

from decimal import Decimal

import pytest

from src.buying_power import get_open_orders_reserved_quantity
from src.core.domain import LimitOrder, MarketOrder, OrderDirection
from tests.helpers import D, make_equity, make_pair, make_portfolio


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def eurusd():
    return make_pair("EURUSD", "EUR", "USD", price="1.1")


@pytest.fixture
def gbpusd():
    return make_pair("GBPUSD", "GBP", "USD", price="1.3")


@pytest.fixture
def btceur():
    return make_pair("BTCEUR", "BTC", "EUR", price="30000", quote_rate="1.1")


# =============================================================================
# BUY: QUOTE ВАЛЮТА
# =============================================================================


def test_buy_reserves_quote_of_other_symbol(eurusd, gbpusd):
    """Открытый BUY по EURUSD занимает USD, нужный для покупки GBPUSD"""
    open_order = LimitOrder(symbol="EURUSD", quantity=D(10), limit_price=D(50))
    portfolio = make_portfolio({"USD": (10000, 1)}, [eurusd, gbpusd], [open_order])

    reserved = get_open_orders_reserved_quantity(portfolio, gbpusd, OrderDirection.BUY)

    assert reserved == D(500)


def test_buy_reserves_open_order_loaded_from_dict(eurusd, gbpusd):
    """Ордер из JSON dict резервирует столько же, сколько LimitOrder"""
    open_order = {"symbol": "EURUSD", "quantity": "10", "type": "limit", "limit_price": "50"}
    portfolio = make_portfolio({"USD": (10000, 1)}, [eurusd, gbpusd], [open_order])

    reserved = get_open_orders_reserved_quantity(portfolio, gbpusd, OrderDirection.BUY)

    assert reserved == D(500)


def test_buy_reserves_own_symbol(eurusd):
    open_order = LimitOrder(symbol="EURUSD", quantity=D(1000), limit_price=D("1.05"))
    portfolio = make_portfolio({"USD": (10000, 1)}, [eurusd], [open_order])

    reserved = get_open_orders_reserved_quantity(portfolio, eurusd, OrderDirection.BUY)

    assert reserved == D("1050.00")


def test_buy_market_open_order_priced_by_requested_security(eurusd, gbpusd):
    """MARKET ордер оценивается по цене запрошенного инструмента"""
    open_order = MarketOrder(symbol="EURUSD", quantity=D(100))
    portfolio = make_portfolio({"USD": (10000, 1)}, [eurusd, gbpusd], [open_order])

    reserved = get_open_orders_reserved_quantity(portfolio, gbpusd, OrderDirection.BUY)

    assert reserved == D(100) * D("1.3")


def test_buy_ignores_sell_orders(eurusd, gbpusd):
    open_order = LimitOrder(symbol="EURUSD", quantity=D(-10), limit_price=D(50))
    portfolio = make_portfolio({"USD": (10000, 1)}, [eurusd, gbpusd], [open_order])

    assert get_open_orders_reserved_quantity(portfolio, gbpusd, OrderDirection.BUY) == Decimal(0)


def test_buy_sums_multiple_orders(eurusd, gbpusd):
    orders = [
        LimitOrder(id=1, symbol="EURUSD", quantity=D(10), limit_price=D(2)),
        LimitOrder(id=2, symbol="GBPUSD", quantity=D(5), limit_price=D(3)),
    ]
    portfolio = make_portfolio({"USD": (10000, 1)}, [eurusd, gbpusd], orders)

    assert get_open_orders_reserved_quantity(portfolio, gbpusd, OrderDirection.BUY) == D(35)


# =============================================================================
# SELL: BASE ВАЛЮТА
# =============================================================================


def test_sell_reserves_base_and_quote_side_buys(eurusd, btceur):
    """EUR расходуется SELL по EURUSD и BUY по BTCEUR"""
    orders = [
        LimitOrder(id=1, symbol="EURUSD", quantity=D(-100), limit_price=D("1.2")),
        LimitOrder(id=2, symbol="BTCEUR", quantity=D(2), limit_price=D(30000)),
    ]
    portfolio = make_portfolio(
        {"USD": (0, 1), "EUR": (100000, "1.1")}, [eurusd, btceur], orders
    )

    reserved = get_open_orders_reserved_quantity(portfolio, eurusd, OrderDirection.SELL)

    assert reserved == D(100) + D(60000)


def test_sell_ignores_wrong_directions(eurusd, btceur):
    orders = [
        LimitOrder(id=1, symbol="EURUSD", quantity=D(100), limit_price=D("1.2")),
        LimitOrder(id=2, symbol="BTCEUR", quantity=D(-2), limit_price=D(30000)),
    ]
    portfolio = make_portfolio({"EUR": (1000, "1.1")}, [eurusd, btceur], orders)

    assert get_open_orders_reserved_quantity(portfolio, eurusd, OrderDirection.SELL) == Decimal(0)


def test_orders_on_non_pair_securities_ignored(eurusd):
    spy = make_equity()
    orders = [MarketOrder(symbol="SPY", quantity=D(10))]
    portfolio = make_portfolio({"USD": (10000, 1)}, [eurusd, spy], orders)

    assert get_open_orders_reserved_quantity(portfolio, eurusd, OrderDirection.BUY) == Decimal(0)


def test_orders_on_unrelated_currencies_ignored(eurusd):
    usdjpy = make_pair("USDJPY", "USD", "JPY", price="150", quote_rate="0.0067")
    orders = [LimitOrder(symbol="USDJPY", quantity=D(100), limit_price=D(149))]
    portfolio = make_portfolio({"USD": (10000, 1)}, [eurusd, usdjpy], orders)

    # USDJPY BUY расходует JPY, а не USD
    assert get_open_orders_reserved_quantity(portfolio, eurusd, OrderDirection.BUY) == Decimal(0)


# =============================================================================
# SENTINELS
# =============================================================================


def test_hold_direction_is_zero(eurusd):
    orders = [LimitOrder(symbol="EURUSD", quantity=D(10), limit_price=D(1))]
    portfolio = make_portfolio({"USD": (100, 1)}, [eurusd], orders)

    assert get_open_orders_reserved_quantity(portfolio, eurusd, OrderDirection.HOLD) == Decimal(0)


def test_unsupported_security_is_zero(eurusd):
    spy = make_equity()
    orders = [LimitOrder(symbol="EURUSD", quantity=D(10), limit_price=D(1))]
    portfolio = make_portfolio({"USD": (100, 1)}, [eurusd, spy], orders)

    assert get_open_orders_reserved_quantity(portfolio, spy, OrderDirection.BUY) == Decimal(0)


def test_no_open_orders_is_zero(eurusd):
    portfolio = make_portfolio({"USD": (100, 1)}, [eurusd])

    assert get_open_orders_reserved_quantity(portfolio, eurusd, OrderDirection.BUY) == Decimal(0)
