"""Helpers для построения снапшотов портфеля в тестах."""

from decimal import Decimal

from src.core.domain import (
    Cash,
    CashBook,
    FeeModel,
    Order,
    PortfolioSnapshot,
    Security,
    SecurityType,
    SymbolProperties,
    ZeroFeeModel,
)


def D(value) -> Decimal:
    """Decimal из строки/int (короткая запись для тестов)."""
    return Decimal(str(value))


def make_pair(
    symbol: str = "BTCUSD",
    base: str = "BTC",
    quote: str = "USD",
    price="100",
    quote_rate="1",
    lot_size="1",
    fee_model: FeeModel | None = None,
    security_type: SecurityType = SecurityType.CRYPTO,
    contract_multiplier="1",
) -> Security:
    """Helper: создает инструмент с валютной парой base/quote."""
    return Security(
        symbol=symbol,
        security_type=security_type,
        price=D(price),
        quote_currency=Cash(symbol=quote, conversion_rate=D(quote_rate)),
        base_currency=base,
        symbol_properties=SymbolProperties(
            quote_currency=quote,
            lot_size=D(lot_size),
            contract_multiplier=D(contract_multiplier),
        ),
        fee_model=fee_model or ZeroFeeModel(),
    )


def make_equity(symbol: str = "SPY", price="100", fee_model: FeeModel | None = None) -> Security:
    """Helper: создает акцию (без валютной пары)."""
    return Security(
        symbol=symbol,
        security_type=SecurityType.EQUITY,
        price=D(price),
        quote_currency=Cash(symbol="USD", conversion_rate=D(1)),
        symbol_properties=SymbolProperties(quote_currency="USD"),
        fee_model=fee_model or ZeroFeeModel(),
    )


def make_cash_book(balances: dict, account_currency: str = "USD") -> CashBook:
    """Helper: CashBook из {code: (amount, conversion_rate)}."""
    return CashBook.from_entries(
        (
            Cash(symbol=code, amount=D(amount), conversion_rate=D(rate))
            for code, (amount, rate) in balances.items()
        ),
        account_currency=account_currency,
    )


def make_portfolio(
    balances: dict,
    securities: list[Security],
    open_orders: list[Order] | None = None,
    account_currency: str = "USD",
) -> PortfolioSnapshot:
    """Helper: снапшот портфеля."""
    return PortfolioSnapshot(
        cash_book=make_cash_book(balances, account_currency=account_currency),
        securities={security.symbol: security for security in securities},
        open_orders=open_orders or [],
    )
