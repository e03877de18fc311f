"""
PortfolioSnapshot — Снапшот состояния счёта

Immutable Pydantic модель, содержащая всё, что читает cash buying power
модель за один вызов:
- CashBook (балансы по валютам)
- Словарь инструментов symbol → Security
- Список открытых (неисполненных) ордеров по всему счёту; dict ордера
  превращается в конкретный вариант по полю "type"

Снапшот принадлежит вызывающей стороне. Модель его не кеширует и не
изменяет; согласованность данных на время вызова обеспечивает caller
(read lock или гарантия отсутствия конкурентных записей).
"""

from typing import Callable

from pydantic import BaseModel, Field, model_validator

from .cash_book import CashBook
from .orders import Order, TaggedOrder
from .security import Security


class PortfolioSnapshot(BaseModel):
    """Снапшот портфеля cash-счёта."""

    cash_book: CashBook = Field(default_factory=CashBook, description="Балансы по валютам")
    securities: dict[str, Security] = Field(
        default_factory=dict, description="Инструменты портфеля (symbol → Security)"
    )
    open_orders: list[TaggedOrder] = Field(
        default_factory=list, description="Открытые ордера по всему счёту"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_security_keys(self) -> "PortfolioSnapshot":
        """Ключ словаря securities должен совпадать с Security.symbol."""
        for symbol, security in self.securities.items():
            if symbol != security.symbol:
                raise ValueError(
                    f"securities key {symbol!r} does not match symbol {security.symbol!r}"
                )
        return self

    def get_security(self, symbol: str) -> Security | None:
        return self.securities.get(symbol)

    def get_open_orders(
        self, predicate: Callable[[Order], bool] | None = None
    ) -> list[Order]:
        """
        Открытые ордера, удовлетворяющие фильтру.

        Args:
            predicate: Фильтр ордеров (None — все ордера)

        Returns:
            Список ордеров в исходном порядке
        """
        if predicate is None:
            return list(self.open_orders)
        return [order for order in self.open_orders if predicate(order)]
