"""
CashBook — Денежные позиции счёта по валютам

Immutable Pydantic модели:
- Cash: баланс одной валюты и курс конверсии в валюту счёта
- CashBook: словарь currency code → Cash с конверсией между валютами

Курс конверсии (conversion_rate) — стоимость одной единицы валюты
в валюте счёта (account currency). Для самой валюты счёта курс = 1.
"""

from decimal import Decimal
from typing import Iterable

from pydantic import BaseModel, Field, model_validator

from src.core.math.numerical_safeguards import ONE, ZERO, safe_divide


# =============================================================================
# CASH
# =============================================================================


class Cash(BaseModel):
    """
    Баланс одной валюты.

    amount может быть любого знака, но для cash-счёта трактуется
    как доступные средства.
    """

    symbol: str = Field(..., min_length=1, description="Код валюты (например, 'USD')")
    amount: Decimal = Field(default=ZERO, description="Количество валюты на счёте")
    conversion_rate: Decimal = Field(
        default=ZERO, ge=0, description="Стоимость 1 единицы в валюте счёта"
    )

    model_config = {"frozen": True}

    def value_in_account_currency(self) -> Decimal:
        """Стоимость баланса в валюте счёта."""
        return self.amount * self.conversion_rate


# =============================================================================
# CASH BOOK
# =============================================================================


class CashBook(BaseModel):
    """
    Книга денежных позиций счёта.

    Неизвестная валюта через get() возвращает нулевой баланс:
    с нулевым курсом, либо с курсом 1 для валюты счёта.
    Индексация book[code] ведёт себя как словарь и бросает KeyError.
    """

    account_currency: str = Field(default="USD", min_length=1, description="Валюта счёта")
    cash: dict[str, Cash] = Field(default_factory=dict, description="code → Cash")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_keys_match_symbols(self) -> "CashBook":
        """Ключ словаря должен совпадать с Cash.symbol."""
        for code, entry in self.cash.items():
            if code != entry.symbol:
                raise ValueError(f"cash key {code!r} does not match symbol {entry.symbol!r}")
        account_cash = self.cash.get(self.account_currency)
        if account_cash is not None and account_cash.conversion_rate != ONE:
            raise ValueError(
                f"account currency {self.account_currency} must have conversion_rate 1, "
                f"got {account_cash.conversion_rate}"
            )
        return self

    @classmethod
    def from_entries(cls, entries: Iterable[Cash], account_currency: str = "USD") -> "CashBook":
        """Построение CashBook из списка Cash."""
        return cls(
            account_currency=account_currency,
            cash={entry.symbol: entry for entry in entries},
        )

    def __getitem__(self, code: str) -> Cash:
        return self.cash[code]

    def __contains__(self, code: object) -> bool:
        return code in self.cash

    def get(self, code: str) -> Cash:
        """
        Баланс валюты или нулевой баланс для неизвестной валюты.

        Args:
            code: Код валюты

        Returns:
            Cash из книги, либо Cash(amount=0) с курсом 1 для валюты счёта
            и курсом 0 для остальных
        """
        entry = self.cash.get(code)
        if entry is not None:
            return entry
        rate = ONE if code == self.account_currency else ZERO
        return Cash(symbol=code, amount=ZERO, conversion_rate=rate)

    def convert(self, amount: Decimal, source_code: str, destination_code: str) -> Decimal:
        """
        Конверсия суммы между валютами по текущим курсам.

        amount * rate(source) / rate(destination)

        Args:
            amount: Сумма в source валюте
            source_code: Исходная валюта
            destination_code: Целевая валюта

        Returns:
            Сумма в destination валюте; 0 если курс destination неизвестен
        """
        if source_code == destination_code:
            return amount
        source = self.get(source_code)
        destination = self.get(destination_code)
        return safe_divide(amount * source.conversion_rate, destination.conversion_rate)

    def convert_to_account_currency(self, amount: Decimal, source_code: str) -> Decimal:
        """Конверсия суммы в валюту счёта."""
        return self.convert(amount, source_code, self.account_currency)

    def total_value_in_account_currency(self) -> Decimal:
        """Суммарная стоимость всех балансов в валюте счёта."""
        return sum((entry.value_in_account_currency() for entry in self.cash.values()), ZERO)
