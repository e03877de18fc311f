"""
Snapshot Loader — построение PortfolioSnapshot из JSON данных

Данные сначала проверяются против schema/portfolio_snapshot.json, затем
собираются immutable Pydantic модели. Числа принимаются как JSON numbers
или строки ("1.10") и конвертируются в Decimal без потери точности.

Курс quote валюты инструмента берётся из cash book (как и баланс).
Открытые ордера передаются в PortfolioSnapshot как dict: вариант ордера
выбирается по полю "type".
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Final

import jsonschema
from jsonschema import Draft202012Validator

from src.core.domain.cash_book import Cash, CashBook
from src.core.domain.fees import ConstantFeeModel, FeeModel, PercentageFeeModel, ZeroFeeModel
from src.core.domain.portfolio import PortfolioSnapshot
from src.core.domain.security import Security, SecurityType, SymbolProperties
from src.core.math.numerical_safeguards import to_decimal


logger = logging.getLogger(__name__)

SNAPSHOT_SCHEMA_PATH: Final[Path] = Path(__file__).parent / "schema" / "portfolio_snapshot.json"

_FEE_MODELS: Dict[str, type] = {
    "zero": ZeroFeeModel,
    "constant": ConstantFeeModel,
    "percentage": PercentageFeeModel,
}

_DECIMAL_ORDER_FIELDS = ("quantity", "limit_price", "stop_price")


# =============================================================================
# SCHEMA
# =============================================================================


def load_snapshot_schema(path: Path = SNAPSHOT_SCHEMA_PATH) -> Dict[str, Any]:
    """
    Загрузка JSON Schema снапшота с meta-validation.

    Args:
        path: Путь к файлу схемы

    Returns:
        Схема как dict

    Raises:
        FileNotFoundError: Если файл схемы не найден
        ValueError: Если файл не является валидной JSON Schema
    """
    with open(path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    try:
        Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}") from e

    return schema


# Схема загружается один раз при импорте
_SNAPSHOT_VALIDATOR: Final = Draft202012Validator(load_snapshot_schema())


def validate_portfolio_snapshot(data: Dict[str, Any]) -> None:
    """
    Валидация portfolio_snapshot данных.

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
    """
    _SNAPSHOT_VALIDATOR.validate(data)


# =============================================================================
# BUILDERS
# =============================================================================


def build_fee_model(data: Dict[str, Any] | None) -> FeeModel:
    """
    Модель комиссий из {"kind": ..., ...}.

    Args:
        data: Описание комиссии (None — без комиссий)

    Returns:
        Экземпляр модели комиссий

    Raises:
        ValueError: Если kind неизвестен
    """
    if data is None:
        return ZeroFeeModel()

    model_class = _FEE_MODELS.get(data.get("kind"))
    if model_class is None:
        raise ValueError(f"Unknown fee kind: {data.get('kind')!r}")
    return model_class.model_validate(data)


def _build_security(data: Dict[str, Any], cash_book: CashBook) -> Security:
    quote_code = data["quote_currency"]
    quote_cash = cash_book.get(quote_code)

    properties = SymbolProperties(
        description=data.get("description", ""),
        quote_currency=quote_code,
        contract_multiplier=to_decimal(data.get("contract_multiplier", 1)),
        minimum_price_variation=to_decimal(data.get("minimum_price_variation", "0.01")),
        lot_size=to_decimal(data.get("lot_size", 1)),
    )
    return Security(
        symbol=data["symbol"],
        security_type=SecurityType(data["security_type"]),
        price=to_decimal(data["price"]),
        quote_currency=quote_cash,
        base_currency=data.get("base_currency"),
        symbol_properties=properties,
        fee_model=build_fee_model(data.get("fee")),
    )


def _order_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    # JSON numbers → Decimal через str, "type" остаётся для выбора варианта
    payload = dict(data)
    for key in _DECIMAL_ORDER_FIELDS:
        if key in payload:
            payload[key] = to_decimal(payload[key])
    return payload


def load_portfolio_snapshot(data: Dict[str, Any]) -> PortfolioSnapshot:
    """
    Валидация и построение PortfolioSnapshot.

    Args:
        data: Сериализованный снапшот (dict из JSON)

    Returns:
        Immutable PortfolioSnapshot

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют схеме
        pydantic.ValidationError: Если данные нарушают инварианты моделей
    """
    validate_portfolio_snapshot(data)

    cash_book = CashBook.from_entries(
        (
            Cash(
                symbol=entry["symbol"],
                amount=to_decimal(entry["amount"]),
                conversion_rate=to_decimal(entry["conversion_rate"]),
            )
            for entry in data["cash"]
        ),
        account_currency=data["account_currency"],
    )
    securities = {
        entry["symbol"]: _build_security(entry, cash_book) for entry in data["securities"]
    }

    portfolio = PortfolioSnapshot(
        cash_book=cash_book,
        securities=securities,
        open_orders=[_order_payload(entry) for entry in data["open_orders"]],
    )
    logger.debug(
        "Loaded portfolio snapshot: %d currencies, %d securities, %d open orders",
        len(cash_book.cash),
        len(securities),
        len(portfolio.open_orders),
    )
    return portfolio
