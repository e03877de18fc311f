"""
Contract Validation Module

Модуль для валидации и загрузки JSON контрактов (снапшоты портфеля).
"""

from .snapshot_loader import (
    SNAPSHOT_SCHEMA_PATH,
    build_fee_model,
    load_portfolio_snapshot,
    load_snapshot_schema,
    validate_portfolio_snapshot,
)

__all__ = [
    "SNAPSHOT_SCHEMA_PATH",
    "load_snapshot_schema",
    "validate_portfolio_snapshot",
    "load_portfolio_snapshot",
    "build_fee_model",
]
