"""
Numerical Safeguards — Decimal primitives для денежных расчётов

Модуль обеспечивает численную устойчивость расчётов buying power:
- Безопасное деление Decimal с fallback вместо DivisionByZero
- Округление количеств вниз до кратного lot size
- Валидация параметров (положительность, конечность)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль никогда не происходит (возвращается fallback)
2. Любое количество после round_down_to_lot точно кратно lot size
3. NaN/Inf никогда не пропагируют (заменяются на fallback)
4. Все операции детерминированы и воспроизводимы (Decimal, не float)
"""

from decimal import Decimal, InvalidOperation
from typing import Final

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

ZERO: Final[Decimal] = Decimal(0)
ONE: Final[Decimal] = Decimal(1)

# Basis points в одной единице (10 bps = 0.10%)
BPS_PER_UNIT: Final[Decimal] = Decimal(10000)


# =============================================================================
# КОНВЕРСИЯ
# =============================================================================


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """
    Конверсия числа в Decimal.

    float конвертируется через str(), чтобы 0.1 стало Decimal("0.1"),
    а не двоичным приближением.

    Args:
        value: Исходное значение

    Returns:
        Decimal представление

    Raises:
        ValueError: Если значение не может быть представлено как Decimal
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Cannot convert {value!r} to Decimal") from e


def is_valid_decimal(value: Decimal) -> bool:
    """
    Проверка, является ли Decimal конечным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное
    """
    return value.is_finite()


def sanitize_decimal(value: Decimal, fallback: Decimal = ZERO) -> Decimal:
    """
    Замена NaN/Inf на fallback.

    Examples:
        >>> sanitize_decimal(Decimal("10"))
        Decimal('10')
        >>> sanitize_decimal(Decimal("NaN"))
        Decimal('0')
    """
    if is_valid_decimal(value):
        return value
    return fallback


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def safe_divide(
    numerator: Decimal,
    denominator: Decimal,
    fallback: Decimal = ZERO,
) -> Decimal:
    """
    Безопасное деление Decimal.

    В отличие от float-версии здесь нет epsilon-защиты знаменателя:
    Decimal точен, поэтому fallback возвращается только при точном нуле
    (или NaN/Inf во входах).

    Args:
        numerator: Числитель
        denominator: Знаменатель
        fallback: Значение при делении на ноль (default: 0)

    Returns:
        numerator / denominator или fallback

    Examples:
        >>> safe_divide(Decimal("10"), Decimal("4"))
        Decimal('2.5')
        >>> safe_divide(Decimal("10"), Decimal("0"))
        Decimal('0')
    """
    if not is_valid_decimal(numerator) or not is_valid_decimal(denominator):
        return fallback

    if denominator == ZERO:
        return fallback

    return sanitize_decimal(numerator / denominator, fallback=fallback)


def bps_to_fraction(bps: Decimal) -> Decimal:
    """
    Конверсия basis points в долю.

    Args:
        bps: Basis points (например, 25 bps = 0.25%)

    Returns:
        Доля (например, 25 bps → 0.0025)
    """
    return bps / BPS_PER_UNIT


# =============================================================================
# КВАНТОВАНИЕ ПО LOT SIZE
# =============================================================================


def round_down_to_lot(quantity: Decimal, lot_size: Decimal) -> Decimal:
    """
    Округление количества к нулю до ближайшего кратного lot size.

    Отбрасывает остаток от деления на lot size. Для Decimal оператор %
    сохраняет знак делимого, поэтому отрицательные количества тоже
    округляются к нулю.

    Args:
        quantity: Количество (может быть отрицательным)
        lot_size: Минимальный шаг количества (> 0)

    Returns:
        Количество, точно кратное lot_size

    Raises:
        ValueError: Если lot_size <= 0

    Examples:
        >>> round_down_to_lot(Decimal("49.7"), Decimal("1"))
        Decimal('49.0')
        >>> round_down_to_lot(Decimal("1234"), Decimal("1000"))
        Decimal('1000')
    """
    validate_positive(lot_size, "lot_size")
    return quantity - quantity % lot_size


def lot_step(amount: Decimal, lot_size: Decimal) -> Decimal:
    """
    Шаг уменьшения количества: amount, округлённый вниз до lot size,
    но не меньше одного лота.

    Гарантирует строгое уменьшение количества на каждой итерации
    solver'а, то есть его завершение.

    Args:
        amount: Желаемый шаг (в единицах количества)
        lot_size: Минимальный шаг количества (> 0)

    Returns:
        Шаг >= lot_size, кратный lot_size
    """
    step = round_down_to_lot(amount, lot_size)
    if step < lot_size:
        step = lot_size
    return step


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_positive(value: Decimal, name: str) -> None:
    """
    Валидация, что значение положительное и конечное.

    Raises:
        ValueError: Если value <= 0 или NaN/Inf
    """
    if not is_valid_decimal(value):
        raise ValueError(f"{name} must be a finite number, got {value}")

    if value <= ZERO:
        raise ValueError(f"{name} must be positive, got {value}")

