"""
Citizen Platform Ledger - Checked Arithmetic
=============================================
Fixed-width unsigned integer operations that fail closed.

Rules:
- All counters, supplies, balances and payouts are u64
- Integer arithmetic only, no floats
- Leaving [0, U64_MAX] raises ArithmeticOverflowError, never wraps
- Division truncates toward zero
"""

from __future__ import annotations

from core.ledger.errors import ArithmeticOverflowError

U64_MAX = 2**64 - 1


def require_u64(value: int, field_name: str = "value") -> int:
    """Validate that value is an int inside the u64 range."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(
            f"{field_name} must be int, got {type(value).__name__}."
        )
    if value < 0 or value > U64_MAX:
        raise ValueError(f"{field_name} must be within 0..{U64_MAX}, got {value}.")
    return value


def checked_add(left: int, right: int) -> int:
    result = left + right
    if left < 0 or right < 0 or result > U64_MAX:
        raise ArithmeticOverflowError("add", left, right)
    return result


def checked_sub(left: int, right: int) -> int:
    if left < 0 or right < 0 or right > left:
        raise ArithmeticOverflowError("sub", left, right)
    return left - right


def checked_mul(left: int, right: int) -> int:
    result = left * right
    if left < 0 or right < 0 or result > U64_MAX:
        raise ArithmeticOverflowError("mul", left, right)
    return result


def checked_div(left: int, right: int) -> int:
    if left < 0 or right <= 0:
        raise ArithmeticOverflowError("div", left, right)
    return left // right
