"""Exact decimal amounts for stakes, bounties, rewards and slashes.

Every node must derive byte-identical distributions, so economic values
never pass through binary floating point inside the core. Floats handed
in by a host are converted through their shortest ``repr`` so that
``0.7`` becomes ``Decimal("0.7")`` rather than its binary expansion.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

ZERO = Decimal(0)


def to_amount(value: Any) -> Decimal:
    """Convert a host-supplied number to a finite ``Decimal``.

    Accepts ``Decimal``, ``int``, ``float`` and numeric strings. Booleans
    are rejected even though they are ``int`` subclasses.

    Raises:
        ValueError: If the value is not a finite number.
    """
    if isinstance(value, bool):
        raise ValueError(f"boolean is not an amount: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"not a numeric amount: {value!r}") from None
    else:
        raise ValueError(f"unsupported amount type {type(value).__name__}")

    if not amount.is_finite():
        raise ValueError(f"amount must be finite: {value!r}")
    return amount


def is_integral(amount: Decimal) -> bool:
    return amount == amount.to_integral_value()


def amount_to_wire(amount: Decimal) -> int | str:
    """Render an amount for JSON: integral values as ints, others as plain decimal strings."""
    if is_integral(amount):
        return int(amount)
    return format(amount.normalize(), "f")
