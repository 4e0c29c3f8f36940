"""Order-independent exact comparison of distribution lists."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from reverie_task.models.distribution import DistributionList, MalformedDistributionError

_MISSING = object()


def _as_mapping(obj: DistributionList | Mapping[str, Any]) -> Mapping[str, Any]:
    """Entries with every amount as a Decimal, whatever numeric type came in.

    Raises:
        MalformedDistributionError: If ``obj`` is not a distribution list.
    """
    return DistributionList.from_mapping(obj).entries


def distributions_equal(
    a: DistributionList | Mapping[str, Any],
    b: DistributionList | Mapping[str, Any],
) -> bool:
    """True iff both lists hold the same candidates with exactly equal amounts.

    No tolerance is applied. Amounts are exact decimals, so two nodes that
    ran the same arithmetic on the same stakes compare equal bit for bit.
    Raw mappings are read as amounts first, so ``-0.7`` equals
    ``Decimal("-0.7")``. An unreadable side is never equal.
    """
    try:
        left = _as_mapping(a)
        right = _as_mapping(b)
    except MalformedDistributionError:
        return False
    if len(left) != len(right):
        return False
    for candidate, amount in left.items():
        if right.get(candidate, _MISSING) != amount:
            return False
    return True


def mismatched_candidates(
    a: DistributionList | Mapping[str, Any],
    b: DistributionList | Mapping[str, Any],
) -> list[str]:
    """Candidates whose entry is missing from one side or differs, sorted."""
    left = _as_mapping(a)
    right = _as_mapping(b)
    keys = set(left) | set(right)
    return sorted(
        c for c in keys
        if left.get(c, _MISSING) != right.get(c, _MISSING)
    )
