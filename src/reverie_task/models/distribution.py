"""Distribution list: the per-round candidate → amount mapping.

Positive amounts are rewards credited to a candidate; negative amounts
are slashes deducted from the candidate's stake. This is the artifact a
node publishes for a round and the one peers recompute and compare.

Wire format is a flat JSON object. Integral amounts are JSON integers and
fractional amounts are plain decimal strings, so no binary float ever
sits between two nodes' views of the same list. Incoming payloads may
use JSON numbers or numeric strings.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from reverie_task.crypto.hashing import canonical_json, content_digest
from reverie_task.models.amount import ZERO, amount_to_wire, to_amount


class MalformedDistributionError(ValueError):
    """Raised when a payload cannot be read as a distribution list."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite constant {name} in distribution payload")


class DistributionList(BaseModel):
    """Candidate → signed amount for one round."""

    entries: dict[str, Decimal] = Field(
        default_factory=dict,
        description="Candidate public key → reward (positive) or slash (negative)",
    )

    @field_validator("entries", mode="before")
    @classmethod
    def _coerce_entries(cls, value: Any) -> dict[str, Decimal]:
        if not isinstance(value, Mapping):
            raise ValueError("distribution entries must be a mapping")
        entries: dict[str, Decimal] = {}
        for candidate, raw in value.items():
            if not isinstance(candidate, str):
                raise ValueError(f"candidate key must be a string, got {candidate!r}")
            entries[candidate] = to_amount(raw)
        return entries

    # ── Mapping-like access ──────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, candidate: object) -> bool:
        return candidate in self.entries

    def __getitem__(self, candidate: str) -> Decimal:
        return self.entries[candidate]

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def as_dict(self) -> dict[str, Decimal]:
        return dict(self.entries)

    def rewards(self) -> dict[str, Decimal]:
        """Entries crediting a candidate."""
        return {c: a for c, a in self.entries.items() if a > 0}

    def slashes(self) -> dict[str, Decimal]:
        """Entries deducting from a candidate's stake."""
        return {c: a for c, a in self.entries.items() if a < 0}

    @property
    def total_rewarded(self) -> Decimal:
        return sum(self.rewards().values(), ZERO)

    @property
    def total_slashed(self) -> Decimal:
        return -sum(self.slashes().values(), ZERO)

    # ── Wire format ──────────────────────────────────────────────────

    def to_wire(self) -> dict[str, int | str]:
        return {c: amount_to_wire(a) for c, a in self.entries.items()}

    def to_json(self) -> str:
        """Canonical JSON: sorted keys, compact separators."""
        return canonical_json(self.to_wire())

    @property
    def digest(self) -> str:
        """SHA-256 of the canonical JSON encoding."""
        return content_digest(self.to_wire())

    @classmethod
    def from_mapping(cls, obj: Any) -> DistributionList:
        """Build from an already-decoded payload.

        Raises:
            MalformedDistributionError: If ``obj`` is not a string-keyed
                mapping of finite numeric amounts.
        """
        if isinstance(obj, DistributionList):
            return obj
        if not isinstance(obj, Mapping):
            msg = f"distribution payload must be an object, got {type(obj).__name__}"
            raise MalformedDistributionError(msg)
        try:
            return cls(entries=obj)
        except ValidationError as e:
            raise MalformedDistributionError(str(e)) from e

    @classmethod
    def from_json(cls, raw: str | bytes) -> DistributionList:
        """Parse a published distribution list.

        JSON floats are decoded straight to ``Decimal`` so that no
        precision is lost between the peer's text and the comparison.

        Raises:
            MalformedDistributionError: If ``raw`` is not valid JSON or
                does not describe a distribution list.
        """
        try:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            obj = json.loads(raw, parse_float=Decimal, parse_constant=_reject_constant)
        except ValueError as e:
            raise MalformedDistributionError(f"unreadable distribution payload: {e}") from e
        return cls.from_mapping(obj)
