"""Round-scoped inputs read from the host task runtime.

A round's submissions, audit votes and stake snapshot are read fresh for
every computation and never mutated by this package.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from reverie_task.models.amount import ZERO, to_amount

# A candidate's submission for a round: an opaque record, possibly absent.
Submission = dict[str, Any] | None


class AuditVote(BaseModel):
    """A peer's judgement on one candidate's submission in a round."""

    is_valid: bool = Field(description="True if the voter found the submission valid")
    voter_id: str = Field(default="", description="Public key of the voting peer")


class StakeSnapshot(BaseModel):
    """Stake list and bounty pool as seen in the task state for a round."""

    stake_list: dict[str, Decimal] = Field(
        description="Candidate public key → escrowed stake",
    )
    bounty_amount_per_round: Decimal = Field(
        description="Pool divided among accepted candidates",
    )

    @field_validator("stake_list", mode="before")
    @classmethod
    def _coerce_stakes(cls, value: Any) -> dict[str, Decimal]:
        if not isinstance(value, Mapping):
            raise ValueError("stake_list must be a mapping")
        stakes: dict[str, Decimal] = {}
        for candidate, raw in value.items():
            amount = to_amount(raw)
            if amount < 0:
                raise ValueError(f"negative stake for {candidate}: {amount}")
            stakes[str(candidate)] = amount
        return stakes

    @field_validator("bounty_amount_per_round", mode="before")
    @classmethod
    def _coerce_bounty(cls, value: Any) -> Decimal:
        amount = to_amount(value)
        if amount < 0:
            raise ValueError(f"negative bounty: {amount}")
        return amount

    def stake_of(self, candidate: str) -> Decimal:
        """Stake for a candidate, zero if the candidate has none on record."""
        return self.stake_list.get(candidate, ZERO)


class PlayerRecord(BaseModel):
    """A game player's state as served by the game server.

    Only ``username`` is required; every other field (points, level,
    relics, ...) is carried through untouched.
    """

    model_config = ConfigDict(extra="allow")

    username: str
