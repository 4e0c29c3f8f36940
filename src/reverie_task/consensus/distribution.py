"""Round distribution: rewards for accepted work, slashes for rejected work.

Every node runs this independently over the same round data and must
arrive at the same list, byte for byte:

1. Load the round's submissions and the stake snapshot. If either is
   unavailable there is nothing to distribute yet → empty list.
2. Assess every submitting candidate (see ``assessment``).
3. Rejected candidates forfeit ``slash_fraction`` of their stake (70% by
   default, 30% retained), recorded as a negative entry.
4. Accepted candidates split the bounty pool evenly with floor division;
   every accepted candidate receives the same integer reward. When no
   candidate is accepted the pool is left undistributed.

Arithmetic runs in a fixed decimal context so results do not depend on a
host's thread-local decimal settings. Candidates are visited in sorted
order.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Context, Decimal
from typing import Any

from reverie_task.consensus.assessment import ACCEPT_THRESHOLD, SubmissionAssessor
from reverie_task.models.amount import ZERO, is_integral, to_amount
from reverie_task.models.distribution import DistributionList
from reverie_task.models.round_data import StakeSnapshot
from reverie_task.protocol.interfaces import RoundDataAccess

logger = logging.getLogger(__name__)

# Fraction of stake forfeited by a rejected candidate
SLASH_FRACTION = Decimal("0.7")

_CONTEXT = Context(prec=60, rounding=ROUND_HALF_EVEN)

# Task-state keys a stake snapshot must carry
STAKE_SNAPSHOT_FIELDS = ("stake_list", "bounty_amount_per_round")


@dataclass
class DistributionConfig:
    """Economic parameters shared by every node in the task."""

    slash_fraction: Decimal = SLASH_FRACTION
    accept_threshold: int = ACCEPT_THRESHOLD

    def __post_init__(self) -> None:
        self.slash_fraction = to_amount(self.slash_fraction)
        threshold = to_amount(self.accept_threshold)
        if not is_integral(threshold):
            msg = f"accept_threshold must be an integer, got {self.accept_threshold!r}"
            raise ValueError(msg)
        self.accept_threshold = int(threshold)
        if not ZERO <= self.slash_fraction <= 1:
            msg = f"slash_fraction must be within [0, 1], got {self.slash_fraction}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DistributionConfig:
        """Build from plain JSON configuration; missing keys keep defaults."""
        return cls(
            slash_fraction=data.get("slash_fraction", SLASH_FRACTION),
            accept_threshold=data.get("accept_threshold", ACCEPT_THRESHOLD),
        )


def compute_slash(stake: Decimal, fraction: Decimal = SLASH_FRACTION) -> Decimal:
    """Penalty entry for a rejected candidate: ``-(stake * fraction)``."""
    slashed = _CONTEXT.multiply(stake, fraction)
    if not slashed:
        return ZERO
    return -slashed


def compute_reward(bounty: Decimal, accepted_count: int) -> int | None:
    """Per-candidate reward, ``floor(bounty / accepted_count)``.

    Returns None when nobody was accepted instead of dividing by zero.
    """
    if accepted_count <= 0:
        return None
    return int(_CONTEXT.divide_int(bounty, Decimal(accepted_count)))


def build_distribution(
    submissions: Mapping[str, Any],
    votes_by_candidate: Mapping[str, Sequence[Any]],
    snapshot: StakeSnapshot,
    config: DistributionConfig | None = None,
) -> DistributionList:
    """Derive the distribution list from already-loaded round data.

    Args:
        submissions: Candidate → submission record.
        votes_by_candidate: Candidate → audit votes (missing means no votes).
        snapshot: Stake list and bounty pool as read at the start of the round.
        config: Economic parameters (defaults if omitted).

    Returns:
        One entry per submitting candidate: the shared integer reward if
        accepted, the slash if rejected. Accepted candidates get no entry
        when the accepted set is empty (nothing to divide among).
    """
    config = config or DistributionConfig()
    assessor = SubmissionAssessor(config.accept_threshold)

    entries: dict[str, Decimal] = {}
    accepted: list[str] = []

    for candidate in sorted(submissions):
        result = assessor.evaluate(
            candidate, submissions[candidate], votes_by_candidate.get(candidate),
        )
        if result.accepted:
            accepted.append(candidate)
            continue

        slash = compute_slash(snapshot.stake_of(candidate), config.slash_fraction)
        entries[candidate] = slash
        logger.info("Penalty for %s: %s (%s)", candidate, slash, result.reason)

    reward = compute_reward(snapshot.bounty_amount_per_round, len(accepted))
    if reward is None:
        logger.info("No accepted submissions, bounty left undistributed")
    else:
        for candidate in accepted:
            entries[candidate] = Decimal(reward)

    return DistributionList(entries=entries)


def _missing_stake_fields(raw_snapshot: Any) -> bool:
    """True if a host snapshot lacks the stake list or the bounty."""
    if not isinstance(raw_snapshot, Mapping):
        return False
    return any(raw_snapshot.get(key) is None for key in STAKE_SNAPSHOT_FIELDS)


class DistributionCalculator:
    """Computes a round's distribution list from a node's view of round data."""

    def __init__(
        self,
        data_access: RoundDataAccess,
        config: DistributionConfig | None = None,
    ) -> None:
        self.data_access = data_access
        self.config = config or DistributionConfig()

    def derive(self, round: int) -> DistributionList:
        """Compute the distribution list, propagating any read or data error.

        Missing submissions or stake data are not errors: they yield an
        empty list.
        """
        submissions = self.data_access.get_submissions_for_round(round)
        if not submissions:
            logger.info("No submissions for round %d", round)
            return DistributionList()

        raw_snapshot = self.data_access.get_stake_and_bounty(round)
        if raw_snapshot is None or _missing_stake_fields(raw_snapshot):
            logger.info("No stake list for round %d", round)
            return DistributionList()
        if isinstance(raw_snapshot, StakeSnapshot):
            snapshot = raw_snapshot
        else:
            snapshot = StakeSnapshot.model_validate(raw_snapshot)

        votes = {
            candidate: self.data_access.get_audit_votes(round, candidate)
            for candidate in submissions
        }
        distribution = build_distribution(submissions, votes, snapshot, self.config)
        logger.info(
            "Distribution list for round %d: %d rewarded, %d slashed (digest=%s)",
            round,
            len(distribution.rewards()),
            len(distribution.slashes()),
            distribution.digest[:12],
        )
        return distribution

    def compute(self, round: int) -> DistributionList:
        """Compute the distribution list; any failure degrades to an empty list."""
        try:
            return self.derive(round)
        except Exception:
            logger.exception("Error generating distribution list for round %d", round)
            return DistributionList()
