"""Validation of distribution lists published by peers.

A node recomputes the round's distribution from its own view of the
round and votes on whether the peer's list matches exactly:

- no list published → valid (nothing to dispute yet)
- unreadable list, or failure to recompute → invalid
- otherwise → valid iff the lists are equal
"""

from __future__ import annotations

import logging
from typing import Any

from reverie_task.consensus.distribution import DistributionCalculator
from reverie_task.consensus.equality import distributions_equal, mismatched_candidates
from reverie_task.models.distribution import DistributionList, MalformedDistributionError
from reverie_task.protocol.interfaces import RoundDataAccess

logger = logging.getLogger(__name__)


def parse_peer_distribution(raw: Any) -> DistributionList:
    """Decode a peer's published list from JSON text or a decoded mapping.

    Raises:
        MalformedDistributionError: If the payload is not a distribution list.
    """
    if isinstance(raw, (str, bytes)):
        return DistributionList.from_json(raw)
    return DistributionList.from_mapping(raw)


class DistributionValidator:
    """Votes on peers' distribution lists by recomputation."""

    def __init__(
        self,
        data_access: RoundDataAccess,
        calculator: DistributionCalculator | None = None,
    ) -> None:
        self.data_access = data_access
        self.calculator = calculator or DistributionCalculator(data_access)

    def validate(self, submitter_id: str, round: int) -> bool:
        """True if ``submitter_id``'s list for ``round`` matches ours or is absent."""
        try:
            raw = self.data_access.fetch_peer_distribution_list(submitter_id, round)
            if raw is None or raw == "" or raw == b"":
                logger.info(
                    "Distribution list from %s not found for round %d", submitter_id, round,
                )
                return True

            fetched = parse_peer_distribution(raw)
            expected = self.calculator.derive(round)
        except MalformedDistributionError as e:
            logger.warning(
                "Unreadable distribution list from %s for round %d: %s", submitter_id, round, e,
            )
            return False
        except Exception:
            logger.exception(
                "Error validating distribution list from %s for round %d", submitter_id, round,
            )
            return False

        if distributions_equal(fetched, expected):
            logger.info("Distribution list from %s validated for round %d", submitter_id, round)
            return True

        logger.warning(
            "Distribution list from %s failed validation for round %d (mismatched: %s)",
            submitter_id,
            round,
            ", ".join(mismatched_candidates(fetched, expected)),
        )
        return False
