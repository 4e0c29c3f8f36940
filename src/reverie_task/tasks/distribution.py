"""Round orchestration for distribution lists: publish ours, vote on theirs.

Runs once per round. Publication is fire-and-forget: a failed upload is
logged and left to the next round, never retried here.
"""

from __future__ import annotations

import logging

from reverie_task.consensus.distribution import DistributionCalculator
from reverie_task.consensus.validator import DistributionValidator
from reverie_task.protocol.interfaces import DistributionHost

logger = logging.getLogger(__name__)


class DistributionPublisher:
    """Submits this node's distribution list and audits peers' lists."""

    def __init__(
        self,
        host: DistributionHost,
        calculator: DistributionCalculator,
        validator: DistributionValidator | None = None,
    ) -> None:
        self.host = host
        self.calculator = calculator
        self.validator = validator or DistributionValidator(calculator.data_access, calculator)

    async def submit_distribution_list(self, round: int) -> None:
        """Compute the round's list and hand it to the host.

        Nothing is published for an empty list. The on-chain confirmation
        only follows when the host reports this node as the round's decider.
        """
        logger.info("Submitting distribution list for round %d", round)
        try:
            distribution = self.calculator.compute(round)
            if distribution.is_empty:
                logger.info("Empty distribution list for round %d, nothing to submit", round)
                return

            decider = await self.host.upload_distribution_list(distribution.to_wire(), round)
            if not decider:
                logger.info("Not the decider for round %d, skipping on-chain submission", round)
                return

            response = await self.host.submit_distribution_list_on_chain(round)
            logger.info("Distribution list for round %d submitted on chain: %s", round, response)
        except Exception:
            logger.exception("Error submitting distribution list for round %d", round)

    async def validate_distribution(self, submitter_id: str, round: int) -> bool:
        """Voting callback handed to the host."""
        return self.validator.validate(submitter_id, round)

    async def audit_distribution(self, round: int) -> None:
        logger.info("Auditing distribution lists for round %d", round)
        try:
            await self.host.validate_and_vote_on_distribution_list(
                self.validate_distribution, round,
            )
        except Exception:
            logger.exception("Error auditing distribution lists for round %d", round)
