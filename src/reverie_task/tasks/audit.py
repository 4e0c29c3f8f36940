"""Audit of peers' player-data submissions.

A peer's submission is the JSON array of player records it cached for
the round. It is valid iff it matches this node's own cache record for
record, in key order.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from reverie_task.crypto.hashing import canonical_json
from reverie_task.protocol.interfaces import DistributionHost, PlayerCache
from reverie_task.tasks.submission import PlayerTaskConfig, fetch_cached_player_data

logger = logging.getLogger(__name__)


def compare_player_data(cached: list[Any], submitted: Any) -> bool:
    """Element-wise comparison of two record lists by canonical JSON."""
    if not isinstance(submitted, list):
        return False
    if len(cached) != len(submitted):
        return False
    return all(
        canonical_json(ours) == canonical_json(theirs)
        for ours, theirs in zip(cached, submitted)
    )


class PlayerDataAuditor:
    """Votes on peers' player-data submissions."""

    def __init__(
        self,
        host: DistributionHost,
        cache: PlayerCache,
        config: PlayerTaskConfig | None = None,
    ) -> None:
        self.host = host
        self.cache = cache
        self.config = config or PlayerTaskConfig()

    async def validate_node(self, submission_value: str, round: int) -> bool:
        logger.info("Validating submission for round %d", round)
        try:
            cached = await fetch_cached_player_data(self.cache, self.config.cache_key_prefix)
            submitted = json.loads(submission_value)
            return compare_player_data(cached, submitted)
        except Exception:
            logger.exception("Error validating submission for round %d", round)
            return False

    async def audit_task(self, round: int) -> None:
        try:
            await self.host.validate_and_vote_on_nodes(self.validate_node, round)
        except Exception:
            logger.exception("Error auditing submissions for round %d", round)
