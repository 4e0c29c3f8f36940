"""Abstract interfaces the host task runtime implements.

The economic core never talks to the network, the chain or storage
directly. It reads round data through ``RoundDataAccess`` and the task
orchestration hands results to ``DistributionHost``. Player-data caching
goes through ``PlayerCache`` and ``GameServerClient``.

Round-data reads are synchronous: the host serves them from state it has
already synchronised for the round. Everything that crosses the network
(publication, voting, game server, cache) is a coroutine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

# validate(submitter_id, round) -> bool
DistributionCheck = Callable[[str, int], Awaitable[bool]]
# validate(submission_value, round) -> bool
SubmissionCheck = Callable[[str, int], Awaitable[bool]]


class RoundDataAccess(ABC):
    """Read-only view of one node's round state."""

    @abstractmethod
    def get_submissions_for_round(self, round: int) -> Mapping[str, Any] | None:
        """Candidate → submission record for a round, or None if unavailable."""

    @abstractmethod
    def get_audit_votes(self, round: int, candidate: str) -> Sequence[Any]:
        """Ordered audit votes cast against a candidate's submission.

        Each vote is an ``AuditVote`` or a mapping with an ``is_valid`` key.
        Returns an empty sequence when no peer has voted yet.
        """

    @abstractmethod
    def get_stake_and_bounty(self, round: int) -> Any | None:
        """Stake list and bounty pool for a round, or None if unavailable.

        May return a ``StakeSnapshot`` or a mapping with ``stake_list`` and
        ``bounty_amount_per_round`` keys.
        """

    @abstractmethod
    def fetch_peer_distribution_list(self, submitter_id: str, round: int) -> Any | None:
        """Distribution list published by a peer, or None if not found.

        May be raw JSON (``str``/``bytes``) or an already-decoded mapping.
        """


class DistributionHost(ABC):
    """Publication and voting surface of the host runtime."""

    @abstractmethod
    async def upload_distribution_list(self, entries: Mapping[str, Any], round: int) -> bool:
        """Upload a distribution list; truthy if this node is the round's decider."""

    @abstractmethod
    async def submit_distribution_list_on_chain(self, round: int) -> Any:
        """Confirm the uploaded distribution list on chain."""

    @abstractmethod
    async def validate_and_vote_on_distribution_list(
        self, validate: DistributionCheck, round: int,
    ) -> None:
        """Run ``validate`` against peers' distribution lists and cast votes."""

    @abstractmethod
    async def validate_and_vote_on_nodes(self, validate: SubmissionCheck, round: int) -> None:
        """Run ``validate`` against peers' submissions and cast audit votes."""


class PlayerCache(ABC):
    """Node-local key-value store used to stage player records between rounds."""

    @abstractmethod
    async def store_list_keys(self) -> list[str]:
        """All keys currently held."""

    @abstractmethod
    async def store_get(self, key: str) -> str | None:
        """Stored value, or None if absent."""

    @abstractmethod
    async def store_set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""


class GameServerClient(ABC):
    """HTTP surface of the game server."""

    @abstractmethod
    async def get_player_data(self) -> list[dict[str, Any]]:
        """Current player records."""

    @abstractmethod
    async def update_player_data(self, records: list[dict[str, Any]]) -> None:
        """Push cached player records back to the game database."""
