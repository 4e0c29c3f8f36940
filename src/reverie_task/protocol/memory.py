"""In-memory ``RoundDataAccess`` for embedding and tests."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from reverie_task.protocol.interfaces import RoundDataAccess


class InMemoryRoundData(RoundDataAccess):
    """Round state held in plain dicts, keyed by round number.

    Any node can be simulated by loading the same contents; two instances
    with identical contents must yield identical distributions.
    """

    def __init__(self) -> None:
        self._submissions: dict[int, dict[str, Any]] = {}
        self._votes: dict[tuple[int, str], list[Any]] = {}
        self._stakes: dict[int, Any] = {}
        self._published: dict[tuple[str, int], Any] = {}

    def set_submissions(self, round: int, submissions: Mapping[str, Any]) -> None:
        self._submissions[round] = dict(submissions)

    def add_vote(self, round: int, candidate: str, vote: Any) -> None:
        self._votes.setdefault((round, candidate), []).append(vote)

    def set_votes(self, round: int, candidate: str, votes: Sequence[Any]) -> None:
        self._votes[(round, candidate)] = list(votes)

    def set_stake_and_bounty(self, round: int, snapshot: Any) -> None:
        self._stakes[round] = snapshot

    def publish(self, submitter_id: str, round: int, payload: Any) -> None:
        """Record a peer's published distribution list."""
        self._published[(submitter_id, round)] = payload

    # ── RoundDataAccess ──────────────────────────────────────────────

    def get_submissions_for_round(self, round: int) -> Mapping[str, Any] | None:
        return self._submissions.get(round)

    def get_audit_votes(self, round: int, candidate: str) -> Sequence[Any]:
        return list(self._votes.get((round, candidate), []))

    def get_stake_and_bounty(self, round: int) -> Any | None:
        return self._stakes.get(round)

    def fetch_peer_distribution_list(self, submitter_id: str, round: int) -> Any | None:
        return self._published.get((submitter_id, round))
