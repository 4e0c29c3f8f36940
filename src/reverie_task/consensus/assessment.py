"""Submission assessment: decides whether a candidate earned the round.

Two sources of evidence, in order of preference:

1. Audit votes from peers. Each valid vote counts +1, each invalid vote
   -1. The candidate is accepted when the tally reaches
   ``ACCEPT_THRESHOLD``. With the default of 0 a tied vote accepts.

2. No votes yet. Fall back to the syntactic check: a submission is
   acceptable iff it is present and has at least one field.

Assessment is pure and never raises. Anything unreadable counts against
the candidate.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from reverie_task.models.round_data import AuditVote, Submission

# Minimum vote tally for acceptance. Ties (tally == 0) are accepted.
ACCEPT_THRESHOLD = 0


def _vote_is_valid(vote: Any) -> bool:
    if isinstance(vote, AuditVote):
        return vote.is_valid
    if isinstance(vote, Mapping):
        return vote.get("is_valid") is True
    return False


def tally_votes(votes: Sequence[Any] | None) -> int:
    """Sum of +1 per valid vote and -1 per invalid or unreadable vote."""
    if not votes:
        return 0
    return sum(1 if _vote_is_valid(v) else -1 for v in votes)


def has_changes(submission: Any) -> bool:
    """Syntactic acceptability: a present, non-empty record."""
    return isinstance(submission, Mapping) and len(submission) > 0


@dataclass
class AssessmentResult:
    """Outcome of assessing one candidate's submission."""

    candidate: str
    accepted: bool
    tally: int = 0
    vote_count: int = 0
    used_votes: bool = False
    reason: str = ""


def evaluate_submission(
    candidate: str,
    submission: Submission,
    votes: Sequence[Any] | None,
    threshold: int = ACCEPT_THRESHOLD,
) -> AssessmentResult:
    """Assess a submission and explain the decision."""
    try:
        vote_list = list(votes) if votes else []
    except TypeError:
        return AssessmentResult(candidate, accepted=False, reason="unreadable votes")

    if vote_list:
        tally = tally_votes(vote_list)
        accepted = tally >= threshold
        verdict = "accepted" if accepted else "rejected"
        return AssessmentResult(
            candidate=candidate,
            accepted=accepted,
            tally=tally,
            vote_count=len(vote_list),
            used_votes=True,
            reason=f"{verdict}: vote tally {tally:+d} over {len(vote_list)} votes",
        )

    if has_changes(submission):
        return AssessmentResult(candidate, accepted=True, reason="accepted: non-empty submission")
    return AssessmentResult(candidate, accepted=False, reason="rejected: empty or missing submission")


def assess_submission(
    candidate: str,
    submission: Submission,
    votes: Sequence[Any] | None,
    threshold: int = ACCEPT_THRESHOLD,
) -> bool:
    """True if the candidate's submission is accepted for the round."""
    return evaluate_submission(candidate, submission, votes, threshold).accepted


class SubmissionAssessor:
    """Stateless assessor bound to an acceptance threshold."""

    def __init__(self, threshold: int = ACCEPT_THRESHOLD) -> None:
        self.threshold = threshold

    def assess(self, candidate: str, submission: Submission, votes: Sequence[Any] | None) -> bool:
        return assess_submission(candidate, submission, votes, self.threshold)

    def evaluate(
        self, candidate: str, submission: Submission, votes: Sequence[Any] | None,
    ) -> AssessmentResult:
        return evaluate_submission(candidate, submission, votes, self.threshold)
