"""Round economics: submission assessment, distribution, peer validation."""

from reverie_task.consensus.assessment import (
    ACCEPT_THRESHOLD,
    AssessmentResult,
    SubmissionAssessor,
    assess_submission,
    evaluate_submission,
    has_changes,
    tally_votes,
)
from reverie_task.consensus.distribution import (
    SLASH_FRACTION,
    DistributionCalculator,
    DistributionConfig,
    build_distribution,
    compute_reward,
    compute_slash,
)
from reverie_task.consensus.equality import distributions_equal, mismatched_candidates
from reverie_task.consensus.validator import DistributionValidator, parse_peer_distribution

__all__ = [
    "ACCEPT_THRESHOLD",
    "AssessmentResult",
    "DistributionCalculator",
    "DistributionConfig",
    "DistributionValidator",
    "SLASH_FRACTION",
    "SubmissionAssessor",
    "assess_submission",
    "build_distribution",
    "compute_reward",
    "compute_slash",
    "distributions_equal",
    "evaluate_submission",
    "has_changes",
    "mismatched_candidates",
    "parse_peer_distribution",
    "tally_votes",
]
