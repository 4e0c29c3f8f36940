"""Data models for round economics: submissions, votes, stakes, distribution lists."""

from reverie_task.models.amount import amount_to_wire, to_amount
from reverie_task.models.distribution import DistributionList, MalformedDistributionError
from reverie_task.models.round_data import AuditVote, PlayerRecord, StakeSnapshot, Submission

__all__ = [
    "AuditVote",
    "DistributionList",
    "MalformedDistributionError",
    "PlayerRecord",
    "StakeSnapshot",
    "Submission",
    "amount_to_wire",
    "to_amount",
]
