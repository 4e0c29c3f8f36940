"""Host runtime interfaces consumed by the round-economics core."""

from reverie_task.protocol.interfaces import (
    DistributionCheck,
    DistributionHost,
    GameServerClient,
    PlayerCache,
    RoundDataAccess,
    SubmissionCheck,
)
from reverie_task.protocol.memory import InMemoryRoundData

__all__ = [
    "DistributionCheck",
    "DistributionHost",
    "GameServerClient",
    "InMemoryRoundData",
    "PlayerCache",
    "RoundDataAccess",
    "SubmissionCheck",
]
