"""Per-round task orchestration: publication, audits, player-data staging."""

from reverie_task.tasks.audit import PlayerDataAuditor, compare_player_data
from reverie_task.tasks.distribution import DistributionPublisher
from reverie_task.tasks.submission import (
    CACHE_KEY_PREFIX,
    PlayerDataTask,
    PlayerTaskConfig,
    fetch_cached_player_data,
)

__all__ = [
    "CACHE_KEY_PREFIX",
    "DistributionPublisher",
    "PlayerDataAuditor",
    "PlayerDataTask",
    "PlayerTaskConfig",
    "compare_player_data",
    "fetch_cached_player_data",
]
