"""Player data task: stage game-server records on the node each round.

``task`` pulls current player records from the game server and caches
each one under ``player_data_<username>``. ``submit_task`` pushes every
cached record back so the game database reflects what the network holds.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from reverie_task.crypto.hashing import canonical_json
from reverie_task.models.round_data import PlayerRecord
from reverie_task.protocol.interfaces import GameServerClient, PlayerCache

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "player_data_"


@dataclass
class PlayerTaskConfig:
    """Where player records live in the node cache."""

    cache_key_prefix: str = CACHE_KEY_PREFIX

    def key_for(self, username: str) -> str:
        return f"{self.cache_key_prefix}{username}"


async def fetch_cached_player_data(
    cache: PlayerCache,
    prefix: str = CACHE_KEY_PREFIX,
) -> list[dict[str, Any]]:
    """All cached player records, ordered by cache key.

    Unreadable entries are skipped. A failing cache yields an empty list.
    """
    try:
        keys = sorted(k for k in await cache.store_list_keys() if k.startswith(prefix))
        records: list[dict[str, Any]] = []
        for key in keys:
            value = await cache.store_get(key)
            if not value:
                continue
            try:
                records.append(json.loads(value))
            except ValueError:
                logger.warning("Skipping unreadable cache entry %s", key)
        return records
    except Exception:
        logger.exception("Error reading player data from cache")
        return []


class PlayerDataTask:
    """Moves player records between the game server and the node cache."""

    def __init__(
        self,
        client: GameServerClient,
        cache: PlayerCache,
        config: PlayerTaskConfig | None = None,
    ) -> None:
        self.client = client
        self.cache = cache
        self.config = config or PlayerTaskConfig()

    async def task(self, round: int) -> None:
        """Fetch player records and cache each one."""
        logger.info("Starting player data task for round %d", round)
        records = await self.get_player_data_from_client()
        for record in records:
            await self.cache_player_data(record)

    async def get_player_data_from_client(self) -> list[PlayerRecord]:
        try:
            raw = await self.client.get_player_data()
        except Exception:
            logger.exception("Error fetching player data from game server")
            return []

        records: list[PlayerRecord] = []
        for item in raw or []:
            try:
                records.append(PlayerRecord.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping malformed player record: %s", e)
        return records

    async def cache_player_data(self, record: PlayerRecord) -> None:
        key = self.config.key_for(record.username)
        try:
            await self.cache.store_set(key, canonical_json(record.model_dump()))
            logger.debug("Cached player data for %s", record.username)
        except Exception:
            logger.exception("Error caching player data for %s", record.username)

    async def fetch_cached_player_data(self) -> list[dict[str, Any]]:
        return await fetch_cached_player_data(self.cache, self.config.cache_key_prefix)

    async def submit_task(self, round: int) -> None:
        """Send every cached record back to the game server."""
        try:
            records = await self.fetch_cached_player_data()
            logger.info(
                "Sending %d cached player records to game server for round %d",
                len(records),
                round,
            )
            await self.client.update_player_data(records)
        except Exception:
            logger.exception("Error sending player data to game server for round %d", round)
