"""Shared fakes of the host runtime."""

from __future__ import annotations

from typing import Any

import pytest

from reverie_task.protocol import (
    DistributionHost,
    GameServerClient,
    InMemoryRoundData,
    PlayerCache,
)


class FakeHost(DistributionHost):
    def __init__(self, decider: bool = True) -> None:
        self.decider = decider
        self.uploads: list[tuple[dict[str, Any], int]] = []
        self.on_chain: list[int] = []
        self.distribution_votes: dict[str, bool] = {}
        self.node_votes: dict[str, bool] = {}
        self.distribution_submitters: list[str] = []
        self.node_submissions: dict[str, str] = {}

    async def upload_distribution_list(self, entries, round):
        self.uploads.append((dict(entries), round))
        return self.decider

    async def submit_distribution_list_on_chain(self, round):
        self.on_chain.append(round)
        return {"round": round, "status": "ok"}

    async def validate_and_vote_on_distribution_list(self, validate, round):
        for submitter in self.distribution_submitters:
            self.distribution_votes[submitter] = await validate(submitter, round)

    async def validate_and_vote_on_nodes(self, validate, round):
        for node, value in self.node_submissions.items():
            self.node_votes[node] = await validate(value, round)


class FakeCache(PlayerCache):
    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    async def store_list_keys(self):
        return list(self.data)

    async def store_get(self, key):
        return self.data.get(key)

    async def store_set(self, key, value):
        self.data[key] = value


class FakeGameServer(GameServerClient):
    def __init__(self, players: list[dict[str, Any]] | None = None, fail: bool = False) -> None:
        self.players = players or []
        self.fail = fail
        self.updates: list[list[dict[str, Any]]] = []

    async def get_player_data(self):
        if self.fail:
            raise ConnectionError("game server unreachable")
        return self.players

    async def update_player_data(self, records):
        if self.fail:
            raise ConnectionError("game server unreachable")
        self.updates.append(records)


@pytest.fixture
def round_data() -> InMemoryRoundData:
    return InMemoryRoundData()


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def cache() -> FakeCache:
    return FakeCache()


@pytest.fixture
def make_host():
    return FakeHost


@pytest.fixture
def make_game_server():
    return FakeGameServer
