"""Tests for round orchestration: publication, audits, player data staging."""

from __future__ import annotations

import asyncio
import json

from reverie_task.consensus import DistributionCalculator
from reverie_task.models import AuditVote
from reverie_task.tasks import (
    DistributionPublisher,
    PlayerDataAuditor,
    PlayerDataTask,
    compare_player_data,
    fetch_cached_player_data,
)


def _seed_round(data, round: int = 5) -> None:
    data.set_submissions(round, {"A": {"points": 10}, "B": {}})
    data.set_votes(round, "A", [AuditVote(is_valid=True)])
    data.set_stake_and_bounty(round, {"stake_list": {"A": 100, "B": 50}, "bounty_amount_per_round": 200})


class TestDistributionPublisher:
    def test_publishes_and_confirms(self, round_data, host):
        _seed_round(round_data)
        publisher = DistributionPublisher(host, DistributionCalculator(round_data))
        asyncio.run(publisher.submit_distribution_list(5))

        assert host.uploads == [({"A": 200, "B": -35}, 5)]
        assert host.on_chain == [5]

    def test_empty_list_not_published(self, round_data, host):
        publisher = DistributionPublisher(host, DistributionCalculator(round_data))
        asyncio.run(publisher.submit_distribution_list(5))
        assert host.uploads == []
        assert host.on_chain == []

    def test_not_decider_skips_on_chain(self, round_data, make_host):
        _seed_round(round_data)
        host = make_host(decider=False)
        publisher = DistributionPublisher(host, DistributionCalculator(round_data))
        asyncio.run(publisher.submit_distribution_list(5))
        assert len(host.uploads) == 1
        assert host.on_chain == []

    def test_upload_failure_is_swallowed(self, round_data, host):
        _seed_round(round_data)

        async def failing_upload(entries, round):
            raise ConnectionError("upload failed")

        host.upload_distribution_list = failing_upload
        publisher = DistributionPublisher(host, DistributionCalculator(round_data))
        asyncio.run(publisher.submit_distribution_list(5))
        assert host.on_chain == []

    def test_audit_votes_on_peers(self, round_data, host):
        _seed_round(round_data)
        round_data.publish("honest", 5, '{"A": 200, "B": -35}')
        round_data.publish("greedy", 5, '{"A": 235, "B": 0}')
        host.distribution_submitters = ["honest", "greedy", "silent"]

        publisher = DistributionPublisher(host, DistributionCalculator(round_data))
        asyncio.run(publisher.audit_distribution(5))

        assert host.distribution_votes == {"honest": True, "greedy": False, "silent": True}


class TestPlayerDataTask:
    def test_caches_players(self, cache, make_game_server):
        server = make_game_server([
            {"username": "ada", "points": 10, "level": 2},
            {"username": "bo", "points": 3, "relics": ["lamp"]},
            {"points": 99},
        ])
        asyncio.run(PlayerDataTask(server, cache).task(1))

        assert set(cache.data) == {"player_data_ada", "player_data_bo"}
        assert json.loads(cache.data["player_data_bo"]) == {
            "username": "bo", "points": 3, "relics": ["lamp"],
        }

    def test_server_failure_caches_nothing(self, cache, make_game_server):
        asyncio.run(PlayerDataTask(make_game_server(fail=True), cache).task(1))
        assert cache.data == {}

    def test_submit_sends_cached_records(self, cache, make_game_server):
        server = make_game_server([{"username": "bo", "points": 3}, {"username": "ada", "points": 1}])
        task = PlayerDataTask(server, cache)
        asyncio.run(task.task(1))
        asyncio.run(task.submit_task(1))

        assert server.updates == [[
            {"username": "ada", "points": 1},
            {"username": "bo", "points": 3},
        ]]

    def test_fetch_skips_foreign_and_unreadable_keys(self, cache):
        cache.data = {
            "player_data_ada": '{"username": "ada"}',
            "player_data_bad": "{not json",
            "other_key": '{"username": "x"}',
        }
        records = asyncio.run(fetch_cached_player_data(cache))
        assert records == [{"username": "ada"}]


class TestPlayerDataAuditor:
    def _cache_players(self, cache):
        cache.data = {
            "player_data_ada": '{"points":1,"username":"ada"}',
            "player_data_bo": '{"points":3,"username":"bo"}',
        }

    def test_matching_submission(self, cache, host):
        self._cache_players(cache)
        submitted = json.dumps([{"username": "ada", "points": 1}, {"username": "bo", "points": 3}])
        assert asyncio.run(PlayerDataAuditor(host, cache).validate_node(submitted, 2))

    def test_different_record(self, cache, host):
        self._cache_players(cache)
        submitted = json.dumps([{"username": "ada", "points": 100}, {"username": "bo", "points": 3}])
        assert not asyncio.run(PlayerDataAuditor(host, cache).validate_node(submitted, 2))

    def test_invalid_json(self, cache, host):
        self._cache_players(cache)
        assert not asyncio.run(PlayerDataAuditor(host, cache).validate_node("nope", 2))

    def test_audit_task_votes(self, cache, host):
        self._cache_players(cache)
        host.node_submissions = {
            "good": json.dumps([{"username": "ada", "points": 1}, {"username": "bo", "points": 3}]),
            "short": json.dumps([{"username": "ada", "points": 1}]),
        }
        asyncio.run(PlayerDataAuditor(host, cache).audit_task(2))
        assert host.node_votes == {"good": True, "short": False}


class TestComparePlayerData:
    def test_key_order_irrelevant(self):
        assert compare_player_data([{"a": 1, "b": 2}], [{"b": 2, "a": 1}])

    def test_order_of_records_matters(self):
        assert not compare_player_data([{"a": 1}, {"a": 2}], [{"a": 2}, {"a": 1}])

    def test_non_list_submission(self):
        assert not compare_player_data([], {"a": 1})
