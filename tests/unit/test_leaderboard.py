"""Leaderboard ordering: streak + weekly points, highest first, stable on ties."""

import pytest

from streak_quest.models.player import Player
from streak_quest.services import game_engine
from streak_quest.services.ranking import LeaderboardEntry, rank_players


def _player(address: str, streak: int, points: int) -> Player:
    p = Player.blank(address)
    p.current_streak = streak
    p.weekly_base_points = points
    return p


def test_rank_by_composite_score():
    players = [_player("p1", 5, 100), _player("p2", 3, 150), _player("p3", 5, 90)]
    ranked = rank_players(players)
    assert [e.address for e in ranked] == ["p2", "p1", "p3"]
    assert [e.score for e in ranked] == [153, 105, 95]


def test_ties_keep_insertion_order():
    players = [_player("a", 1, 10), _player("b", 2, 9), _player("c", 0, 11)]
    assert [e.address for e in rank_players(players)] == ["a", "b", "c"]


def test_entry_as_dict():
    entry = LeaderboardEntry("0xabc", 2, 40)
    assert entry.as_dict() == {"address": "0xabc", "streak": 2, "points": 40}


@pytest.mark.asyncio
async def test_leaderboard_excludes_players_with_nothing(db):
    db.add_all(
        [
            _player("0x" + "1" * 40, 5, 100),
            _player("0x" + "2" * 40, 0, 0),
            _player("0x" + "3" * 40, 3, 150),
            _player("0x" + "4" * 40, 1, 0),
        ]
    )
    await db.flush()

    entries = await game_engine.get_leaderboard(db)

    assert [(e.address[-1], e.streak, e.points) for e in entries] == [
        ("3", 3, 150),
        ("1", 5, 100),
        ("4", 1, 0),
    ]


@pytest.mark.asyncio
async def test_empty_leaderboard(db):
    assert await game_engine.get_leaderboard(db) == []
