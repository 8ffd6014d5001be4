"""Leaderboard scoring: composite score is streak + weekly points."""

from typing import Iterable, NamedTuple

from streak_quest.models.player import Player


class LeaderboardEntry(NamedTuple):
    address: str
    streak: int
    points: int

    @property
    def score(self) -> int:
        return self.streak + self.points

    def as_dict(self) -> dict:
        return {"address": self.address, "streak": self.streak, "points": self.points}


def rank_players(players: Iterable[Player]) -> list[LeaderboardEntry]:
    """Sort by score, highest first. Ties keep the input (insertion) order."""
    entries = [
        LeaderboardEntry(p.address, p.current_streak, p.weekly_base_points) for p in players
    ]
    return sorted(entries, key=lambda e: e.score, reverse=True)
