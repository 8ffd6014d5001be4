"""Epoch arithmetic: week index, per-player day windows and countdowns.

All timestamps are integer unix seconds. Nothing here touches the database.
"""

import time
from dataclasses import dataclass


@dataclass(frozen=True)
class GameRules:
    launch_timestamp: int
    week_length: int = 7 * 24 * 3600
    day_length: int = 24 * 3600
    daily_task_cap: int = 3


def now() -> int:
    return int(time.time())


def week_index_of(rules: GameRules, t: int) -> int:
    """Week containing ``t``; timestamps before launch belong to week 0."""
    if t <= rules.launch_timestamp:
        return 0
    return (t - rules.launch_timestamp) // rules.week_length


def week_end(rules: GameRules, week: int) -> int:
    return rules.launch_timestamp + (week + 1) * rules.week_length


def day_boundary_crossed(rules: GameRules, last_reset_time: int, t: int) -> bool:
    """True once a full day has passed since the player's window opened."""
    return t - last_reset_time >= rules.day_length


def is_consecutive_day(rules: GameRules, last_check_in_time: int, t: int) -> bool:
    """True when no whole day window fits between the last completion and ``t``."""
    return t - last_check_in_time < 2 * rules.day_length


def time_until_week_end(rules: GameRules, t: int) -> int:
    return max(0, week_end(rules, week_index_of(rules, t)) - t)


def time_until_day_reset(rules: GameRules, last_reset_time: int, t: int) -> int:
    if last_reset_time <= 0:
        return 0
    return max(0, last_reset_time + rules.day_length - t)
