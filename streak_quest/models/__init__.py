from streak_quest.models.base import Base, TimestampMixin, WeiAmount
from streak_quest.models.player import Player
from streak_quest.models.task import QuestTask, TaskType
from streak_quest.models.world_state import WorldState, WORLD_STATE_ID
from streak_quest.models.week_closure import WeekClosure, Payout, ClosureStatus
from streak_quest.models.game_event import GameEvent, GameEventType

__all__ = [
    "Base",
    "TimestampMixin",
    "WeiAmount",
    "Player",
    "QuestTask",
    "TaskType",
    "WorldState",
    "WORLD_STATE_ID",
    "WeekClosure",
    "Payout",
    "ClosureStatus",
    "GameEvent",
    "GameEventType",
]
