from streak_quest.crud.players import crud_player
from streak_quest.crud.tasks import crud_task
from streak_quest.crud.world_states import crud_world_state
from streak_quest.crud.week_closures import crud_week_closure
from streak_quest.crud.game_events import crud_game_event

__all__ = [
    "crud_player",
    "crud_task",
    "crud_world_state",
    "crud_week_closure",
    "crud_game_event",
]
