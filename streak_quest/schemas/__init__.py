from streak_quest.schemas.player import (
    PlayerResponse,
    PlayerStatusResponse,
    PlayerWeekInfoResponse,
    DayResetResponse,
)
from streak_quest.schemas.task import (
    TaskCreate,
    TaskBatchCreate,
    TaskUpdate,
    TaskResponse,
)
from streak_quest.schemas.game import (
    JoinWeekRequest,
    AttesterCompleteRequest,
    GameStateResponse,
    LeaderboardResponse,
    GameEventResponse,
)
from streak_quest.schemas.treasury import PayoutResponse, WeekClosureResponse
