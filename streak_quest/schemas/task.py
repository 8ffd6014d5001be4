from typing import Any, Optional
from pydantic import AliasChoices, BaseModel, Field
from streak_quest.models.task import TaskType

MAX_TASK_REWARD = 10**9


class TaskBase(BaseModel):
    description: str = Field(..., min_length=1, max_length=2000)
    task_type: TaskType = TaskType.onchain
    # Bounded so accrued points stay far below the 64-bit column limit
    base_points_reward: int = Field(..., gt=0, le=MAX_TASK_REWARD)
    metadata: Optional[dict[str, Any]] = None


class TaskCreate(TaskBase):
    pass


class TaskBatchCreate(BaseModel):
    tasks: list[TaskCreate] = Field(..., min_length=1)


class TaskUpdate(BaseModel):
    is_active: bool


class TaskResponse(BaseModel):
    model_config = {"from_attributes": True}
    id: int = Field(..., validation_alias=AliasChoices("position", "id"))
    week: int
    description: str
    task_type: TaskType
    base_points_reward: int
    is_active: bool
    metadata: Optional[dict[str, Any]] = Field(
        None, validation_alias=AliasChoices("task_metadata", "metadata")
    )
