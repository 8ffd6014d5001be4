from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from streak_quest.crud.base import CRUDBase
from streak_quest.models.task import QuestTask
from streak_quest.schemas.task import TaskCreate, TaskUpdate
from streak_quest.services.errors import NotFound


class CRUDTask(CRUDBase[QuestTask, TaskCreate, TaskUpdate]):
    async def get_tasks(self, db: AsyncSession, week: int) -> Sequence[QuestTask]:
        """Full ordered task list for a week."""
        result = await db.execute(
            select(QuestTask).where(QuestTask.week == week).order_by(QuestTask.position)
        )
        return result.scalars().all()

    async def get_task(self, db: AsyncSession, week: int, task_id: int) -> QuestTask:
        result = await db.execute(
            select(QuestTask).where(QuestTask.week == week, QuestTask.position == task_id)
        )
        task = result.scalar_one_or_none()
        if task is None:
            raise NotFound(f"Task {task_id} not found in week {week}")
        return task

    async def add_task(self, db: AsyncSession, week: int, obj_in: TaskCreate) -> QuestTask:
        """Append a task to the week's list; its id is its position."""
        result = await db.execute(
            select(func.count(QuestTask.id)).where(QuestTask.week == week)
        )
        position = result.scalar_one()
        return await self.create(
            db,
            obj_in={
                "week": week,
                "position": position,
                "description": obj_in.description,
                "task_type": obj_in.task_type,
                "base_points_reward": obj_in.base_points_reward,
                "is_active": True,
                "task_metadata": obj_in.metadata,
            },
        )

    async def set_active(
        self, db: AsyncSession, week: int, task_id: int, is_active: bool
    ) -> QuestTask:
        task = await self.get_task(db, week, task_id)
        task.is_active = is_active
        await db.flush()
        return task


crud_task = CRUDTask(QuestTask)
