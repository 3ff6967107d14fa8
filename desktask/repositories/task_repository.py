# desktask/repositories/task_repository.py
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import delete, func, update
from sqlalchemy.engine import Engine
from sqlmodel import select

from desktask.core.errors import SettingsNotFoundError, TaskNotFoundError
from desktask.db.session import session_scope
from desktask.models.settings import Settings
from desktask.models.task import Task, as_utc, utcnow

log = logging.getLogger(__name__)

_tasks = Task.__table__
_settings = Settings.__table__


def _touch(previous: Optional[datetime]) -> datetime:
    """updated_at 은 같은 태스크 안에서 항상 증가해야 한다 (시계 해상도 보정)."""
    now = utcnow()
    previous = as_utc(previous)
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


class TaskRepository:
    """
    tasks / settings 테이블에 대한 SQL 저장소.

    - 메서드마다 풀에서 커넥션을 빌려 한 문장만 실행한다.
    - SQLAlchemy 에러는 감싸지 않고 그대로 올린다.
    - 대상 행이 없으면 TaskNotFoundError / SettingsNotFoundError.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def close(self) -> None:
        self.engine.dispose()

    # ---- tasks ----

    def create(self, task: Task) -> Task:
        now = utcnow()
        task.id = None  # id 는 DB 가 INSERT 시점에 부여
        task.created_at = now
        task.updated_at = now

        with session_scope(self.engine) as db:
            db.add(task)
            db.commit()
            db.refresh(task)

        log.debug("task created id=%s priority=%s", task.id, task.priority)
        return task

    def update(self, task: Task) -> Task:
        task.updated_at = _touch(task.updated_at)
        stmt = (
            update(_tasks)
            .where(_tasks.c.id == task.id)
            .values(
                text=task.text,
                completed=task.completed,
                due_date=task.due_date,
                priority=task.priority,
                updated_at=task.updated_at,
            )
        )
        with self.engine.begin() as conn:
            result = conn.execute(stmt)
        if result.rowcount == 0:
            raise TaskNotFoundError(task.id)
        return task

    def delete(self, task_id: int) -> None:
        with self.engine.begin() as conn:
            result = conn.execute(delete(_tasks).where(_tasks.c.id == task_id))
        if result.rowcount == 0:
            raise TaskNotFoundError(task_id)
        log.debug("task deleted id=%s", task_id)

    def get_by_id(self, task_id: int) -> Task:
        with session_scope(self.engine) as db:
            task = db.get(Task, task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def get_all(self) -> List[Task]:
        stmt = select(Task).order_by(_tasks.c.created_at.desc(), _tasks.c.id.desc())
        with session_scope(self.engine) as db:
            return list(db.exec(stmt).all())

    def get_next_id(self) -> int:
        """현재 최대 id + 1 (비어 있으면 1). 생성 경로에서는 쓰지 않는다."""
        with session_scope(self.engine) as db:
            return int(db.exec(select(func.coalesce(func.max(_tasks.c.id) + 1, 1))).one())

    # ---- settings ----

    def get_settings(self) -> Settings:
        stmt = select(Settings).order_by(_settings.c.id).limit(1)
        with session_scope(self.engine) as db:
            settings = db.exec(stmt).first()
            if settings is None:
                settings = Settings(dark_mode=False)
                db.add(settings)
                db.commit()
                db.refresh(settings)
                log.info("settings row missing, default created id=%s", settings.id)
        return settings

    def update_settings(self, settings: Settings) -> Settings:
        stmt = (
            update(_settings)
            .where(_settings.c.id == settings.id)
            .values(dark_mode=settings.dark_mode)
        )
        with self.engine.begin() as conn:
            result = conn.execute(stmt)
        if result.rowcount == 0:
            raise SettingsNotFoundError(settings.id)
        return settings
