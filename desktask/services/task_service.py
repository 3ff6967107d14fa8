# desktask/services/task_service.py
from datetime import datetime
from typing import List, Optional

from desktask.core.errors import InvalidTaskError
from desktask.models.task import Task, as_utc, utcnow
from desktask.repositories.task_repository import TaskRepository


class TaskService:
    """태스크 생성 기본값과 토글 규칙. 나머지는 저장소에 그대로 위임."""

    def __init__(self, repo: TaskRepository):
        self.repo = repo

    def create_task(self, text: str, due_date: Optional[datetime] = None, priority: str = "") -> Task:
        text = (text or "").strip()
        if not text:
            raise InvalidTaskError("task text is required")

        now = utcnow()
        task = Task(
            text=text,
            completed=False,
            due_date=as_utc(due_date),
            priority=priority or "",
            created_at=now,
            updated_at=now,
        )
        return self.repo.create(task)

    def toggle_task(self, task_id: int) -> Task:
        task = self.repo.get_by_id(task_id)
        task.completed = not task.completed
        # updated_at 은 저장소가 저장된 값보다 크게 갱신한다
        return self.repo.update(task)

    def update_task(self, task: Task) -> Task:
        # 호출자가 들고 있던 오래된 updated_at 대신 저장된 값을 기준으로 갱신
        task.updated_at = self.repo.get_by_id(task.id).updated_at
        return self.repo.update(task)

    def delete_task(self, task_id: int) -> None:
        self.repo.delete(task_id)

    def get_task(self, task_id: int) -> Task:
        return self.repo.get_by_id(task_id)

    def get_all_tasks(self) -> List[Task]:
        return self.repo.get_all()

    # ---- settings ----

    def get_dark_mode(self) -> bool:
        return self.repo.get_settings().dark_mode

    def set_dark_mode(self, value: bool) -> bool:
        settings = self.repo.get_settings()
        settings.dark_mode = bool(value)
        return self.repo.update_settings(settings).dark_mode
