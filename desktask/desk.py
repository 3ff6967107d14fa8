# desktask/desk.py
from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import List, Optional

from desktask.core.config import AppConfig, build_db_url, load_config
from desktask.db.bootstrap import bootstrap_schema
from desktask.db.session import create_db_engine, wait_for_db
from desktask.models.task import Task
from desktask.repositories.task_repository import TaskRepository
from desktask.services.task_service import TaskService

log = logging.getLogger(__name__)


def open_repository(config: AppConfig) -> TaskRepository:
    """엔진 생성 → 연결 확인(재시도) → 스키마 부트스트랩. 실패는 그대로 올린다."""
    engine = create_db_engine(build_db_url(config.database))
    try:
        wait_for_db(engine)
        bootstrap_schema(engine)
    except Exception:
        engine.dispose()
        raise
    return TaskRepository(engine)


class DeskApp:
    """
    UI 가 호출하는 진입점 모음.

    진입점은 절대 예외를 올리지 않는다. 실패하면 로그만 남기고
    빈 값 / 기본값을 돌려준다. 실제 에러는 TaskService 에서 관찰할 수 있다.

    보통은 DeskApp.bootstrap(config) 로 미리 만들어 주입하고,
    아무것도 없이 DeskApp() 로 만든 경우에만 첫 호출 때 한 번 초기화한다.
    """

    def __init__(
        self,
        service: Optional[TaskService] = None,
        repo: Optional[TaskRepository] = None,
        config: Optional[AppConfig] = None,
    ):
        self.config = config
        self.repo = repo if repo is not None else (service.repo if service is not None else None)
        self.task_service = service if service is not None else (TaskService(repo) if repo is not None else None)

        self._init_lock = threading.Lock()
        self._init_done = self.task_service is not None

    @classmethod
    def bootstrap(cls, config: Optional[AppConfig] = None) -> "DeskApp":
        """시작 시점의 즉시 초기화. 설정/연결 실패는 치명적이므로 그대로 올린다."""
        if config is None:
            config = load_config()
        repo = open_repository(config)
        log.info("database initialized successfully")
        return cls(service=TaskService(repo), repo=repo, config=config)

    def ensure_initialized(self) -> None:
        """
        지연 초기화. 락으로 감싸서 동시에 불려도 딱 한 번만 실행한다.
        실패해도 다시 시도하지 않는다 (이후 호출은 전부 기본값을 돌려줌).
        """
        if self._init_done:
            return
        with self._init_lock:
            if self._init_done:
                return
            try:
                if self.config is None:
                    self.config = load_config()
                if self.repo is None:
                    self.repo = open_repository(self.config)
                if self.task_service is None:
                    self.task_service = TaskService(self.repo)
            except Exception:
                log.exception("ensure_initialized: initialization failed")
            finally:
                self._init_done = True

    def close(self) -> None:
        if self.repo is not None:
            self.repo.close()

    # ---- entry points ----

    def add_task(self, text: str, due_date: Optional[datetime] = None, priority: str = "") -> Task:
        self.ensure_initialized()
        if self.task_service is None:
            log.warning("task service unavailable in add_task")
            return Task.empty()
        try:
            return self.task_service.create_task(text, due_date, priority)
        except Exception:
            log.exception("error adding task")
            return Task.empty()

    def get_tasks(self) -> List[Task]:
        self.ensure_initialized()
        if self.task_service is None:
            log.warning("task service unavailable in get_tasks")
            return []
        try:
            tasks = self.task_service.get_all_tasks()
        except Exception:
            log.exception("error getting tasks")
            return []
        log.debug("got %d tasks", len(tasks))
        return tasks

    def toggle_task(self, task_id: int) -> List[Task]:
        self.ensure_initialized()
        if self.task_service is None:
            log.warning("task service unavailable in toggle_task")
            return []
        try:
            self.task_service.toggle_task(task_id)
        except Exception as e:
            log.warning("error toggling task %s: %s", task_id, e)
        return self.get_tasks()

    def delete_task(self, task_id: int) -> List[Task]:
        self.ensure_initialized()
        if self.task_service is None:
            log.warning("task service unavailable in delete_task")
            return []
        try:
            self.task_service.delete_task(task_id)
        except Exception as e:
            log.warning("error deleting task %s: %s", task_id, e)
        return self.get_tasks()

    def get_dark_mode(self) -> bool:
        self.ensure_initialized()
        if self.task_service is None:
            log.warning("task service unavailable in get_dark_mode")
            return False
        try:
            return self.task_service.get_dark_mode()
        except Exception:
            log.exception("error getting dark mode")
            return False

    def set_dark_mode(self, is_dark: bool) -> bool:
        self.ensure_initialized()
        if self.task_service is None:
            log.warning("task service unavailable in set_dark_mode")
            return is_dark
        try:
            return self.task_service.set_dark_mode(is_dark)
        except Exception:
            log.exception("error updating dark mode")
            return is_dark
