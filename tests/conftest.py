import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from desktask.core.config import AppConfig, DatabaseConfig  # noqa: E402
from desktask.db.bootstrap import bootstrap_schema  # noqa: E402
from desktask.db.session import create_db_engine  # noqa: E402
from desktask.desk import DeskApp  # noqa: E402
from desktask.repositories.task_repository import TaskRepository  # noqa: E402
from desktask.services.task_service import TaskService  # noqa: E402


@pytest.fixture(autouse=True)
def _no_database_url(monkeypatch):
    # 개발자 환경의 DATABASE_URL 이 테스트 DB 를 덮어쓰지 않도록
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("DESKTASK_CONFIG", raising=False)


@pytest.fixture()
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'desktask.db'}"


@pytest.fixture()
def config(db_url: str) -> AppConfig:
    return AppConfig(database=DatabaseConfig(url=db_url))


@pytest.fixture()
def engine(db_url: str):
    engine = create_db_engine(db_url)
    bootstrap_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def repo(engine) -> TaskRepository:
    return TaskRepository(engine)


@pytest.fixture()
def service(repo: TaskRepository) -> TaskService:
    return TaskService(repo)


@pytest.fixture()
def desk(service: TaskService) -> DeskApp:
    return DeskApp(service=service)


@pytest.fixture()
def fixed_clock(monkeypatch):
    """utcnow 를 1초씩 증가하는 가짜 시계로 교체."""
    state = {"now": datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)}

    def _tick() -> datetime:
        state["now"] += timedelta(seconds=1)
        return state["now"]

    monkeypatch.setattr("desktask.repositories.task_repository.utcnow", _tick)
    monkeypatch.setattr("desktask.services.task_service.utcnow", _tick)
    return state
