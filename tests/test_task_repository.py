from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from desktask.core.errors import SettingsNotFoundError, TaskNotFoundError
from desktask.models.settings import Settings
from desktask.models.task import Task


def _task(text_: str, **kw) -> Task:
    return Task(text=text_, priority=kw.pop("priority", "normal"), **kw)


def test_create_writes_back_generated_id(repo):
    first = repo.create(_task("first"))
    second = repo.create(_task("second"))

    assert first.id is not None
    assert second.id > first.id
    assert first.created_at == first.updated_at
    assert repo.get_by_id(first.id).text == "first"


def test_create_ignores_caller_supplied_id(repo):
    repo.create(_task("one"))
    created = repo.create(Task(id=1, text="two"))
    assert created.id == 2


def test_next_id_on_empty_table_is_one(repo):
    assert repo.get_next_id() == 1


def test_next_id_is_max_plus_one(repo):
    ids = [repo.create(_task(f"t{i}")).id for i in range(3)]
    repo.delete(ids[0])
    assert repo.get_next_id() == max(ids) + 1


def test_get_all_is_newest_first(repo, fixed_clock):
    for name in ("t1", "t2", "t3"):
        repo.create(_task(name))

    assert [t.text for t in repo.get_all()] == ["t3", "t2", "t1"]


def test_get_all_empty_is_not_an_error(repo):
    assert repo.get_all() == []


def test_update_rewrites_row_and_refreshes_updated_at(repo, fixed_clock):
    task = repo.create(_task("draft", due_date=datetime(2025, 6, 1, tzinfo=timezone.utc)))
    created_at = task.created_at

    task.text = "final"
    task.completed = True
    task.priority = "high"
    task.due_date = None
    repo.update(task)

    stored = repo.get_by_id(task.id)
    assert stored.text == "final"
    assert stored.completed is True
    assert stored.priority == "high"
    assert stored.due_date is None
    assert stored.created_at == created_at
    assert stored.updated_at > created_at


def test_updated_at_strictly_increases_even_with_frozen_clock(repo, monkeypatch):
    frozen = datetime(2025, 1, 1, 9, 0, 0, tzinfo=timezone.utc)
    monkeypatch.setattr("desktask.repositories.task_repository.utcnow", lambda: frozen)
    task = repo.create(_task("same instant"))

    before = task.updated_at
    repo.update(task)
    assert task.updated_at > before


def test_update_missing_task_raises_not_found(repo):
    with pytest.raises(TaskNotFoundError) as exc:
        repo.update(Task(id=404, text="ghost"))
    assert exc.value.task_id == 404


def test_delete_missing_task_raises_not_found(repo):
    with pytest.raises(TaskNotFoundError):
        repo.delete(12345)


def test_get_by_id_missing_raises_not_found(repo):
    with pytest.raises(TaskNotFoundError):
        repo.get_by_id(1)


def test_get_settings_creates_default_row_once(repo, engine):
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM settings"))

    first = repo.get_settings()
    second = repo.get_settings()

    assert first.dark_mode is False
    assert first.id == second.id
    with engine.connect() as conn:
        assert conn.execute(text("SELECT COUNT(*) FROM settings")).scalar_one() == 1


def test_update_settings_persists_flag(repo):
    settings = repo.get_settings()
    settings.dark_mode = True
    repo.update_settings(settings)

    assert repo.get_settings().dark_mode is True


def test_update_settings_unknown_row(repo):
    with pytest.raises(SettingsNotFoundError):
        repo.update_settings(Settings(id=999, dark_mode=True))


def test_storage_errors_propagate_unchanged(repo, engine):
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE tasks"))

    with pytest.raises(OperationalError):
        repo.get_all()


def test_timestamps_come_back_as_aware_utc(repo):
    task = repo.create(_task("stamped"))
    stored = repo.get_by_id(task.id)

    assert stored.created_at.tzinfo is not None
    assert stored.created_at.utcoffset() == timedelta(0)
    assert stored.updated_at.utcoffset() == timedelta(0)


def test_due_date_offset_is_kept_as_the_same_instant(repo):
    seoul = timezone(timedelta(hours=9))
    task = repo.create(_task("call", due_date=datetime(2025, 12, 1, 10, 0, tzinfo=seoul)))

    stored = repo.get_by_id(task.id)
    assert stored.due_date == datetime(2025, 12, 1, 1, 0, tzinfo=timezone.utc)
    assert stored.due_date.utcoffset() == timedelta(0)


def test_naive_due_date_is_taken_as_utc(repo):
    task = repo.create(_task("naive", due_date=datetime(2025, 3, 1, 8, 0)))
    assert repo.get_by_id(task.id).due_date == datetime(2025, 3, 1, 8, 0, tzinfo=timezone.utc)
