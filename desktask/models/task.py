# desktask/models/task.py
from sqlalchemy import DateTime, false
from sqlalchemy.types import TypeDecorator
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone

# UI 에 실패 대신 돌려주는 빈 태스크의 시각
MIN_UTC = datetime.min.replace(tzinfo=timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """tz 없는 값은 UTC 로 간주하고, 나머지는 UTC 로 변환한다."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    항상 tz 가 붙은 UTC datetime 으로 저장/조회.
    Postgres 는 TIMESTAMPTZ, sqlite 는 UTC 시각 문자열로 저장되고 읽을 때 UTC 를 다시 붙인다.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return as_utc(value)

    def process_result_value(self, value, dialect):
        return as_utc(value)


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    text: str = Field(nullable=False)
    completed: bool = Field(default=False, sa_column_kwargs={"server_default": false()})
    due_date: Optional[datetime] = Field(default=None, sa_type=UTCDateTime)
    priority: str = Field(default="", nullable=True)   # low / medium / high 등, enum 강제 없음
    created_at: datetime = Field(default_factory=utcnow, nullable=False, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False, sa_type=UTCDateTime)

    @classmethod
    def empty(cls) -> "Task":
        """UI 쪽에 실패 대신 돌려주는 빈 태스크 (id=0)."""
        return cls(
            id=0,
            text="",
            completed=False,
            due_date=None,
            priority="",
            created_at=MIN_UTC,
            updated_at=MIN_UTC,
        )
