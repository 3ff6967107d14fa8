# desktask/schemas/task.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from desktask.models.task import as_utc

# 프론트엔드는 camelCase (dueDate, createdAt ...) 로 주고받는다
_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── 태스크 생성 요청 ─────────────────────────────────────────────
class TaskCreate(BaseModel):
    model_config = _camel

    text: str
    due_date: Optional[datetime] = None
    priority: str = ""

    @field_validator("due_date", mode="before")
    @classmethod
    def _parse_due_date(cls, v):
        # date picker 는 "" 또는 "YYYY-MM-DD" 를 보낸다
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
            try:
                return datetime.fromisoformat(v)
            except ValueError:
                return v
        return v

    @field_validator("due_date")
    @classmethod
    def _due_date_utc(cls, v):
        # "+09:00" 같은 오프셋은 UTC 로 변환, 오프셋이 없으면 UTC 로 간주
        return as_utc(v)


# ── 태스크 조회 응답 ────────────────────────────────────────────
class TaskRead(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    text: str
    completed: bool
    due_date: Optional[datetime] = None
    priority: Optional[str] = ""
    created_at: datetime
    updated_at: datetime

    @field_validator("due_date", "created_at", "updated_at")
    @classmethod
    def _utc(cls, v):
        # 응답은 항상 오프셋이 붙은 UTC (JS new Date() 가 로컬 시간으로 읽지 않게)
        return as_utc(v)


# ── 다크 모드 ────────────────────────────────────────────────────
class DarkMode(BaseModel):
    model_config = _camel

    dark_mode: bool
