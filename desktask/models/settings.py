# desktask/models/settings.py
from sqlalchemy import false
from sqlmodel import SQLModel, Field
from typing import Optional


class Settings(SQLModel, table=True):
    """앱 전역 설정. 테이블에는 항상 한 행만 존재한다."""

    __tablename__ = "settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    dark_mode: bool = Field(default=False, sa_column_kwargs={"server_default": false()})
