# desktask/db/bootstrap.py
import logging

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from desktask.models.settings import Settings
from desktask.models.task import Task

log = logging.getLogger(__name__)

TABLES = [Task.__table__, Settings.__table__]


def bootstrap_schema(engine: Engine) -> None:
    """
    tasks / settings 테이블을 없으면 만들고, settings 기본 행을 하나 보장한다.
    전부 한 트랜잭션 안에서 실행되고, 중간에 실패하면 통째로 롤백된다.
    기존 컬럼 마이그레이션은 하지 않는다.
    """
    with engine.begin() as conn:
        SQLModel.metadata.create_all(conn, tables=TABLES, checkfirst=True)

        count = conn.execute(select(func.count()).select_from(Settings.__table__)).scalar_one()
        if count == 0:
            conn.execute(insert(Settings.__table__).values(dark_mode=False))
            log.info("default settings row created")

    log.info("database schema ready")
