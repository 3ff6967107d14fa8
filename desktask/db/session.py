# desktask/db/session.py
import logging
import time
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import text
from sqlalchemy.engine import Engine, make_url
from sqlmodel import Session, create_engine

from desktask.core.config import mask_url

log = logging.getLogger(__name__)

# 연결 확인 재시도 (시작 시에만)
CONNECT_ATTEMPTS = 3
CONNECT_RETRY_DELAY = 1.0

# 커넥션 풀: idle 5 + overflow 5 = 최대 10, 수명 5초
POOL_SIZE = 5
MAX_OVERFLOW = 5
POOL_RECYCLE = 5


def create_db_engine(url: str, *, echo: bool = False) -> Engine:
    if make_url(url).get_backend_name() == "sqlite":
        # 테스트/로컬용. TestClient 가 다른 스레드에서 접근하므로 check_same_thread 해제
        engine = create_engine(url, echo=echo, connect_args={"check_same_thread": False})
    else:
        engine = create_engine(
            url,
            echo=echo,
            pool_pre_ping=True,
            pool_recycle=POOL_RECYCLE,
            pool_size=POOL_SIZE,
            max_overflow=MAX_OVERFLOW,
        )
    log.info("DB URL 적용: %s", mask_url(url))
    return engine


def wait_for_db(
    engine: Engine,
    attempts: int = CONNECT_ATTEMPTS,
    delay: float = CONNECT_RETRY_DELAY,
) -> None:
    """SELECT 1 로 연결을 확인한다. 마지막 시도까지 실패하면 그 에러를 그대로 올린다."""
    for attempt in range(1, attempts + 1):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            log.info("database reachable (attempt %d/%d)", attempt, attempts)
            return
        except Exception as e:
            log.warning("database ping failed (attempt %d/%d): %s", attempt, attempts, e)
            if attempt == attempts:
                raise
            time.sleep(delay)


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """
    리포지토리 메서드마다 쓰는 짧은 세션.
    커밋 후에도 객체를 그대로 돌려줄 수 있게 expire_on_commit=False.
    """
    s = Session(engine, expire_on_commit=False)
    try:
        yield s
    finally:
        s.close()
