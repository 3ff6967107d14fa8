# desktask/main.py
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from desktask.dependencies.desk import get_desk_app
from desktask.desk import DeskApp
from desktask.routers import settings, task

log = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173,http://localhost:34115"


def _setup_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _cors_origins() -> list[str]:
    raw = os.getenv("DESKTASK_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [o.strip() for o in raw.split(",") if o.strip()]


def create_app(desk: Optional[DeskApp] = None) -> FastAPI:
    """
    desk 를 넘기면 그대로 쓰고 (테스트), 없으면 시작 시점에 설정을 읽어 즉시 초기화한다.
    시작 시 설정/DB 연결 실패는 치명적이라 서버가 뜨지 않는다.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = False
        if getattr(app.state, "desk", None) is None:
            app.state.desk = DeskApp.bootstrap()
            owned = True
        yield
        if owned:
            app.state.desk.close()

    app = FastAPI(title="desktask", version="0.1.0", lifespan=lifespan)
    app.state.desk = desk

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(task.router)
    app.include_router(settings.router)

    @app.get("/health/db")
    def health_db(desk: DeskApp = Depends(get_desk_app)):
        try:
            with desk.repo.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {"ok": True}
        except Exception:
            # 내부 상세는 로그에 남기고, 외부엔 일반화된 메시지
            log.exception("health check failed")
            raise HTTPException(status_code=500, detail="Database connection failed")

    return app


_setup_logging()
app = create_app()
