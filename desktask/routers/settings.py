# desktask/routers/settings.py
from fastapi import APIRouter, Depends

from desktask.dependencies.desk import get_desk_app
from desktask.desk import DeskApp
from desktask.schemas.task import DarkMode

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("/dark-mode", response_model=DarkMode)
def get_dark_mode(desk: DeskApp = Depends(get_desk_app)):
    return DarkMode(dark_mode=desk.get_dark_mode())


# 저장 실패 시에도 요청한 값을 그대로 돌려준다
@router.put("/dark-mode", response_model=DarkMode)
def set_dark_mode(body: DarkMode, desk: DeskApp = Depends(get_desk_app)):
    return DarkMode(dark_mode=desk.set_dark_mode(body.dark_mode))
